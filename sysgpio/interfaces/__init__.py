"""Interface abstractions for sysgpio.

Defines behavioral contracts that implementations must satisfy:
- GPIOPin: pin handle shared by SysfsGPIO and FakeGPIO (abstract base class)
- ReadinessWaiter: blocking edge wait used by the edge monitor (protocol)
- Direction, Edge, HandleState, MonitorState: enumerations
"""

from sysgpio.interfaces.gpio import GPIOPin
from sysgpio.interfaces.gpio_enums import Direction, Edge, HandleState, MonitorState
from sysgpio.interfaces.readiness import ReadinessWaiter

__all__ = [
    "GPIOPin",
    "ReadinessWaiter",
    "Direction",
    "Edge",
    "HandleState",
    "MonitorState",
]
