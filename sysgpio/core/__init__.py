"""Core modules for sysgpio.

- exceptions: error taxonomy shared by every module (imported first)
- sysfs: attribute access for /sys/class/gpio control files
- sysfs_gpio: kernel-backed pin handle
- edge_stream / edge_monitor: background edge notification
- fake_gpio / simulation_graph: virtual pins wired together for tests
"""

from sysgpio.core.exceptions import (
    ClosedHandleError,
    ConfigurationError,
    ConflictError,
    DirectionError,
    FormatError,
    GPIOError,
    PinIOError,
    PropagationDepthError,
    StreamClosedError,
)
from sysgpio.core.sysfs import SysfsAttributes
from sysgpio.core.sysfs_gpio import SysfsGPIO
from sysgpio.core.edge_stream import EdgeStream
from sysgpio.core.edge_monitor import EdgeMonitor, PollWaiter
from sysgpio.core.fake_gpio import FakeGPIO
from sysgpio.core.simulation_graph import SimulationGraph

__all__ = [
    # Errors
    "GPIOError",
    "ConfigurationError",
    "DirectionError",
    "PinIOError",
    "FormatError",
    "ConflictError",
    "ClosedHandleError",
    "StreamClosedError",
    "PropagationDepthError",
    # Real pins
    "SysfsAttributes",
    "SysfsGPIO",
    # Edge notification
    "EdgeStream",
    "EdgeMonitor",
    "PollWaiter",
    # Simulation
    "FakeGPIO",
    "SimulationGraph",
]
