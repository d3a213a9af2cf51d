"""GPIO control through the Linux sysfs interface.

This package reads and writes GPIO lines through /sys/class/gpio, delivers
edge notifications from a background monitor, and offers wired-together
virtual pins as a drop-in substitute for real ones in tests.

Getting started:
    from sysgpio import Direction, Edge, SysfsGPIO

    button = SysfsGPIO(17, Direction.INPUT, edge=Edge.BOTH)
    with button.watch_edges() as stream:
        for pressed in stream:
            print(pressed)

Simulation:
    from sysgpio import Direction, SimulationGraph

    graph = SimulationGraph()
    led = graph.add_pin("led", Direction.OUTPUT)
    sense = graph.add_pin("sense", Direction.INPUT)
    graph.wire(led, sense)
    led.set_state(True)  # sense.get_state() is now True
"""

# Core must load before interfaces: interfaces import core.exceptions
from sysgpio.core import (
    ClosedHandleError,
    ConfigurationError,
    ConflictError,
    DirectionError,
    EdgeMonitor,
    EdgeStream,
    FakeGPIO,
    FormatError,
    GPIOError,
    PinIOError,
    PollWaiter,
    PropagationDepthError,
    SimulationGraph,
    StreamClosedError,
    SysfsAttributes,
    SysfsGPIO,
)
from sysgpio.interfaces import (
    Direction,
    Edge,
    GPIOPin,
    HandleState,
    MonitorState,
    ReadinessWaiter,
)
from sysgpio.utils.config_loader import GpioConfig, get_config, load_config

__version__ = "0.1.0"

__all__ = [
    # Interfaces
    "GPIOPin",
    "ReadinessWaiter",
    "Direction",
    "Edge",
    "HandleState",
    "MonitorState",
    # Real pins
    "SysfsAttributes",
    "SysfsGPIO",
    "EdgeMonitor",
    "EdgeStream",
    "PollWaiter",
    # Simulation
    "FakeGPIO",
    "SimulationGraph",
    # Configuration
    "GpioConfig",
    "load_config",
    "get_config",
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
]
