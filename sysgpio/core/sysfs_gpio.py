"""Kernel-backed GPIO pin using the /sys/class/gpio file interface.

Slightly slower than memory-mapped implementations but works on any Linux
system with GPIOs, independent of board register layouts.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, BinaryIO, Optional

from overrides import override  # type: ignore

from sysgpio.core.exceptions import DirectionError, GPIOError
from sysgpio.core.sysfs import SysfsAttributes
from sysgpio.interfaces.gpio import GPIOPin
from sysgpio.interfaces.gpio_enums import Direction, Edge, HandleState
from sysgpio.utils.consts import POLL_FOREVER

if TYPE_CHECKING:
    from sysgpio.core.edge_monitor import WaiterFactory
    from sysgpio.core.edge_stream import EdgeStream

logger = logging.getLogger(__name__)


class SysfsGPIO(GPIOPin):
    """One exported GPIO line, controlled through its sysfs attributes.

    Construction exports the pin (a no-op if it is already exported), sets
    its direction and opens the value file, which stays open for the life
    of the handle. close() releases the value file but does not unexport
    the pin: long-running programs keep their pins claimed.

    Attributes:
        number: Kernel GPIO number, as used in sysfs.
    """

    def __init__(
        self,
        number: int,
        direction: Direction,
        attributes: Optional[SysfsAttributes] = None,
        active_low: Optional[bool] = None,
        edge: Optional[Edge] = None,
    ) -> None:
        """Export and configure a pin.

        Args:
            number: Kernel GPIO number.
            direction: Direction.INPUT or Direction.OUTPUT.
            attributes: Attribute accessor; defaults to /sys/class/gpio.
            active_low: If given, written to the active_low attribute.
            edge: If given, written to the edge attribute.

        Raises:
            PinIOError: If a control file cannot be written or opened.
            ConfigurationError: If direction or edge is not a valid value.
        """
        if number < 0:
            raise ValueError(f"GPIO number must be >= 0, got {number}")

        self.number = number
        self._attributes = attributes or SysfsAttributes()
        self._handle_state = HandleState.OPEN

        self._attributes.export(number)
        self._attributes.write_direction(number, direction)
        self._direction = direction
        if active_low is not None:
            self._attributes.write_active_low(number, active_low)
        if edge is not None:
            self._attributes.write_edge(number, edge)

        self._value_file: BinaryIO = self._attributes.open_value(number)
        logger.debug("Opened %s as %s", self.name, direction.name)

    def __repr__(self) -> str:
        return f"SysfsGPIO(number={self.number}, direction={self._direction.name})"

    @property
    def name(self) -> str:
        return f"gpio{self.number}"

    @property
    def attributes(self) -> SysfsAttributes:
        return self._attributes

    def fileno(self) -> int:
        """Descriptor of the open value file, for readiness waits."""
        self._ensure_open()
        return self._value_file.fileno()

    # ==========================================================
    # Configuration
    # ==========================================================

    @override
    def check_direction(self) -> Direction:
        """Read the direction back from the kernel and refresh the cache."""
        self._ensure_open()
        self._direction = self._attributes.read_direction(self.number)
        return self._direction

    @override
    def set_direction(self, direction: Direction) -> None:
        self._ensure_open()
        self._attributes.write_direction(self.number, direction)
        self._direction = direction

    @property
    def direction(self) -> Direction:
        """Cached direction, as last written or read."""
        return self._direction

    def set_active_low(self, active_low: bool) -> None:
        """Invert the meaning of 0 and 1 in the value file.

        The kernel applies the inversion on both reads and writes, so the
        logical state seen through get_state()/set_state() stays consistent.
        """
        self._ensure_open()
        self._attributes.write_active_low(self.number, active_low)

    def get_active_low(self) -> bool:
        self._ensure_open()
        return self._attributes.read_active_low(self.number)

    def set_edge(self, edge: Edge) -> None:
        self._ensure_open()
        self._attributes.write_edge(self.number, edge)

    def get_edge(self) -> Edge:
        self._ensure_open()
        return self._attributes.read_edge(self.number)

    # ==========================================================
    # State
    # ==========================================================

    @override
    def get_state(self) -> bool:
        self._ensure_open()
        return self._attributes.read_value(self._value_file)

    @override
    def set_state(self, state: bool) -> None:
        self._ensure_open()
        if self._direction is not Direction.OUTPUT:
            raise DirectionError(self.name, "set state of an INPUT pin")
        self._attributes.write_value(self._value_file, bool(state))

    # ==========================================================
    # Edge notification
    # ==========================================================

    def watch_edges(
        self,
        timeout_ms: int = POLL_FOREVER,
        waiter_factory: Optional[WaiterFactory] = None,
    ) -> EdgeStream:
        """Attach an edge monitor and return its notification stream.

        See EdgeMonitor.attach() for preconditions and semantics.
        """
        from sysgpio.core.edge_monitor import EdgeMonitor

        return EdgeMonitor.attach(self, timeout_ms, waiter_factory=waiter_factory)

    # ==========================================================
    # Lifecycle
    # ==========================================================

    def reopen(self) -> None:
        """Open a fresh descriptor on the value file and release the old one."""
        self._ensure_open()
        previous = self._value_file
        self._value_file = self._attributes.open_value(self.number)
        previous.close()

    @override
    def close(self) -> None:
        """Close the value file. The pin stays exported."""
        if self._handle_state is HandleState.CLOSED:
            return
        self._handle_state = HandleState.CLOSED
        try:
            self._value_file.close()
        except OSError as exc:
            raise GPIOError(f"Failed to close {self.name}: {exc}") from exc
        logger.debug("Closed %s", self.name)
