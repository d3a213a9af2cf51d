"""Abstract GPIO pin interface shared by real and virtual pins."""

from __future__ import annotations

from abc import ABC, abstractmethod

from sysgpio.core.exceptions import ClosedHandleError
from sysgpio.interfaces.gpio_enums import Direction, HandleState


class GPIOPin(ABC):
    """Single digital GPIO line.

    Implemented by SysfsGPIO (kernel backed) and FakeGPIO (simulated), so
    application code written against this interface runs unchanged on a
    simulation graph in tests.

    Every operation on a closed handle raises ClosedHandleError.
    """

    _handle_state: HandleState = HandleState.OPEN

    @property
    @abstractmethod
    def name(self) -> str:
        """Human readable pin identifier."""
        ...

    @property
    def closed(self) -> bool:
        return self._handle_state is HandleState.CLOSED

    def _ensure_open(self) -> None:
        if self._handle_state is HandleState.CLOSED:
            raise ClosedHandleError(self.name)

    @abstractmethod
    def check_direction(self) -> Direction:
        """Return the pin's current direction."""
        ...

    @abstractmethod
    def set_direction(self, direction: Direction) -> None:
        """Reconfigure the pin direction."""
        ...

    @abstractmethod
    def get_state(self) -> bool:
        """Read the logical pin state."""
        ...

    @abstractmethod
    def set_state(self, state: bool) -> None:
        """Drive the pin. Raises DirectionError unless the pin is an OUTPUT."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the handle. Idempotent."""
        ...

    def __enter__(self) -> "GPIOPin":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
