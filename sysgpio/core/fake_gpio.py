"""Virtual GPIO pin for exercising application logic without hardware."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from overrides import override  # type: ignore

from sysgpio.core.exceptions import ConfigurationError, DirectionError
from sysgpio.interfaces.gpio import GPIOPin
from sysgpio.interfaces.gpio_enums import Direction, HandleState

if TYPE_CHECKING:
    from sysgpio.core.simulation_graph import SimulationGraph

InputCallback = Callable[["FakeGPIO", bool], None]


class FakeGPIO(GPIOPin):
    """In-memory GPIO pin.

    An OUTPUT pin is driven with set_state(); when it belongs to a
    SimulationGraph the new state is propagated to every INPUT pin wired to
    it. An INPUT pin only changes through propagation or fake_input().

    Logging goes to the logger given at construction; without one the pin
    does not log.
    """

    def __init__(
        self,
        name: str,
        direction: Direction,
        logger: Optional[logging.Logger] = None,
        graph: Optional[SimulationGraph] = None,
    ):
        if not isinstance(direction, Direction):
            raise ConfigurationError("direction", f"{direction!r} is neither INPUT nor OUTPUT")
        self._name = name
        self._direction = direction
        self._value = False
        self._logger = logger
        self._graph: Optional[SimulationGraph] = None
        self._subscribers: list[InputCallback] = []
        self._handle_state = HandleState.OPEN
        if graph is not None:
            graph.register(self)

    @classmethod
    def numbered(
        cls,
        number: int,
        direction: Direction,
        logger: Optional[logging.Logger] = None,
    ) -> "FakeGPIO":
        """Create a pin named after a GPIO number, e.g. ``FakeGPIO(17)``."""
        return cls(f"FakeGPIO({number})", direction, logger=logger)

    def __repr__(self) -> str:
        return f"FakeGPIO({self._name!r}, {self._direction.name}, value={self._value})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def graph(self) -> Optional[SimulationGraph]:
        return self._graph

    @property
    def value(self) -> bool:
        """Cached state. Readable even after close()."""
        return self._value

    @property
    def direction(self) -> Direction:
        return self._direction

    # ==========================================================
    # GPIOPin implementation
    # ==========================================================

    @override
    def check_direction(self) -> Direction:
        self._ensure_open()
        return self._direction

    @override
    def set_direction(self, direction: Direction) -> None:
        self._ensure_open()
        if not isinstance(direction, Direction):
            raise ConfigurationError("direction", f"{direction!r} is neither INPUT nor OUTPUT")
        self._direction = direction
        self._log("direction set to %s", direction.name)

    @override
    def get_state(self) -> bool:
        self._ensure_open()
        return self._value

    @override
    def set_state(self, state: bool) -> None:
        """Drive an OUTPUT pin and propagate to its wired inputs.

        Every wired target is checked before anything changes, so a failed
        drive leaves this pin and its targets untouched.

        Raises:
            DirectionError: If this pin is an INPUT, or a target is no
                longer an INPUT.
            ClosedHandleError: If this pin or a target is closed.
            PropagationDepthError: If re-entrant drives nest too deeply.
        """
        self._ensure_open()
        if self._direction is not Direction.OUTPUT:
            raise DirectionError(self._name, "set state of an INPUT pin")

        state = bool(state)
        if self._graph is None:
            self._log("set to state >%s<", state)
            self._value = state
            return

        targets = self._graph.targets(self)
        for target in targets:
            target.check_input()

        with self._graph.drive(self):
            self._log("set to state >%s<", state)
            self._value = state
            # Every target holds the new state before any subscriber runs
            changed = [target for target in targets if target._receive(state)]
            for target in changed:
                target._notify(state)

    @override
    def close(self) -> None:
        if self._handle_state is HandleState.CLOSED:
            return
        self._handle_state = HandleState.CLOSED
        self._log("closed")

    # ==========================================================
    # Simulation
    # ==========================================================

    def check_input(self) -> None:
        """Raise unless this pin can receive propagated input."""
        self._ensure_open()
        if self._direction is not Direction.INPUT:
            raise DirectionError(self._name, "fake input for an OUTPUT pin")

    def fake_input(self, state: bool) -> None:
        """Set the state of an INPUT pin as if driven externally.

        Subscribers are notified when the state changes. Input pins never
        relay the state any further.

        Raises:
            DirectionError: If this pin is an OUTPUT.
        """
        state = bool(state)
        if self._receive(state):
            self._notify(state)

    def connect_to(self, *targets: "FakeGPIO") -> None:
        """Replace this pin's wiring with the given input pins.

        A pin that is not yet part of a simulation graph gets a new one,
        which also adopts any unattached targets.
        """
        self._ensure_open()
        if self._graph is None:
            from sysgpio.core.simulation_graph import SimulationGraph

            SimulationGraph(logger=self._logger).register(self)
        assert self._graph is not None
        self._graph.wire(self, *targets)

    def subscribe(self, callback: InputCallback) -> None:
        """Call ``callback(pin, state)`` whenever this input pin changes."""
        self._ensure_open()
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: InputCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _receive(self, state: bool) -> bool:
        """Store propagated input. Returns True if the state changed."""
        self.check_input()
        self._log("faking input >%s<", state)
        changed = state != self._value
        self._value = state
        return changed

    def _notify(self, state: bool) -> None:
        for callback in list(self._subscribers):
            callback(self, state)

    def _attach_graph(self, graph: SimulationGraph) -> None:
        if self._graph is not None and self._graph is not graph:
            raise ConfigurationError(
                "graph", f"{self._name} already belongs to another simulation graph"
            )
        self._graph = graph
        if self._logger is None:
            self._logger = graph.logger

    def _log(self, fmt: str, *args: Any) -> None:
        if self._logger is None:
            return
        self._logger.debug(
            "FakeGPIO %s(%s): " + fmt, self._name, self._direction.label, *args
        )
