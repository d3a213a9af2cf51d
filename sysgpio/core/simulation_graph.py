"""Wiring of virtual GPIO pins.

A SimulationGraph connects each OUTPUT pin to zero or more INPUT pins.
Driving an output synchronously propagates its state to every pin wired to
it, one level deep: input pins never relay further. Pins can still react to
propagated input through FakeGPIO.subscribe() and drive other outputs from
the callback; such re-entrant drives are bounded by ``max_depth`` so a wiring
cycle fails with PropagationDepthError instead of recursing without end.

The graph does not own its pins. Wiring a source replaces its whole target
list; concurrent wire() calls on the same source are not supported.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator, Optional

from sysgpio.core.exceptions import (
    ConfigurationError,
    DirectionError,
    PropagationDepthError,
)
from sysgpio.core.fake_gpio import FakeGPIO
from sysgpio.interfaces.gpio_enums import Direction
from sysgpio.utils.consts import MAX_DRIVE_DEPTH

if TYPE_CHECKING:
    from sysgpio.utils.config_loader import SimulationConfig


class SimulationGraph:
    """Set of FakeGPIO pins and the wires between them."""

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        max_depth: int = MAX_DRIVE_DEPTH,
    ):
        if max_depth <= 0:
            raise ValueError("max_depth must be positive")
        self.logger = logger
        self.max_depth = max_depth
        self._pins: dict[str, FakeGPIO] = {}
        self._edges: dict[str, list[FakeGPIO]] = {}
        self._depth = 0

    @classmethod
    def from_config(
        cls,
        cfg: SimulationConfig,
        logger: Optional[logging.Logger] = None,
    ) -> "SimulationGraph":
        """Build pins and wiring from a loaded simulation config.

        Outputs are driven to their initial state after wiring, so every
        wired input starts out agreeing with the output that feeds it.
        """
        graph = cls(logger=logger, max_depth=cfg.max_depth)
        for name, pin_cfg in cfg.pins.items():
            graph.add_pin(name, pin_cfg.direction)
        for source, targets in cfg.wires.items():
            graph.wire(graph.pin(source), *(graph.pin(t) for t in targets))

        for name, pin_cfg in cfg.pins.items():
            if pin_cfg.direction is Direction.INPUT and pin_cfg.initial:
                graph.propagate(graph.pin(name), True)
        for name, pin_cfg in cfg.pins.items():
            if pin_cfg.direction is Direction.OUTPUT:
                graph.set_state(graph.pin(name), pin_cfg.initial)
        return graph

    def __len__(self) -> int:
        return len(self._pins)

    def __contains__(self, pin: object) -> bool:
        return isinstance(pin, FakeGPIO) and self._pins.get(pin.name) is pin

    @property
    def pins(self) -> list[FakeGPIO]:
        return list(self._pins.values())

    # ==========================================================
    # Nodes
    # ==========================================================

    def add_pin(
        self,
        name: str,
        direction: Direction,
        logger: Optional[logging.Logger] = None,
    ) -> FakeGPIO:
        """Create a pin and register it with this graph."""
        return FakeGPIO(name, direction, logger=logger, graph=self)

    def register(self, pin: FakeGPIO) -> None:
        """Add an existing pin. Pin names must be unique within a graph."""
        if pin in self:
            return
        if pin.name in self._pins:
            raise ConfigurationError("pins", f"Duplicate pin name '{pin.name}'")
        pin._attach_graph(self)  # pylint: disable=protected-access
        self._pins[pin.name] = pin

    def pin(self, name: str) -> FakeGPIO:
        try:
            return self._pins[name]
        except KeyError:
            raise ConfigurationError(
                "pins", f"Unknown pin '{name}'. Available: {list(self._pins)}"
            ) from None

    # ==========================================================
    # Edges
    # ==========================================================

    def wire(self, source: FakeGPIO, *targets: FakeGPIO) -> None:
        """Replace the complete target list of ``source``.

        Targets must be INPUT pins; the check happens here rather than on
        the next drive. Targets that belong to no graph are adopted. On any
        error the previous wiring is kept.

        Raises:
            DirectionError: If a target is not an INPUT pin.
            ConfigurationError: If a pin belongs to another graph, or its
                name is already taken in this one.
        """
        self._ensure_member(source)
        named: dict[str, FakeGPIO] = {}
        for target in targets:
            if named.setdefault(target.name, target) is not target:
                raise ConfigurationError("pins", f"Duplicate pin name '{target.name}'")
            if target.direction is not Direction.INPUT:
                raise DirectionError(target.name, f"wire {source.name} to an OUTPUT pin")
            if target.graph is not None and target.graph is not self:
                raise ConfigurationError(
                    "wires", f"{target.name} belongs to another simulation graph"
                )
            if target not in self and target.name in self._pins:
                raise ConfigurationError("pins", f"Duplicate pin name '{target.name}'")

        for target in targets:
            self.register(target)
        self._edges[source.name] = list(targets)

        if self.logger is not None:
            names = " ".join(f"{t.name}({t.direction.label})" for t in targets)
            self.logger.debug("FakeGPIO %s: now connected to %s", source.name, names or "nothing")

    def unwire(self, source: FakeGPIO) -> None:
        self.wire(source)

    def targets(self, source: FakeGPIO) -> tuple[FakeGPIO, ...]:
        return tuple(self._edges.get(source.name, ()))

    # ==========================================================
    # State
    # ==========================================================

    def set_state(self, pin: FakeGPIO, value: bool) -> None:
        """Drive an OUTPUT pin and propagate to everything wired to it.

        Returns once every directly wired target holds the new value.
        """
        self._ensure_member(pin)
        pin.set_state(value)

    def propagate(self, pin: FakeGPIO, value: bool) -> None:
        """Set an INPUT pin's state directly, without further cascading."""
        self._ensure_member(pin)
        pin.fake_input(value)

    def get_state(self, pin: FakeGPIO) -> bool:
        """Cached state of ``pin``. Never fails."""
        return pin.value

    @contextmanager
    def drive(self, pin: FakeGPIO) -> Iterator[None]:
        """Track nesting of drives started from propagation callbacks."""
        if self._depth >= self.max_depth:
            raise PropagationDepthError(pin.name, self.max_depth)
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    def _ensure_member(self, pin: FakeGPIO) -> None:
        if pin not in self:
            raise ConfigurationError(
                "pins", f"{pin.name} is not part of this simulation graph"
            )
