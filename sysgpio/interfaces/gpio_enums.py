"""GPIO enumeration types."""

from enum import IntEnum


class Direction(IntEnum):
    """GPIO pin direction enumeration.

    Values map to the text used by the sysfs ``direction`` attribute.
    """

    INPUT = 0
    """Pin configured as digital input ("in")."""

    OUTPUT = 1
    """Pin configured as digital output ("out")."""

    @property
    def sysfs_value(self) -> str:
        return "out" if self is Direction.OUTPUT else "in"

    @property
    def label(self) -> str:
        return "OUT" if self is Direction.OUTPUT else "IN"


class Edge(IntEnum):
    """Edge mode enumeration.

    Selects which signal transitions raise a kernel notification on an
    input pin. NONE means no edge monitor may be attached.
    """

    RISING = 0
    """Notify on low to high transitions."""

    FALLING = 1
    """Notify on high to low transitions."""

    BOTH = 2
    """Notify on every transition."""

    NONE = 3
    """No notifications."""

    @property
    def sysfs_value(self) -> str:
        return self.name.lower()


class HandleState(IntEnum):
    """Lifecycle of a pin handle."""

    OPEN = 0
    CLOSED = 1


class MonitorState(IntEnum):
    """Lifecycle of an edge monitor.

    ATTACHED -> POLLING -> (EMITTING <-> POLLING) -> CLOSED.
    CLOSED is terminal.
    """

    ATTACHED = 0
    POLLING = 1
    EMITTING = 2
    CLOSED = 3
