"""Constants for the sysfs GPIO interface and the simulator."""


class SysfsConsts:
    """Paths and attribute names of the kernel GPIO sysfs interface."""

    BASE_PATH = "/sys/class/gpio"
    """Default root of the GPIO control filesystem."""

    EXPORT = "export"
    UNEXPORT = "unexport"

    PIN_DIR_TEMPLATE = "gpio{number}"
    """Per-pin directory name, relative to the base path."""

    ATTR_DIRECTION = "direction"
    ATTR_ACTIVE_LOW = "active_low"
    ATTR_EDGE = "edge"
    ATTR_VALUE = "value"

    VALUE_READ_SIZE = 16
    """Bytes read from a value or attribute file per access."""


# Poll timeout (milliseconds) meaning "wait indefinitely"
POLL_FOREVER = -1

# Nesting limit for re-entrant drives through a simulation graph
MAX_DRIVE_DEPTH = 64
