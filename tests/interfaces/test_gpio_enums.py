import pytest

from sysgpio.core.exceptions import ClosedHandleError
from sysgpio.interfaces.gpio import GPIOPin
from sysgpio.interfaces.gpio_enums import Direction, Edge, HandleState, MonitorState


@pytest.mark.parametrize(
    "direction,sysfs_value,label",
    [(Direction.INPUT, "in", "IN"), (Direction.OUTPUT, "out", "OUT")],
)
def test_direction_text(direction, sysfs_value, label):
    assert direction.sysfs_value == sysfs_value
    assert direction.label == label


def test_edge_sysfs_values():
    assert [edge.sysfs_value for edge in Edge] == ["rising", "falling", "both", "none"]


def test_monitor_states_ordered():
    assert list(MonitorState) == sorted(MonitorState)
    assert MonitorState.CLOSED == max(MonitorState)


class MinimalPin(GPIOPin):
    def __init__(self):
        self.closes = 0

    @property
    def name(self):
        return "minimal"

    def check_direction(self):
        self._ensure_open()
        return Direction.INPUT

    def set_direction(self, direction):
        self._ensure_open()

    def get_state(self):
        self._ensure_open()
        return False

    def set_state(self, state):
        self._ensure_open()

    def close(self):
        self.closes += 1
        self._handle_state = HandleState.CLOSED


def test_gpio_pin_cannot_be_instantiated():
    with pytest.raises(TypeError):
        GPIOPin()


def test_gpio_pin_context_manager_closes():
    with MinimalPin() as pin:
        assert not pin.closed
        assert pin.get_state() is False

    assert pin.closes == 1
    assert pin.closed
    with pytest.raises(ClosedHandleError):
        pin.check_direction()
