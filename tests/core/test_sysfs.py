"""Tests for sysfs attribute access."""

import pytest

from sysgpio.core.exceptions import ConfigurationError, FormatError, PinIOError
from sysgpio.core.sysfs import SysfsAttributes
from sysgpio.interfaces.gpio_enums import Direction, Edge
from sysgpio.utils.config_loader import SysfsConfig


class TestPaths:
    def test_default_base_path(self):
        attrs = SysfsAttributes()
        assert str(attrs.pin_path(17)) == "/sys/class/gpio/gpio17"

    def test_attribute_path(self, attributes, fake_sysfs):
        assert attributes.attribute_path(4, "value") == fake_sysfs.root / "gpio4" / "value"

    def test_from_config(self, tmp_path):
        attrs = SysfsAttributes.from_config(SysfsConfig(base_path=str(tmp_path)))
        assert attrs.base_path == tmp_path


class TestExport:
    def test_export_writes_number(self, attributes, fake_sysfs):
        attributes.export(23)
        assert fake_sysfs.exported_numbers() == "23\n"

    def test_export_already_exported_is_noop(self, attributes, fake_sysfs):
        fake_sysfs.add_pin(23)
        attributes.export(23)
        assert fake_sysfs.exported_numbers() == ""

    def test_unexport(self, attributes, fake_sysfs):
        fake_sysfs.add_pin(5)
        attributes.unexport(5)
        assert (fake_sysfs.root / "unexport").read_text() == "5\n"

    def test_unexport_not_exported_is_noop(self, attributes, fake_sysfs):
        attributes.unexport(5)
        assert (fake_sysfs.root / "unexport").read_text() == ""

    def test_export_without_control_file(self, tmp_path):
        attrs = SysfsAttributes(tmp_path / "missing")
        with pytest.raises(PinIOError):
            attrs.export(3)


class TestDirection:
    @pytest.mark.parametrize("text,expected", [("in", Direction.INPUT), ("out", Direction.OUTPUT)])
    def test_read_direction(self, attributes, fake_sysfs, text, expected):
        fake_sysfs.add_pin(7, direction=text)
        assert attributes.read_direction(7) is expected

    def test_read_direction_invalid_content(self, attributes, fake_sysfs):
        fake_sysfs.add_pin(7, direction="sideways")
        with pytest.raises(FormatError) as exc_info:
            attributes.read_direction(7)
        assert exc_info.value.content == "sideways"

    def test_read_direction_missing_file(self, attributes):
        with pytest.raises(PinIOError) as exc_info:
            attributes.read_direction(99)
        assert isinstance(exc_info.value.__cause__, OSError)
        assert "gpio99" in exc_info.value.path

    def test_write_direction(self, attributes, fake_sysfs):
        fake_sysfs.add_pin(7)
        attributes.write_direction(7, Direction.OUTPUT)
        assert fake_sysfs.read(7, "direction") == "out\n"

    def test_write_direction_rejects_non_enum(self, attributes, fake_sysfs):
        fake_sysfs.add_pin(7)
        with pytest.raises(ConfigurationError):
            attributes.write_direction(7, "out")


class TestEdge:
    @pytest.mark.parametrize("edge", list(Edge))
    def test_write_then_read_edge(self, attributes, fake_sysfs, edge):
        fake_sysfs.add_pin(8)
        attributes.write_edge(8, edge)
        assert fake_sysfs.read(8, "edge") == f"{edge.sysfs_value}\n"
        assert attributes.read_edge(8) is edge

    def test_read_edge_invalid(self, attributes, fake_sysfs):
        fake_sysfs.add_pin(8, edge="sometimes")
        with pytest.raises(FormatError):
            attributes.read_edge(8)

    def test_write_edge_invalid_value(self, attributes, fake_sysfs):
        fake_sysfs.add_pin(8)
        with pytest.raises(ConfigurationError):
            attributes.write_edge(8, 7)

    def test_write_edge_missing_pin(self, attributes):
        with pytest.raises(PinIOError):
            attributes.write_edge(8, Edge.BOTH)


class TestActiveLow:
    def test_write_and_read(self, attributes, fake_sysfs):
        fake_sysfs.add_pin(9)
        attributes.write_active_low(9, True)
        assert fake_sysfs.read(9, "active_low") == "1\n"
        assert attributes.read_active_low(9) is True

        attributes.write_active_low(9, False)
        assert attributes.read_active_low(9) is False

    def test_read_invalid(self, attributes, fake_sysfs):
        fake_sysfs.add_pin(9, active_low="2")
        with pytest.raises(FormatError):
            attributes.read_active_low(9)


class TestValue:
    def test_read_value(self, attributes, fake_sysfs):
        fake_sysfs.add_pin(10, value="1")
        with attributes.open_value(10) as fh:
            assert attributes.read_value(fh) is True
            fake_sysfs.write(10, "value", "0\n")
            assert attributes.read_value(fh) is False

    def test_write_value_truncates(self, attributes, fake_sysfs):
        fake_sysfs.add_pin(10)
        fake_sysfs.write(10, "value", "1\ntrailing garbage\n")
        with attributes.open_value(10) as fh:
            attributes.write_value(fh, False)
        assert fake_sysfs.read(10, "value") == "0\n"

    def test_read_value_invalid(self, attributes, fake_sysfs):
        fake_sysfs.add_pin(10, value="x")
        with attributes.open_value(10) as fh:
            with pytest.raises(FormatError):
                attributes.read_value(fh)

    def test_read_value_empty(self, attributes, fake_sysfs):
        fake_sysfs.add_pin(10)
        fake_sysfs.write(10, "value", "")
        with attributes.open_value(10) as fh:
            with pytest.raises(FormatError):
                attributes.read_value(fh)

    def test_read_closed_file(self, attributes, fake_sysfs):
        fake_sysfs.add_pin(10)
        fh = attributes.open_value(10)
        fh.close()
        with pytest.raises(PinIOError):
            attributes.read_value(fh)
        with pytest.raises(PinIOError):
            attributes.write_value(fh, True)

    def test_open_missing_value(self, attributes):
        with pytest.raises(PinIOError):
            attributes.open_value(11)
