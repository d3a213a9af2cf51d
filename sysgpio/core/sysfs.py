"""Attribute access for the kernel's /sys/class/gpio control files.

Every exported pin N has a directory ``<base>/gpioN`` with the text
attributes ``direction`` ("in"/"out"), ``active_low`` ("0"/"1"), ``edge``
("none"/"rising"/"falling"/"both") and ``value`` ("0"/"1", newline
terminated). Writing N to ``<base>/export`` makes the directory appear.

All calls are synchronous. OSError is reported as PinIOError with the
original error chained; unexpected content is reported as FormatError.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from sysgpio.core.exceptions import ConfigurationError, FormatError, PinIOError
from sysgpio.interfaces.gpio_enums import Direction, Edge
from sysgpio.utils.consts import SysfsConsts

if TYPE_CHECKING:
    from sysgpio.utils.config_loader import SysfsConfig

logger = logging.getLogger(__name__)

_DIRECTIONS = {"in": Direction.INPUT, "out": Direction.OUTPUT}
_EDGES = {edge.sysfs_value: edge for edge in Edge}


class SysfsAttributes:
    """Reads and writes the sysfs control attributes of physical pins."""

    def __init__(self, base_path: str | Path = SysfsConsts.BASE_PATH):
        self._base = Path(base_path)

    @classmethod
    def from_config(cls, cfg: SysfsConfig) -> "SysfsAttributes":
        return cls(cfg.base_path)

    @property
    def base_path(self) -> Path:
        return self._base

    # ==========================================================
    # Path translation
    # ==========================================================

    def pin_path(self, number: int) -> Path:
        return self._base / SysfsConsts.PIN_DIR_TEMPLATE.format(number=number)

    def attribute_path(self, number: int, attribute: str) -> Path:
        return self.pin_path(number) / attribute

    # ==========================================================
    # Export
    # ==========================================================

    def is_exported(self, number: int) -> bool:
        return self.pin_path(number).is_dir()

    def export(self, number: int) -> None:
        """Export a pin. Already exported pins are left alone."""
        if self.is_exported(number):
            return
        logger.debug("Exporting gpio%d", number)
        self._write_text(self._base / SysfsConsts.EXPORT, f"{number}\n")

    def unexport(self, number: int) -> None:
        """Unexport a pin. Pins that are not exported are left alone."""
        if not self.is_exported(number):
            return
        logger.debug("Unexporting gpio%d", number)
        self._write_text(self._base / SysfsConsts.UNEXPORT, f"{number}\n")

    # ==========================================================
    # Attributes
    # ==========================================================

    def read_direction(self, number: int) -> Direction:
        path = self.attribute_path(number, SysfsConsts.ATTR_DIRECTION)
        content = self._read_text(path)
        # "high"/"low" are write-only aliases for "out"; reads only yield in/out
        direction = _DIRECTIONS.get(content)
        if direction is None:
            raise FormatError(str(path), content)
        return direction

    def write_direction(self, number: int, direction: Direction) -> None:
        if not isinstance(direction, Direction):
            raise ConfigurationError(
                "direction", f"{direction!r} is neither INPUT nor OUTPUT"
            )
        path = self.attribute_path(number, SysfsConsts.ATTR_DIRECTION)
        self._write_text(path, f"{direction.sysfs_value}\n")

    def read_edge(self, number: int) -> Edge:
        path = self.attribute_path(number, SysfsConsts.ATTR_EDGE)
        content = self._read_text(path)
        edge = _EDGES.get(content)
        if edge is None:
            raise FormatError(str(path), content)
        return edge

    def write_edge(self, number: int, edge: Edge) -> None:
        if not isinstance(edge, Edge):
            raise ConfigurationError("edge", f"Edge value invalid: {edge!r}")
        path = self.attribute_path(number, SysfsConsts.ATTR_EDGE)
        self._write_text(path, f"{edge.sysfs_value}\n")

    def read_active_low(self, number: int) -> bool:
        path = self.attribute_path(number, SysfsConsts.ATTR_ACTIVE_LOW)
        content = self._read_text(path)
        if content not in ("0", "1"):
            raise FormatError(str(path), content)
        return content == "1"

    def write_active_low(self, number: int, active_low: bool) -> None:
        """Inverts the meaning of 0 and 1 in the pin's value file."""
        path = self.attribute_path(number, SysfsConsts.ATTR_ACTIVE_LOW)
        self._write_text(path, "1\n" if active_low else "0\n")

    # ==========================================================
    # Value
    # ==========================================================

    def open_value(self, number: int) -> BinaryIO:
        """Open the pin's value file for unbuffered read/write."""
        path = self.attribute_path(number, SysfsConsts.ATTR_VALUE)
        try:
            return open(path, "r+b", buffering=0)  # pylint: disable=consider-using-with
        except OSError as exc:
            raise PinIOError(f"Cannot open {path}: {exc}", path=str(path)) from exc

    def read_value(self, fh: BinaryIO) -> bool:
        """Read the logical state from an open value file."""
        path = getattr(fh, "name", "<value>")
        try:
            fh.seek(0)
            raw = fh.read(SysfsConsts.VALUE_READ_SIZE)
        except (OSError, ValueError) as exc:
            raise PinIOError(f"Cannot read {path}: {exc}", path=str(path)) from exc

        content = (raw or b"").decode("ascii", errors="replace").strip()
        if content == "1":
            return True
        if content == "0":
            return False
        raise FormatError(str(path), content)

    def write_value(self, fh: BinaryIO, state: bool) -> None:
        """Write the logical state to an open value file.

        The file is truncated first so no trailing bytes of a previous,
        longer write remain to be misread.
        """
        path = getattr(fh, "name", "<value>")
        try:
            fh.seek(0)
            fh.truncate(0)
            fh.write(b"1\n" if state else b"0\n")
        except (OSError, ValueError) as exc:
            raise PinIOError(f"Cannot write {path}: {exc}", path=str(path)) from exc

    # ==========================================================
    # Helpers
    # ==========================================================

    @staticmethod
    def _read_text(path: Path) -> str:
        try:
            with path.open("r", encoding="ascii") as fh:
                return fh.read(SysfsConsts.VALUE_READ_SIZE).strip()
        except OSError as exc:
            raise PinIOError(f"Cannot read {path}: {exc}", path=str(path)) from exc

    @staticmethod
    def _write_text(path: Path, text: str) -> None:
        try:
            with path.open("w", encoding="ascii") as fh:
                fh.write(text)
        except OSError as exc:
            raise PinIOError(f"Cannot write {path}: {exc}", path=str(path)) from exc
