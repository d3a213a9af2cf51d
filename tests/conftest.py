"""
Pytest configuration and shared fixtures for the sysgpio test suite.
"""

import sys
import tempfile
from pathlib import Path

import pytest

# Ensure project root is on PYTHONPATH so 'sysgpio' can be imported
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sysgpio.core.sysfs import SysfsAttributes  # noqa: E402


class FakeSysfsTree:
    """Directory laid out like /sys/class/gpio, for tests without a kernel.

    Exporting only records the write to ``export``; pin directories are
    created explicitly with add_pin().
    """

    def __init__(self, root: Path):
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)
        (self.root / "export").write_text("")
        (self.root / "unexport").write_text("")

    def pin_dir(self, number: int) -> Path:
        return self.root / f"gpio{number}"

    def add_pin(
        self,
        number: int,
        direction: str = "in",
        edge: str = "none",
        value: str = "0",
        active_low: str = "0",
    ) -> Path:
        pin_dir = self.pin_dir(number)
        pin_dir.mkdir(exist_ok=True)
        (pin_dir / "direction").write_text(f"{direction}\n")
        (pin_dir / "edge").write_text(f"{edge}\n")
        (pin_dir / "value").write_text(f"{value}\n")
        (pin_dir / "active_low").write_text(f"{active_low}\n")
        return pin_dir

    def read(self, number: int, attribute: str) -> str:
        return (self.pin_dir(number) / attribute).read_text()

    def write(self, number: int, attribute: str, text: str) -> None:
        (self.pin_dir(number) / attribute).write_text(text)

    def exported_numbers(self) -> str:
        return (self.root / "export").read_text()


@pytest.fixture
def fake_sysfs(tmp_path):
    """A fresh fake /sys/class/gpio tree."""
    return FakeSysfsTree(tmp_path / "gpio")


@pytest.fixture
def attributes(fake_sysfs):
    """SysfsAttributes rooted at the fake tree."""
    return SysfsAttributes(fake_sysfs.root)


@pytest.fixture
def temp_yaml_file():
    """
    Fixture that provides a temporary YAML file.

    Yields:
        Path: Path to the temporary YAML file
    """
    with tempfile.NamedTemporaryFile(
        mode="w",
        suffix=".yaml",
        delete=False,
    ) as f:
        temp_path = Path(f.name)

    yield temp_path

    # Cleanup
    if temp_path.exists():
        temp_path.unlink()


@pytest.fixture
def valid_config_dict():
    """
    Fixture providing a complete valid configuration dictionary.
    """
    return {
        "sysfs": {
            "base_path": "/sys/class/gpio",
            "poll_timeout_ms": 500,
        },
        "simulation": {
            "max_depth": 16,
            "pins": {
                "led": {"direction": "out"},
                "relay": {"direction": "out", "initial": True},
                "sense": {"direction": "in"},
                "buzzer": "in",
            },
            "wires": {
                "led": ["sense", "buzzer"],
            },
        },
    }


def pytest_configure(config):
    """
    Hook for initial pytest configuration.

    Used to add custom markers and configuration.
    """
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
