"""Helpers for loading and validating sysgpio configuration files."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union
import threading

import yaml  # type: ignore[import-untyped]

from sysgpio.core.exceptions import ConfigurationError
from sysgpio.interfaces.gpio_enums import Direction
from sysgpio.utils.consts import MAX_DRIVE_DEPTH, POLL_FOREVER, SysfsConsts


@dataclass(frozen=True)
class SysfsConfig:
    base_path: str = SysfsConsts.BASE_PATH
    poll_timeout_ms: int = POLL_FOREVER


@dataclass(frozen=True)
class PinConfig:
    direction: Direction
    initial: bool = False


@dataclass(frozen=True)
class SimulationConfig:
    pins: dict[str, PinConfig]
    wires: dict[str, tuple[str, ...]] = field(default_factory=dict)
    max_depth: int = MAX_DRIVE_DEPTH


@dataclass(frozen=True)
class GpioConfig:
    sysfs: SysfsConfig
    simulation: Optional[SimulationConfig] = None


# Configuration cache with thread safety
_LOADER_CACHE: dict[str, GpioConfig] = {}
_CACHE_LOCK = threading.RLock()

_DIRECTION_NAMES = {
    "in": Direction.INPUT,
    "input": Direction.INPUT,
    "out": Direction.OUTPUT,
    "output": Direction.OUTPUT,
}


def _load_yaml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Failed to parse config: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config root must be a mapping, got {type(raw).__name__}")
    return raw


def _parse_direction(pin_name: str, raw: Any) -> Direction:
    direction = _DIRECTION_NAMES.get(str(raw).lower())
    if direction is None:
        raise ConfigurationError(
            f"simulation.pins.{pin_name}.direction",
            f"{raw!r} is neither 'in' nor 'out'",
        )
    return direction


def _build_sysfs_cfg(sysfs_raw: dict[str, Any]) -> SysfsConfig:
    return SysfsConfig(
        base_path=str(sysfs_raw.get("base_path", SysfsConsts.BASE_PATH)),
        poll_timeout_ms=int(sysfs_raw.get("poll_timeout_ms", POLL_FOREVER)),
    )


def _build_pin_cfg(name: str, pin_raw: Union[str, dict[str, Any]]) -> PinConfig:
    # Shorthand "led: out" is accepted next to "led: {direction: out}"
    if isinstance(pin_raw, str):
        return PinConfig(direction=_parse_direction(name, pin_raw))
    return PinConfig(
        direction=_parse_direction(name, pin_raw["direction"]),
        initial=bool(pin_raw.get("initial", False)),
    )


def _build_simulation_cfg(sim_raw: dict[str, Any]) -> SimulationConfig:
    pins = {str(k): _build_pin_cfg(str(k), v) for k, v in sim_raw["pins"].items()}
    wires = {
        str(k): tuple(str(t) for t in (v or ()))
        for k, v in (sim_raw.get("wires") or {}).items()
    }
    return SimulationConfig(
        pins=pins,
        wires=wires,
        max_depth=int(sim_raw.get("max_depth", MAX_DRIVE_DEPTH)),
    )


def _parse_gpio_cfg_from_dict(raw: dict[str, Any]) -> GpioConfig:
    try:
        sysfs_raw = raw.get("sysfs") or {}
        sim_raw = raw.get("simulation")

        cfg = GpioConfig(
            sysfs=_build_sysfs_cfg(sysfs_raw),
            simulation=_build_simulation_cfg(sim_raw) if sim_raw else None,
        )
    except KeyError as exc:
        raise ConfigurationError(f"Missing required config key: {exc}") from exc
    except (TypeError, ValueError, AttributeError) as exc:
        raise ConfigurationError(f"Invalid config schema: {exc}") from exc

    if cfg.simulation is not None:
        _validate_simulation_config(cfg.simulation)
    return cfg


def _validate_simulation_config(sim: SimulationConfig) -> None:
    """Fail fast on wiring that the simulation graph would reject."""
    if sim.max_depth <= 0:
        raise ConfigurationError("simulation.max_depth", "must be positive")

    for source, targets in sim.wires.items():
        if source not in sim.pins:
            raise ConfigurationError("simulation.wires", f"unknown source pin '{source}'")
        for target in targets:
            target_cfg = sim.pins.get(target)
            if target_cfg is None:
                raise ConfigurationError(
                    "simulation.wires", f"unknown target pin '{target}' of '{source}'"
                )
            if target_cfg.direction is not Direction.INPUT:
                raise ConfigurationError(
                    "simulation.wires",
                    f"'{source}' is wired to '{target}', which is not an input",
                )
            if target_cfg.initial:
                raise ConfigurationError(
                    f"simulation.pins.{target}.initial",
                    f"'{target}' takes its state from '{source}'",
                )


def load_config(path: Union[str, Path]) -> GpioConfig:
    """Load and validate configuration from a YAML file.

    Args:
        path: Path to the YAML config.

    Returns:
        GpioConfig instance. Missing sections fall back to defaults.

    Raises:
        ConfigurationError: on parse or validation errors
    """

    raw = _load_yaml_file(Path(path))

    return _parse_gpio_cfg_from_dict(raw=raw)


def get_config(path: Union[str, Path]) -> GpioConfig:
    """Return the loaded config for path, loading and caching if necessary.

    THREAD SAFETY: This function is thread-safe. Multiple threads can
    safely call this concurrently.
    """
    key = str(Path(path).resolve())
    with _CACHE_LOCK:
        if key not in _LOADER_CACHE:
            _LOADER_CACHE[key] = load_config(path)
        return _LOADER_CACHE[key]


def clear_config_cache() -> None:
    """Clear all cached configurations.

    All subsequent calls to get_config() will reload from disk.
    """
    with _CACHE_LOCK:
        _LOADER_CACHE.clear()
