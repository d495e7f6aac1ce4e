"""Load analytics profiles from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any
import tomllib

from domain.metrics.trends import DEFAULT_AUTO_THRESHOLD, DEFAULT_MOMENTUM_WINDOW
from domain.ratings.solver import DEFAULT_RIDGE

ROOT_DIR = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "analytics"


@dataclass(frozen=True)
class AnalyticsParameters:
    ridge: float = DEFAULT_RIDGE
    auto_threshold: float = DEFAULT_AUTO_THRESHOLD
    momentum_window: int = DEFAULT_MOMENTUM_WINDOW


@dataclass(frozen=True)
class AnalyticsConfig:
    """One named set of analytics parameters, read from ``file_path``."""

    name: str
    description: str | None
    file_path: Path
    parameters: AnalyticsParameters


def load_analytics_configs(config_dir: Path = DEFAULT_CONFIG_DIR) -> list[AnalyticsConfig]:
    """Parse every ``*.toml`` profile in ``config_dir``, ordered by file name.

    Profile names must be unique within the directory.
    """
    if not config_dir.exists():
        raise FileNotFoundError(f"Config directory not found: {config_dir}")
    if not config_dir.is_dir():
        raise NotADirectoryError(f"Config path is not a directory: {config_dir}")

    profile_files = sorted(config_dir.glob("*.toml"))
    if not profile_files:
        raise ValueError(f"No .toml config files found in: {config_dir}")

    configs: list[AnalyticsConfig] = []
    seen: dict[str, Path] = {}
    for file_path in profile_files:
        with file_path.open("rb") as file:
            config = _parse_analytics_config(tomllib.load(file), file_path)
        if config.name in seen:
            raise ValueError(
                f"Duplicate analytics profile names found in {config_dir}: "
                f"'{config.name}' in {seen[config.name].name} and {file_path.name}"
            )
        seen[config.name] = file_path
        configs.append(config)

    return configs


def _parse_analytics_config(raw: dict[str, Any], file_path: Path) -> AnalyticsConfig:
    system_raw = raw.get("system", {})
    analytics_raw = raw.get("analytics", {})

    name = str(system_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [system].name is required")

    description_value = system_raw.get("description")

    parameters = AnalyticsParameters(
        ridge=float(analytics_raw.get("ridge", DEFAULT_RIDGE)),
        auto_threshold=float(analytics_raw.get("auto_threshold", DEFAULT_AUTO_THRESHOLD)),
        momentum_window=int(analytics_raw.get("momentum_window", DEFAULT_MOMENTUM_WINDOW)),
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    return AnalyticsConfig(
        name=name,
        description=None if description_value is None else str(description_value),
        file_path=file_path,
        parameters=parameters,
    )


def _validate_parameters(*, file_path: Path, parameters: AnalyticsParameters) -> None:
    if parameters.ridge <= 0.0:
        raise ValueError(f"{file_path}: [analytics].ridge must be > 0")
    if parameters.auto_threshold < 0.0:
        raise ValueError(f"{file_path}: [analytics].auto_threshold must be >= 0")
    if parameters.momentum_window < 1:
        raise ValueError(f"{file_path}: [analytics].momentum_window must be >= 1")


__all__ = [
    "AnalyticsConfig",
    "AnalyticsParameters",
    "DEFAULT_CONFIG_DIR",
    "load_analytics_configs",
]
