# interface/backend/config.py

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


CONFIG_ENV_VAR = "EXPRESSION_EXPLORER_CONFIG"
DATASET_SOURCES = ("demo", "files")


class ConfigError(RuntimeError):
    """Raised when the app configuration is missing or invalid."""


@dataclass
class DatasetConfig:
    source: str = "demo"
    name: Optional[str] = None
    measurements_path: Optional[Path] = None
    annotations_path: Optional[Path] = None
    samples_path: Optional[Path] = None
    identifier_column: str = "identifier"
    symbol_column: str = "symbol"
    sample_column: str = "sample"
    group_column: str = "group"
    group_levels: Optional[List[str]] = field(default_factory=lambda: ["positive", "negative"])
    demo_seed: int = 1
    demo_samples: int = 120


@dataclass
class AnalysisConfig:
    equal_var: bool = False
    conf_level: float = 0.95
    alpha: float = 0.05


@dataclass
class UIConfig:
    default_symbol: str = "ESR1"
    show_points: bool = True


@dataclass
class AppConfig:
    raw: Dict[str, Any]
    dataset: DatasetConfig
    analysis: AnalysisConfig
    ui: UIConfig
    log_level: str = "INFO"


def _default_config_path() -> Path:
    """`configs/default.yaml` at the project root."""
    return Path(__file__).resolve().parents[2] / "configs" / "default.yaml"


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(
            f"Config file not found at '{path}'. "
            f"Set {CONFIG_ENV_VAR} to a valid YAML config."
        )
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse config YAML at '{path}': {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config at '{path}' must be a YAML mapping.")
    return data


def _resolve_path(value: Any, base: Path) -> Optional[Path]:
    if not value:
        return None
    path = Path(str(value)).expanduser()
    return path if path.is_absolute() else base / path


def _coerce_dataset(section: Any, base: Path) -> DatasetConfig:
    if not isinstance(section, dict):
        return DatasetConfig()

    source = str(section.get("source", "demo"))
    if source not in DATASET_SOURCES:
        raise ConfigError(f"'dataset.source' must be one of {DATASET_SOURCES}, got '{source}'.")

    files = section.get("files") or {}
    columns = section.get("columns") or {}
    demo = section.get("demo") or {}
    if not all(isinstance(s, dict) for s in (files, columns, demo)):
        raise ConfigError("'dataset.files', 'dataset.columns' and 'dataset.demo' must be mappings.")

    levels = section.get("group_levels", ["positive", "negative"])
    if levels is not None:
        if not isinstance(levels, list) or len(levels) != 2:
            raise ConfigError("'dataset.group_levels' must be a list of exactly two values.")
        levels = [str(v) for v in levels]

    cfg = DatasetConfig(
        source=source,
        name=section.get("name"),
        measurements_path=_resolve_path(files.get("measurements"), base),
        annotations_path=_resolve_path(files.get("annotations"), base),
        samples_path=_resolve_path(files.get("samples"), base),
        identifier_column=str(columns.get("identifier", "identifier")),
        symbol_column=str(columns.get("symbol", "symbol")),
        sample_column=str(columns.get("sample", "sample")),
        group_column=str(columns.get("group", "group")),
        group_levels=levels,
        demo_seed=int(demo.get("seed", 1)),
        demo_samples=int(demo.get("n_samples", 120)),
    )

    if cfg.source == "files":
        missing = [
            key for key, value in (
                ("measurements", cfg.measurements_path),
                ("annotations", cfg.annotations_path),
                ("samples", cfg.samples_path),
            ) if value is None
        ]
        if missing:
            raise ConfigError(f"'dataset.files' is missing: {', '.join(missing)}")
    return cfg


def _coerce_bool(section: Dict[str, Any], key: str, default: bool, label: str) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"'{label}.{key}' must be true or false, got {value!r}.")
    return value


def _coerce_analysis(section: Any) -> AnalysisConfig:
    if not isinstance(section, dict):
        return AnalysisConfig()
    cfg = AnalysisConfig(
        equal_var=_coerce_bool(section, "equal_var", False, "analysis"),
        conf_level=float(section.get("conf_level", 0.95)),
        alpha=float(section.get("alpha", 0.05)),
    )
    for name in ("conf_level", "alpha"):
        if not 0 < getattr(cfg, name) < 1:
            raise ConfigError(f"'analysis.{name}' must be between 0 and 1.")
    return cfg


def _coerce_ui(section: Any) -> UIConfig:
    if not isinstance(section, dict):
        return UIConfig()
    return UIConfig(
        default_symbol=str(section.get("default_symbol", "ESR1")),
        show_points=_coerce_bool(section, "show_points", True, "ui"),
    )


def _coerce_log_level(section: Any) -> str:
    level = "INFO"
    if isinstance(section, dict):
        level = str(section.get("level", "INFO")).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"Unknown logging level '{level}'.")
    return level


_CACHED_CONFIG: Optional[AppConfig] = None


def load_config(force_reload: bool = False) -> AppConfig:
    """
    Load and validate the app configuration.

    Precedence:
    1. Use path from EXPRESSION_EXPLORER_CONFIG if set.
    2. Otherwise fall back to `configs/default.yaml`.

    Relative data paths are resolved against the config file's directory.
    """

    global _CACHED_CONFIG
    if _CACHED_CONFIG is not None and not force_reload:
        return _CACHED_CONFIG

    env_path = os.environ.get(CONFIG_ENV_VAR)
    path = Path(env_path).expanduser() if env_path else _default_config_path()

    raw = _load_yaml(path)
    base = path.resolve().parent

    _CACHED_CONFIG = AppConfig(
        raw=raw,
        dataset=_coerce_dataset(raw.get("dataset") or {}, base),
        analysis=_coerce_analysis(raw.get("analysis") or {}),
        ui=_coerce_ui(raw.get("ui") or {}),
        log_level=_coerce_log_level(raw.get("logging") or {}),
    )
    return _CACHED_CONFIG


__all__ = [
    "AppConfig",
    "DatasetConfig",
    "AnalysisConfig",
    "UIConfig",
    "ConfigError",
    "CONFIG_ENV_VAR",
    "load_config",
]
