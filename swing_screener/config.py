"""
Configuration for the swing screener.

Layers, lowest priority first:
  1. ``config/default.toml``   committed defaults
  2. ``local.toml``            next to the chosen TOML file, if present (gitignored)
  3. ``.env``                  at the project root, if present (gitignored)
  4. ``SWING_SCREENER_*``      process environment

``load_config()`` returns a frozen ``AppConfig``; the CLI builds one per
command and hands it to ``ScreenStage`` and ``configure_logging``.

Environment variables::

    SWING_SCREENER_LOG_LEVEL       [logging].level
    SWING_SCREENER_MAX_WORKERS     [screener].max_workers
    SWING_SCREENER_SORT_BY_SCORE   [screener].sort_by_score
    SWING_SCREENER_SNAPSHOT_FILE   [screener].default_snapshot_file
    SWING_SCREENER_PROVIDER_URL    [provider].base_url
    SWING_SCREENER_API_KEY         [provider].api_key
    SWING_SCREENER_TIMEOUT_S       [provider].timeout_s
    SWING_SCREENER_DEBUG           debug
"""

from __future__ import annotations

import copy
import os
import tomllib
from pathlib import Path
from typing import Any, Callable, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ScreenerConfig(BaseModel):
    """How a screening pass scores and orders its batch."""

    model_config = ConfigDict(frozen=True)

    max_workers: int = 1
    sort_by_score: bool = False
    default_snapshot_file: str = "data/snapshots/latest.json"

    @field_validator("max_workers")
    @classmethod
    def _check_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_workers must be >= 1, got {v}.")
        return v


class ProviderConfig(BaseModel):
    """Remote screener service (used when ``base_url`` is set)."""

    model_config = ConfigDict(frozen=True)

    base_url: str = ""
    timeout_s: float = 30.0
    api_key: Optional[str] = None

    @field_validator("timeout_s")
    @classmethod
    def _check_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeout_s must be positive, got {v}.")
        return v


class LoggingConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def _check_level(cls, v: str) -> str:
        if v.upper() not in _LOG_LEVELS:
            raise ValueError(f"Log level must be one of {list(_LOG_LEVELS)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Merged, validated configuration for one CLI invocation."""

    model_config = ConfigDict(frozen=True)

    screener: ScreenerConfig = ScreenerConfig()
    provider: ProviderConfig = ProviderConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "default.toml"


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


# env var -> (section or None for top level, key, converter)
_ENV_OVERRIDES: dict[str, tuple[Optional[str], str, Callable[[str], Any]]] = {
    "SWING_SCREENER_LOG_LEVEL":     ("logging",  "level",                 str),
    "SWING_SCREENER_MAX_WORKERS":   ("screener", "max_workers",           int),
    "SWING_SCREENER_SORT_BY_SCORE": ("screener", "sort_by_score",         _parse_bool),
    "SWING_SCREENER_SNAPSHOT_FILE": ("screener", "default_snapshot_file", str),
    "SWING_SCREENER_PROVIDER_URL":  ("provider", "base_url",              str),
    "SWING_SCREENER_API_KEY":       ("provider", "api_key",               str),
    "SWING_SCREENER_TIMEOUT_S":     ("provider", "timeout_s",             float),
    "SWING_SCREENER_DEBUG":         (None,       "debug",                 _parse_bool),
}


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Build an ``AppConfig`` from TOML, ``.env`` and the environment.

    Args:
        config_path: TOML file to use instead of ``config/default.toml``.
            Without it, a missing default file simply means built-in defaults.

    Raises:
        FileNotFoundError: ``config_path`` was given but does not exist.
        pydantic.ValidationError: A merged value is out of range.
        ValueError: An environment override cannot be converted.
    """
    load_dotenv(dotenv_path=PROJECT_ROOT / ".env", override=False)

    if config_path is not None:
        toml_path: Optional[Path] = Path(config_path)
        if not toml_path.exists():
            raise FileNotFoundError(f"Config file not found: {toml_path}")
    elif DEFAULT_CONFIG_PATH.exists():
        toml_path = DEFAULT_CONFIG_PATH
    else:
        toml_path = None

    raw: dict[str, Any] = {}
    if toml_path is not None:
        raw = _read_toml(toml_path)
        local_path = toml_path.parent / "local.toml"
        if local_path.exists() and local_path != toml_path:
            raw = _deep_merge(raw, _read_toml(local_path))

    return AppConfig.model_validate(_apply_env_overrides(raw))


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` laid over it; nested tables merge."""
    merged = copy.deepcopy(base)
    for key, val in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(val, dict):
            merged[key] = _deep_merge(current, val)
        else:
            merged[key] = val
    return merged


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Copy ``raw`` and apply every set (non-empty) ``SWING_SCREENER_*`` variable."""
    merged = copy.deepcopy(raw)
    for name, (section, key, convert) in _ENV_OVERRIDES.items():
        value = os.environ.get(name)
        if not value:
            continue
        target = merged if section is None else merged.setdefault(section, {})
        target[key] = convert(value)
    return merged
