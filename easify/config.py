"""Configuration support for pattern compilation and unpacking."""

from __future__ import annotations

import json
import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import EasifyError

CONFIG_CANDIDATES = ("easify.toml", ".easifyrc")

ENV_CACHE_SIZE = "EASIFY_PATTERN_CACHE_SIZE"
ENV_REJECT_DUPLICATES = "EASIFY_REJECT_DUPLICATE_NAMES"
ENV_LOG_LEVEL = "EASIFY_LOG_LEVEL"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}
_LOG_LEVELS = {"debug", "info", "warn", "warning", "error"}


class ConfigError(EasifyError):
    """Raised when a configuration file or override holds an invalid value."""

    code = "E_CONFIG"


@dataclass(frozen=True)
class UnpackSettings:
    """Process-wide knobs consulted by the compiler and the pattern cache."""

    pattern_cache_size: int = 128
    reject_duplicate_names: bool = False
    log_level: str = "warning"
    path: Optional[Path] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)


def _coerce_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(f"'{key}' must be a boolean, got {value!r}")


def _coerce_cache_size(value: Any, key: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"'{key}' must be an integer, got {value!r}")
    try:
        size = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"'{key}' must be an integer, got {value!r}") from exc
    if size < 0:
        raise ConfigError(f"'{key}' must not be negative, got {size}")
    return size


def _coerce_log_level(value: Any, key: str) -> str:
    level = str(value).strip().lower()
    if level not in _LOG_LEVELS:
        raise ConfigError(
            f"'{key}' must be one of {', '.join(sorted(_LOG_LEVELS))}, got {value!r}"
        )
    return level


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc.msg}", source=str(path)) from exc


def _read_toml_config(path: Path) -> Dict[str, Any]:
    with path.open("rb") as handle:
        try:
            return tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {path}: {exc}", source=str(path)) from exc


def parse_settings(data: Mapping[str, Any], path: Optional[Path] = None) -> UnpackSettings:
    section = data.get("easify")
    if not isinstance(section, Mapping):
        section = data
    defaults = UnpackSettings()
    cache_size = defaults.pattern_cache_size
    reject_duplicates = defaults.reject_duplicate_names
    log_level = defaults.log_level
    if "pattern_cache_size" in section:
        cache_size = _coerce_cache_size(section["pattern_cache_size"], "pattern_cache_size")
    if "reject_duplicate_names" in section:
        reject_duplicates = _coerce_bool(section["reject_duplicate_names"], "reject_duplicate_names")
    if "log_level" in section:
        log_level = _coerce_log_level(section["log_level"], "log_level")
    return UnpackSettings(
        pattern_cache_size=cache_size,
        reject_duplicate_names=reject_duplicates,
        log_level=log_level,
        path=path,
        raw=dict(section),
    )


def apply_env_overrides(
    settings: UnpackSettings,
    environ: Optional[Mapping[str, str]] = None,
) -> UnpackSettings:
    env = os.environ if environ is None else environ
    updates: Dict[str, Any] = {}
    if env.get(ENV_CACHE_SIZE) is not None:
        updates["pattern_cache_size"] = _coerce_cache_size(env[ENV_CACHE_SIZE], ENV_CACHE_SIZE)
    if env.get(ENV_REJECT_DUPLICATES) is not None:
        updates["reject_duplicate_names"] = _coerce_bool(env[ENV_REJECT_DUPLICATES], ENV_REJECT_DUPLICATES)
    if env.get(ENV_LOG_LEVEL) is not None:
        updates["log_level"] = _coerce_log_level(env[ENV_LOG_LEVEL], ENV_LOG_LEVEL)
    if not updates:
        return settings
    return replace(settings, **updates)


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        return explicit if explicit.exists() else None
    for candidate in CONFIG_CANDIDATES:
        path = root / candidate
        if path.exists():
            return path
    return None


def load_settings(
    root: Optional[Path] = None,
    explicit: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> UnpackSettings:
    """
    Resolve settings from ``easify.toml`` or ``.easifyrc`` under ``root``.

    Values may live at the top level or under an ``[easify]`` table.
    Environment overrides are applied last.
    """
    root = (root or Path.cwd()).resolve()
    config_path = locate_config_file(root, explicit)
    if explicit is not None and config_path is None:
        raise ConfigError(f"Configuration file not found: {explicit}", source=str(explicit))
    if config_path is None:
        settings = UnpackSettings()
    else:
        if config_path.suffix == ".toml":
            data = _read_toml_config(config_path)
        else:
            data = _read_json_config(config_path)
        if not isinstance(data, Mapping):
            raise ConfigError("Configuration root must be a table/object", source=str(config_path))
        settings = parse_settings(data, config_path)
    return apply_env_overrides(settings, environ)


_SETTINGS: Optional[UnpackSettings] = None


def get_settings() -> UnpackSettings:
    """Return the active process-wide settings, loading defaults lazily."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = apply_env_overrides(UnpackSettings())
    return _SETTINGS


def configure(settings: Optional[UnpackSettings] = None) -> UnpackSettings:
    """Install ``settings`` as the process-wide settings (``None`` resets)."""
    global _SETTINGS
    _SETTINGS = settings
    return get_settings()


__all__ = [
    "ConfigError",
    "UnpackSettings",
    "apply_env_overrides",
    "configure",
    "get_settings",
    "load_settings",
    "locate_config_file",
    "parse_settings",
]
