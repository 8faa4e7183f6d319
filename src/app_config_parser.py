"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from app_config_schema import (
    AppConfig,
    AppConfigurationError,
    LoggingSettings,
    NotifierSettings,
    RuntimeSettings,
    StateSettings,
)

_ALLOWED_SOUNDS = {"bell", "tone", "off"}
_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    return AppConfig(
        state=_parse_state_settings(_section(raw, "state"), base_dir=base_dir),
        runtime=_parse_runtime_settings(_section(raw, "runtime")),
        notifier=_parse_notifier_settings(_section(raw, "notifier")),
        logging=_parse_logging_settings(_section(raw, "logging")),
        source_file=source_file,
    )


def _parse_state_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> StateSettings:
    path = _as_str(section.get("path", "config.json"), "state.path")
    sets_dir = _as_str(section.get("sets_dir", "sets"), "state.sets_dir")
    if not path:
        raise AppConfigurationError("state.path is required.")
    if not sets_dir:
        raise AppConfigurationError("state.sets_dir is required.")
    return StateSettings(
        path=_resolve_path(base_dir, path),
        sets_dir=_resolve_path(base_dir, sets_dir),
    )


def _parse_runtime_settings(section: Mapping[str, Any]) -> RuntimeSettings:
    tick_seconds = _as_float(section.get("tick_seconds", 1.0), "runtime.tick_seconds")
    if tick_seconds <= 0:
        raise AppConfigurationError("runtime.tick_seconds must be greater than zero.")
    autosave_ticks = _as_int(section.get("autosave_ticks", 30), "runtime.autosave_ticks")
    if autosave_ticks < 1:
        raise AppConfigurationError("runtime.autosave_ticks must be at least 1.")
    return RuntimeSettings(tick_seconds=tick_seconds, autosave_ticks=autosave_ticks)


def _parse_notifier_settings(section: Mapping[str, Any]) -> NotifierSettings:
    tone_frequency_hz = _as_float(
        section.get("tone_frequency_hz", 880.0),
        "notifier.tone_frequency_hz",
    )
    tone_seconds = _as_float(section.get("tone_seconds", 0.4), "notifier.tone_seconds")
    if tone_frequency_hz <= 0:
        raise AppConfigurationError("notifier.tone_frequency_hz must be greater than zero.")
    if tone_seconds <= 0:
        raise AppConfigurationError("notifier.tone_seconds must be greater than zero.")
    return NotifierSettings(
        enabled=_as_bool(section.get("enabled", True), "notifier.enabled"),
        sound=_as_choice(section.get("sound", "bell"), "notifier.sound", _ALLOWED_SOUNDS),
        desktop=_as_bool(section.get("desktop", True), "notifier.desktop"),
        tone_frequency_hz=tone_frequency_hz,
        tone_seconds=tone_seconds,
    )


def _parse_logging_settings(section: Mapping[str, Any]) -> LoggingSettings:
    level = _as_str(section.get("level", "INFO"), "logging.level").upper()
    if level not in _ALLOWED_LOG_LEVELS:
        allowed = ", ".join(sorted(_ALLOWED_LOG_LEVELS))
        raise AppConfigurationError(f"logging.level must be one of: {allowed}.")
    return LoggingSettings(level=level)


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be a float.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be a float.") from error
    raise AppConfigurationError(f"{field} must be a float.")


def _as_choice(value: Any, field: str, allowed: set[str]) -> str:
    name = _as_str(value, field).lower()
    if name not in allowed:
        raise AppConfigurationError(f"{field} must be one of: {', '.join(sorted(allowed))}.")
    return name


def _resolve_path(base_dir: Path, raw: str) -> str:
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)
