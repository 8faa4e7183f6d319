"""JSON persistence for the live timer configuration."""

from __future__ import annotations

import logging
from dataclasses import fields
from pathlib import Path
from typing import Any, Mapping, Optional

from timerboard import BoardSettings, BoardSettingsError, Configuration, Timer

from .errors import MalformedRecordError, PersistenceError
from .files import read_json, write_json_atomic
from .records import timer_from_record, timers_to_records

STATE_SCHEMA_VERSION = 1
DEFAULT_STATE_FILE = "config.json"

# Older config files used these names for the same settings.
_LEGACY_SETTING_KEYS = {
    "darkmode": "dark_mode",
    "activecolor": "active_color",
    "reverseadding": "insert_at_front",
    "move_finished_timer": "move_finished_to_end",
    "action_timeout": "completion_action",
    "timer_colors": "tag_colors",
}


def configuration_to_dict(config: Configuration) -> dict[str, Any]:
    settings = config.settings
    payload: dict[str, Any] = {"schema_version": STATE_SCHEMA_VERSION}
    for item in fields(BoardSettings):
        value = getattr(settings, item.name)
        payload[item.name] = dict(value) if isinstance(value, dict) else value
    payload["timers"] = timers_to_records(config.timers)
    return payload


def configuration_from_dict(
    raw: Any,
    *,
    logger: Optional[logging.Logger] = None,
) -> Configuration:
    """Build a configuration, replacing any unusable field with its default."""
    logger = logger or logging.getLogger("storage.state")
    if not isinstance(raw, Mapping):
        raise PersistenceError("Root state JSON value must be an object.")

    raw = _rename_legacy_keys(raw)
    defaulted: set[str] = set()
    settings = BoardSettings()
    for item in fields(BoardSettings):
        if item.name not in raw:
            defaulted.add(item.name)
            continue
        value = raw[item.name]
        if item.name == "tag_colors" and isinstance(value, Mapping):
            value = {str(tag).lower(): color for tag, color in value.items()}
        candidate = _try_replace(settings, item.name, value)
        if candidate is None:
            defaulted.add(item.name)
        else:
            settings = candidate

    timers: list[Timer] = []
    raw_timers = raw.get("timers", [])
    if not isinstance(raw_timers, list):
        defaulted.add("timers")
        raw_timers = []
    for index, item in enumerate(raw_timers):
        try:
            timers.append(timer_from_record(item, tag_colors=settings.tag_colors))
        except (MalformedRecordError, ValueError) as error:
            defaulted.add(f"timers[{index}]")
            logger.warning("Skipping unreadable timer record %d: %s", index, error)

    if defaulted:
        logger.warning(
            "Loaded state with missing or invalid values that were defaulted: %s",
            ", ".join(sorted(defaulted)),
        )
    return Configuration(
        settings=settings,
        timers=timers,
        logger=logging.getLogger("timerboard"),
    )


class StateStore:
    """Loads and saves the configuration JSON document."""

    def __init__(self, path: str | Path, *, logger: Optional[logging.Logger] = None):
        self._path = Path(path)
        self._logger = logger or logging.getLogger("storage.state")

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Configuration:
        """Return the stored configuration or a default one when unusable."""
        if not self._path.exists():
            self._logger.info("No state file at %s, starting with defaults.", self._path)
            return Configuration(logger=logging.getLogger("timerboard"))
        try:
            config = configuration_from_dict(read_json(self._path), logger=self._logger)
        except PersistenceError as error:
            self._logger.warning(
                "Failed to load %s, falling back to defaults: %s",
                self._path,
                error,
            )
            return Configuration(logger=logging.getLogger("timerboard"))
        self._logger.info("Loaded %d timers from %s", len(config), self._path)
        return config

    def save(self, config: Configuration) -> None:
        write_json_atomic(self._path, configuration_to_dict(config))
        self._logger.debug("Saved state to %s", self._path)


def _rename_legacy_keys(raw: Mapping[str, Any]) -> dict[str, Any]:
    renamed = dict(raw)
    for old, new in _LEGACY_SETTING_KEYS.items():
        if old in renamed and new not in renamed:
            renamed[new] = renamed.pop(old)
    return renamed


def _try_replace(settings: BoardSettings, name: str, value: Any) -> Optional[BoardSettings]:
    expected = type(getattr(settings, name))
    if expected is int and (isinstance(value, bool) or not isinstance(value, int)):
        return None
    if not isinstance(value, expected):
        return None
    try:
        return BoardSettings(**{**_settings_kwargs(settings), name: value})
    except BoardSettingsError:
        return None


def _settings_kwargs(settings: BoardSettings) -> dict[str, Any]:
    return {item.name: getattr(settings, item.name) for item in fields(BoardSettings)}
