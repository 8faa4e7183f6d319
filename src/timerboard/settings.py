"""Immutable user settings carried by a timer configuration."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field

from .constants import (
    ACCEPTED_COLORS,
    ACTION_NONE,
    COMPLETION_ACTIONS,
    DEFAULT_ACTIVE_COLOR,
    DEFAULT_BIG_BREAK_MINUTES,
    DEFAULT_POMODORO_MINUTES,
    DEFAULT_SMALL_BREAK_MINUTES,
    DEFAULT_TAG_COLORS,
    MAX_POMODORO_MINUTES,
)

_COLOR_KEY_PREFIX = "color."
_BOOL_FIELDS = ("dark_mode", "insert_at_front", "move_finished_to_end")
_MINUTE_FIELDS = ("pomodoro_time", "pomodoro_smallbreak", "pomodoro_bigbreak")


class BoardSettingsError(Exception):
    """Raised when a settings value is invalid."""


@dataclass(frozen=True)
class BoardSettings:
    """User settings persisted alongside the timer list."""
    dark_mode: bool = True
    active_color: str = DEFAULT_ACTIVE_COLOR
    insert_at_front: bool = False
    move_finished_to_end: bool = True
    completion_action: str = ACTION_NONE
    pomodoro_time: int = DEFAULT_POMODORO_MINUTES
    pomodoro_smallbreak: int = DEFAULT_SMALL_BREAK_MINUTES
    pomodoro_bigbreak: int = DEFAULT_BIG_BREAK_MINUTES
    tag_colors: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_TAG_COLORS))

    def __post_init__(self) -> None:
        if self.active_color not in ACCEPTED_COLORS:
            raise BoardSettingsError(f"Unknown color: {self.active_color}")
        if self.completion_action not in COMPLETION_ACTIONS:
            allowed = ", ".join(COMPLETION_ACTIONS)
            raise BoardSettingsError(f"completion_action must be one of: {allowed}")
        for name in _MINUTE_FIELDS:
            value = getattr(self, name)
            if not 0 <= value <= MAX_POMODORO_MINUTES:
                raise BoardSettingsError(
                    f"{name} must be in [0, {MAX_POMODORO_MINUTES}], got: {value}"
                )
        for tag, color in self.tag_colors.items():
            if tag != tag.lower() or not tag.strip():
                raise BoardSettingsError(f"Tag names must be lower-case words, got: {tag!r}")
            if color not in ACCEPTED_COLORS:
                raise BoardSettingsError(f"Unknown color for tag {tag}: {color}")

    @property
    def tag_names(self) -> frozenset[str]:
        return frozenset(self.tag_colors)

    def color_for(self, tag: str | None) -> str | None:
        if tag is None:
            return None
        return self.tag_colors.get(tag.lower())


def update_setting(settings: BoardSettings, key: str, raw_value: str) -> BoardSettings:
    """Return a copy of `settings` with one field parsed from command text."""
    name = key.strip().lower()
    value = raw_value.strip()

    if name.startswith(_COLOR_KEY_PREFIX):
        tag = name[len(_COLOR_KEY_PREFIX):]
        if not tag:
            raise BoardSettingsError("Missing tag name after 'color.'")
        colors = dict(settings.tag_colors)
        colors[tag] = _as_color(value, name)
        return dataclasses.replace(settings, tag_colors=colors)

    if name in _BOOL_FIELDS:
        return dataclasses.replace(settings, **{name: _as_bool(value, name)})
    if name in _MINUTE_FIELDS:
        return dataclasses.replace(settings, **{name: _as_minutes(value, name)})
    if name == "active_color":
        return dataclasses.replace(settings, active_color=_as_color(value, name))
    if name == "completion_action":
        return dataclasses.replace(settings, completion_action=_as_action(value, name))

    raise BoardSettingsError(f"Unknown setting: {key}")


def _as_bool(value: str, field_name: str) -> bool:
    lowered = value.lower()
    if lowered in ("true", "1", "yes", "on"):
        return True
    if lowered in ("false", "0", "no", "off"):
        return False
    raise BoardSettingsError(f"{field_name} must be a boolean.")


def _as_minutes(value: str, field_name: str) -> int:
    if not value.isascii() or not value.isdigit():
        raise BoardSettingsError(f"{field_name} must be a whole number of minutes.")
    return int(value)


def _as_color(value: str, field_name: str) -> str:
    for color in ACCEPTED_COLORS:
        if color.lower() == value.lower():
            return color
    raise BoardSettingsError(f"{field_name} must be one of: {', '.join(ACCEPTED_COLORS)}.")


def _as_action(value: str, field_name: str) -> str:
    for action in COMPLETION_ACTIONS:
        if action.lower() == value.lower():
            return action
    raise BoardSettingsError(
        f"{field_name} must be one of: {', '.join(COMPLETION_ACTIONS)}."
    )
