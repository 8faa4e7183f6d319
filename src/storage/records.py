"""Conversion between `Timer` objects and their JSON records."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from timerboard import Timer
from timerboard.constants import DEFAULT_TAG_COLORS, LANE_LEFT, LANE_RIGHT, LANES

from .errors import MalformedRecordError


def timer_to_record(timer: Timer) -> dict[str, Any]:
    return {
        "lane": timer.lane,
        "description": timer.description,
        "initial_duration_secs": timer.initial_duration_secs,
        "remaining_secs": timer.remaining_secs,
        "completion_tag": timer.completion_tag,
        "repeat_count": timer.repeat_count,
    }


def timers_to_records(timers: Iterable[Timer]) -> list[dict[str, Any]]:
    return [timer_to_record(timer) for timer in timers]


def timer_from_record(
    raw: Any,
    *,
    tag_colors: Optional[Mapping[str, str]] = None,
) -> Timer:
    """Decode one record, accepting the older `left_view`/`timeleft_secs` keys."""
    if not isinstance(raw, Mapping):
        raise MalformedRecordError("Timer record must be an object.")

    if "lane" in raw:
        lane = raw["lane"]
        if lane not in LANES:
            raise MalformedRecordError(f"Unknown lane: {lane!r}")
    elif "left_view" in raw:
        lane = LANE_LEFT if _as_bool(raw["left_view"], "left_view") else LANE_RIGHT
    else:
        lane = LANE_LEFT

    remaining = _as_seconds(_first(raw, "remaining_secs", "timeleft_secs"), "remaining_secs")
    initial_raw = _first(raw, "initial_duration_secs", "initial_time")
    initial = remaining if initial_raw is None else _as_seconds(initial_raw, "initial_duration_secs")

    description = raw.get("description", "")
    if not isinstance(description, str):
        raise MalformedRecordError("description must be a string.")

    repeat_raw = _first(raw, "repeat_count", "repeat_times")
    repeat_count = 0 if repeat_raw is None else _as_seconds(repeat_raw, "repeat_count")

    return Timer(
        description=description,
        initial_duration_secs=initial,
        remaining_secs=remaining,
        lane=lane,
        completion_tag=_completion_tag(raw, tag_colors or DEFAULT_TAG_COLORS),
        repeat_count=repeat_count,
    )


def timers_from_records(
    raw: Any,
    *,
    tag_colors: Optional[Mapping[str, str]] = None,
) -> list[Timer]:
    if not isinstance(raw, list):
        raise MalformedRecordError("Timer list must be an array.")
    return [timer_from_record(item, tag_colors=tag_colors) for item in raw]


def _completion_tag(raw: Mapping[str, Any], tag_colors: Mapping[str, str]) -> Optional[str]:
    if "completion_tag" in raw:
        tag = raw["completion_tag"]
        if tag is None:
            return None
        if not isinstance(tag, str):
            raise MalformedRecordError("completion_tag must be a string or null.")
        return tag.strip().lower() or None

    # Older files stored the color itself; map it back to the first tag using it.
    legacy = raw.get("timer_type")
    if not isinstance(legacy, str) or not legacy.strip():
        return None
    for tag, color in tag_colors.items():
        if color == legacy:
            return tag
    return legacy.strip().lower()


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return None


def _as_seconds(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedRecordError(f"{field} must be an integer.")
    if value < 0:
        raise MalformedRecordError(f"{field} must not be negative.")
    return value


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    raise MalformedRecordError(f"{field} must be a boolean.")
