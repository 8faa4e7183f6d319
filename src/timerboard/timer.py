"""Single countdown timer with repeat and completion behavior."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

from .constants import (
    LANE_LEFT,
    LANES,
    OUTCOME_JUST_FINISHED,
    OUTCOME_REARMED,
    OUTCOME_RUNNING,
)

Lane = Literal["left", "right"]
TimerOutcome = Literal["running", "just_finished", "rearmed"]


@dataclass
class Timer:
    """Mutable countdown entity owned by a `Configuration`."""
    description: str
    initial_duration_secs: int
    remaining_secs: int
    lane: Lane = LANE_LEFT
    completion_tag: Optional[str] = None
    repeat_count: int = 0
    id: int = field(default=0, compare=False)
    is_active: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        if self.lane not in LANES:
            raise ValueError(f"lane must be one of {LANES}, got: {self.lane!r}")
        if self.initial_duration_secs < 0 or self.remaining_secs < 0:
            raise ValueError("timer durations must not be negative")
        if self.repeat_count < 0:
            raise ValueError("repeat_count must not be negative")

    @classmethod
    def create(
        cls,
        description: str,
        duration_secs: int,
        *,
        lane: Lane = LANE_LEFT,
        completion_tag: Optional[str] = None,
    ) -> "Timer":
        return cls(
            description=description,
            initial_duration_secs=duration_secs,
            remaining_secs=duration_secs,
            lane=lane,
            completion_tag=completion_tag,
        )

    @property
    def is_finished(self) -> bool:
        return self.remaining_secs == 0

    def tick(self) -> TimerOutcome:
        """Advance by one second and report what happened.

        A spent timer is left untouched so it cannot complete twice.
        """
        if self.remaining_secs == 0:
            return OUTCOME_RUNNING

        self.is_active = True
        self.remaining_secs -= 1
        if self.remaining_secs > 0:
            return OUTCOME_RUNNING

        self.is_active = False
        if self.repeat_count > 0:
            self.remaining_secs = self.initial_duration_secs
            self.repeat_count -= 1
            return OUTCOME_REARMED
        return OUTCOME_JUST_FINISHED

    def add_seconds(self, seconds: int) -> None:
        self.remaining_secs += seconds
        self.initial_duration_secs += seconds

    def subtract_seconds(self, seconds: int) -> None:
        # The baseline only moves when the full amount could be taken off.
        if self.remaining_secs < seconds:
            self.remaining_secs = 0
            return
        self.remaining_secs -= seconds
        self.initial_duration_secs = max(0, self.initial_duration_secs - seconds)


def split_duration(seconds: int) -> tuple[int, int, int]:
    """Return `(hours, minutes, seconds)` for a non-negative duration."""
    hours, remainder = divmod(max(0, int(seconds)), 3600)
    minutes, secs = divmod(remainder, 60)
    return hours, minutes, secs


def format_clock(seconds: int) -> str:
    """Format a duration as `HH:MM:SS`; hours grow past two digits."""
    hours, minutes, secs = split_duration(seconds)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
