"""Ordered timer collection with settings, lane scheduling, and projections."""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from .constants import (
    ACTION_MARKERS,
    ACTION_NONE,
    LANE_LEFT,
    LANE_RIGHT,
    LANES,
    OUTCOME_JUST_FINISHED,
    OUTCOME_REARMED,
)
from .settings import BoardSettings
from .timer import Lane, Timer, TimerOutcome


class TimerBoardError(Exception):
    """Base exception for rejected timer collection mutations."""


class TimerNotFoundError(TimerBoardError):
    """Raised when no timer carries the requested id."""


class TimerIndexError(TimerBoardError):
    """Raised when a reorder or merge targets an invalid position."""


@dataclass(frozen=True)
class TimerSnapshot:
    """Read-only view of one timer, including derived display fields."""
    id: int
    lane: Lane
    description: str
    initial_duration_secs: int
    remaining_secs: int
    is_active: bool
    completion_tag: Optional[str]
    color: Optional[str]
    repeat_count: int
    end_time: Optional[dt.datetime]
    action_marker: str = ""


@dataclass(frozen=True)
class BoardSnapshot:
    """Immutable board view exposed to renderers and status output."""
    timers: tuple[TimerSnapshot, ...]
    paused: bool
    completion_action: str

    def lane(self, lane: Lane) -> tuple[TimerSnapshot, ...]:
        return tuple(timer for timer in self.timers if timer.lane == lane)


@dataclass(frozen=True)
class TickEvent:
    """Outcome of the one timer a lane advanced during a tick."""
    lane: Lane
    timer_id: int
    description: str
    outcome: TimerOutcome
    initial_duration_secs: int

    @property
    def reached_zero(self) -> bool:
        return self.outcome in (OUTCOME_JUST_FINISHED, OUTCOME_REARMED)


@dataclass(frozen=True)
class TickReport:
    """Result of one `tick_all` call."""
    events: tuple[TickEvent, ...] = ()
    paused: bool = False
    completion_action: Optional[str] = None
    action_event: Optional[TickEvent] = None

    @property
    def finished(self) -> tuple[TickEvent, ...]:
        return tuple(event for event in self.events if event.outcome == OUTCOME_JUST_FINISHED)


class Configuration:
    """Owns the ordered timer list and the settings that shape its behavior."""

    def __init__(
        self,
        *,
        settings: Optional[BoardSettings] = None,
        timers: Optional[Iterable[Timer]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._settings = settings or BoardSettings()
        self._timers: list[Timer] = list(timers or [])
        self._paused = False
        self._logger = logger or logging.getLogger("timerboard")
        self._reindex()

    @property
    def settings(self) -> BoardSettings:
        return self._settings

    @settings.setter
    def settings(self, settings: BoardSettings) -> None:
        self._settings = settings
        self._logger.info("Settings updated: %s", settings)

    @property
    def timers(self) -> tuple[Timer, ...]:
        return tuple(self._timers)

    @property
    def paused(self) -> bool:
        return self._paused

    def toggle_pause(self) -> bool:
        self._paused = not self._paused
        self._logger.info("Timers %s", "paused" if self._paused else "resumed")
        return self._paused

    def __len__(self) -> int:
        return len(self._timers)

    def get(self, timer_id: int) -> Timer:
        if not 0 <= timer_id < len(self._timers):
            raise TimerNotFoundError(f"No timer with id {timer_id}")
        return self._timers[timer_id]

    def add_timer(self, timer: Timer, *, reverse: bool = False) -> Timer:
        """Insert at the front when the reverse toggle and `reverse` disagree."""
        if self._settings.insert_at_front != reverse:
            self._timers.insert(0, timer)
        else:
            self._timers.append(timer)
        self._reindex()
        self._logger.info(
            "Timer added: id=%d lane=%s duration=%ss description=%s",
            timer.id,
            timer.lane,
            timer.initial_duration_secs,
            timer.description,
        )
        return timer

    def append_timer(self, timer: Timer) -> Timer:
        self._timers.append(timer)
        self._reindex()
        return timer

    def remove_timer(self, timer_id: int) -> Timer:
        timer = self.get(timer_id)
        del self._timers[timer_id]
        self._reindex()
        self._logger.info("Timer removed: description=%s", timer.description)
        return timer

    def clear(self) -> None:
        self._timers.clear()
        self._logger.info("All timers cleared")

    def replace_timers(self, timers: Iterable[Timer]) -> None:
        self._timers = list(timers)
        self._reindex()
        self._logger.info("Timer list replaced (%d timers)", len(self._timers))

    def move_timer(self, from_id: int, to_id: int) -> None:
        self._require_index(from_id)
        self._require_index(to_id)
        timer = self._timers.pop(from_id)
        self._timers.insert(to_id, timer)
        self._reindex()

    def move_up(self, timer_id: int) -> None:
        self._require_index(timer_id)
        if timer_id == 0:
            raise TimerIndexError("The first timer cannot move up")
        self._swap(timer_id, timer_id - 1)

    def move_down(self, timer_id: int) -> None:
        self._require_index(timer_id)
        if timer_id == len(self._timers) - 1:
            raise TimerIndexError("The last timer cannot move down")
        self._swap(timer_id, timer_id + 1)

    def merge_timers(self, timer_id: int, other_id: int) -> Timer:
        """Fold `other_id` into the timer found at `timer_id` after removal.

        The target index is read after `other_id` is gone, so merging a
        lower id into a higher one targets the following timer.
        """
        self.get(timer_id)
        self.get(other_id)
        if timer_id == other_id:
            raise TimerIndexError("A timer cannot be merged into itself")
        if timer_id >= len(self._timers) - 1:
            raise TimerIndexError(f"No timer at index {timer_id} after removal")

        removed = self._timers.pop(other_id)
        target = self._timers[timer_id]
        target.description += f" ({removed.description})"
        target.add_seconds(removed.remaining_secs)
        self._reindex()
        return target

    def all_finished(self) -> bool:
        return all(timer.remaining_secs == 0 for timer in self._timers)

    def tick_all(self) -> TickReport:
        """Advance the first unfinished timer of each lane by one second."""
        for timer in self._timers:
            timer.is_active = False
        if self._paused:
            return TickReport(paused=True)

        ticked: list[tuple[Timer, TimerOutcome]] = []
        for lane in LANES:
            timer = self._next_in_lane(lane)
            if timer is not None:
                ticked.append((timer, timer.tick()))

        just_finished = [timer for timer, outcome in ticked if outcome == OUTCOME_JUST_FINISHED]
        if self._settings.move_finished_to_end:
            # Timers compare by value, so locate each one by identity.
            finished_ids = {id(timer) for timer in just_finished}
            remaining = [timer for timer in self._timers if id(timer) not in finished_ids]
            self._timers = remaining + just_finished
        self._reindex()

        events = tuple(
            TickEvent(
                lane=timer.lane,
                timer_id=timer.id,
                description=timer.description,
                outcome=outcome,
                initial_duration_secs=timer.initial_duration_secs,
            )
            for timer, outcome in ticked
        )
        for event in events:
            if event.reached_zero:
                self._logger.info(
                    "Timer reached zero: id=%d lane=%s outcome=%s description=%s",
                    event.timer_id,
                    event.lane,
                    event.outcome,
                    event.description,
                )

        action = self._settings.completion_action
        if action != ACTION_NONE and just_finished and self.all_finished():
            finishing = [event for event in events if event.outcome == OUTCOME_JUST_FINISHED]
            # max() keeps the first of equal values, and LANES puts left first.
            action_event = max(finishing, key=lambda event: event.initial_duration_secs)
            self._logger.info(
                "All timers finished, completion action %s on lane %s",
                action,
                action_event.lane,
            )
            return TickReport(
                events=events,
                completion_action=action,
                action_event=action_event,
            )
        return TickReport(events=events)

    def snapshot(self, now: Optional[dt.datetime] = None) -> BoardSnapshot:
        now = now or dt.datetime.now().astimezone()
        end_times = project_end_times(self._timers, now)
        marker_index = self._action_marker_index(end_times)
        marker = ACTION_MARKERS.get(self._settings.completion_action, "")
        return BoardSnapshot(
            timers=tuple(
                TimerSnapshot(
                    id=timer.id,
                    lane=timer.lane,
                    description=timer.description,
                    initial_duration_secs=timer.initial_duration_secs,
                    remaining_secs=timer.remaining_secs,
                    is_active=timer.is_active,
                    completion_tag=timer.completion_tag,
                    color=self._settings.color_for(timer.completion_tag),
                    repeat_count=timer.repeat_count,
                    end_time=end_times[index],
                    action_marker=marker if index == marker_index else "",
                )
                for index, timer in enumerate(self._timers)
            ),
            paused=self._paused,
            completion_action=self._settings.completion_action,
        )

    def _action_marker_index(self, end_times: list[Optional[dt.datetime]]) -> Optional[int]:
        if self._settings.completion_action == ACTION_NONE:
            return None
        last_left = _last_unfinished(self._timers, LANE_LEFT)
        last_right = _last_unfinished(self._timers, LANE_RIGHT)
        if last_left is None or last_right is None:
            return last_left if last_left is not None else last_right
        left_end = end_times[last_left]
        right_end = end_times[last_right]
        if left_end is not None and right_end is not None and right_end > left_end:
            return last_right
        return last_left

    def _next_in_lane(self, lane: Lane) -> Optional[Timer]:
        for timer in self._timers:
            if timer.lane == lane and timer.remaining_secs > 0:
                return timer
        return None

    def _require_index(self, index: int) -> None:
        if not 0 <= index < len(self._timers):
            raise TimerIndexError(f"Index {index} is outside 0..{len(self._timers) - 1}")

    def _swap(self, first: int, second: int) -> None:
        timers = self._timers
        timers[first], timers[second] = timers[second], timers[first]
        self._reindex()

    def _reindex(self) -> None:
        for index, timer in enumerate(self._timers):
            timer.id = index


def project_end_times(
    timers: Iterable[Timer],
    now: dt.datetime,
) -> list[Optional[dt.datetime]]:
    """Predict when each timer finishes if nothing is edited.

    Lanes run independently; a timer finishes after every unfinished timer
    ahead of it in the same lane plus its own remaining time. Timers that
    would finish beyond the representable calendar get no projection.
    """
    elapsed: dict[str, int] = {lane: 0 for lane in LANES}
    projections: list[Optional[dt.datetime]] = []
    for timer in timers:
        if timer.remaining_secs == 0:
            projections.append(None)
            continue
        elapsed[timer.lane] += timer.remaining_secs
        try:
            projections.append(now + dt.timedelta(seconds=elapsed[timer.lane]))
        except OverflowError:
            projections.append(None)
    return projections


def _last_unfinished(timers: list[Timer], lane: Lane) -> Optional[int]:
    last = None
    for index, timer in enumerate(timers):
        if timer.lane == lane and timer.remaining_secs > 0:
            last = index
    return last
