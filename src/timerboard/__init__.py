from .configuration import (
    BoardSnapshot,
    Configuration,
    TickEvent,
    TickReport,
    TimerBoardError,
    TimerIndexError,
    TimerNotFoundError,
    TimerSnapshot,
    project_end_times,
)
from .settings import BoardSettings, BoardSettingsError, update_setting
from .timer import Lane, Timer, TimerOutcome, format_clock, split_duration

__all__ = [
    "BoardSettings",
    "BoardSettingsError",
    "BoardSnapshot",
    "Configuration",
    "Lane",
    "TickEvent",
    "TickReport",
    "Timer",
    "TimerBoardError",
    "TimerIndexError",
    "TimerNotFoundError",
    "TimerOutcome",
    "TimerSnapshot",
    "format_clock",
    "project_end_times",
    "split_duration",
    "update_setting",
]
