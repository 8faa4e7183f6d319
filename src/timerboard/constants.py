"""Lane, outcome, action, and reason constants used by the timer board."""

from __future__ import annotations

LANE_LEFT = "left"
LANE_RIGHT = "right"

LANES: tuple[str, ...] = (LANE_LEFT, LANE_RIGHT)

OUTCOME_RUNNING = "running"
OUTCOME_JUST_FINISHED = "just_finished"
OUTCOME_REARMED = "rearmed"

ACTION_NONE = "None"
ACTION_HIBERNATE = "Hibernate"
ACTION_SHUTDOWN = "Shutdown"

COMPLETION_ACTIONS: tuple[str, ...] = (ACTION_NONE, ACTION_HIBERNATE, ACTION_SHUTDOWN)

ACTION_MARKERS: dict[str, str] = {
    ACTION_HIBERNATE: "(H)",
    ACTION_SHUTDOWN: "(S)",
}

REASON_APPLIED = "applied"
REASON_EMPTY = "empty"
REASON_UNKNOWN_COMMAND = "unknown_command"
REASON_INVALID_ARGUMENT = "invalid_argument"
REASON_NOT_FOUND = "not_found"
REASON_OUT_OF_RANGE = "out_of_range"
REASON_INVALID_SETTING = "invalid_setting"
REASON_STORAGE_ERROR = "storage_error"

TAG_FOCUS = "focus"
TAG_BREAK = "break"

POMODORO_WORK_DESCRIPTION = "Pomodoro-Timer"
POMODORO_BREAK_DESCRIPTION = "Pomodoro-Break"
# Every sixth pomodoro pair gets the long break.
POMODORO_BIG_BREAK_EVERY = 6

DEFAULT_POMODORO_MINUTES = 25
DEFAULT_SMALL_BREAK_MINUTES = 5
DEFAULT_BIG_BREAK_MINUTES = 10
MAX_POMODORO_MINUTES = 99

DEFAULT_ACTIVE_COLOR = "Green"

ACCEPTED_COLORS: tuple[str, ...] = (
    "Black",
    "Red",
    "Green",
    "Yellow",
    "Blue",
    "Magenta",
    "Cyan",
    "Gray",
    "DarkGray",
    "LightRed",
    "LightGreen",
    "LightYellow",
    "LightBlue",
    "LightMagenta",
    "LightCyan",
    "White",
)

DEFAULT_TAG_COLORS: dict[str, str] = {
    "urgent": "Red",
    "important": "Blue",
    "casual": "Green",
    TAG_BREAK: "Yellow",
    TAG_FOCUS: "Magenta",
    "fun": "LightMagenta",
    "study": "LightCyan",
    "deadline": "LightRed",
    "coding": "LightGreen",
}
