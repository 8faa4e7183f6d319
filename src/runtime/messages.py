"""Plain-text board and command feedback builders for the terminal."""

from __future__ import annotations

from commands import CommandResult, verbs_csv
from timerboard import BoardSnapshot, TimerSnapshot, format_clock
from timerboard.constants import LANE_LEFT, LANE_RIGHT

END_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
# Width of a formatted end time, kept for finished timers.
_NO_END_TIME = "-" * 19
_NO_MARKER = "   "


def format_timer_line(timer: TimerSnapshot) -> str:
    """Build `HH:MM:SS (end time)(marker)     @id:description     repeat: n`."""
    end_time = timer.end_time.strftime(END_TIME_FORMAT) if timer.end_time else _NO_END_TIME
    repeat = f"repeat: {timer.repeat_count}" if timer.repeat_count > 0 else ""
    line = (
        f"{format_clock(timer.remaining_secs)} ({end_time})"
        f"{timer.action_marker or _NO_MARKER}     @{timer.id}:{timer.description}     {repeat}"
    )
    return line.rstrip()


def render_board_lines(snapshot: BoardSnapshot) -> list[str]:
    lines: list[str] = []
    for lane, title in ((LANE_LEFT, "Left"), (LANE_RIGHT, "Right")):
        timers = snapshot.lane(lane)
        if not timers:
            continue
        lines.append(f"[{title}]")
        for timer in timers:
            prefix = "> " if timer.is_active else "  "
            lines.append(prefix + format_timer_line(timer))
    if not lines:
        lines.append("No timers. Try: add 25 Focus")
    if snapshot.paused:
        lines.append("(paused)")
    return lines


def result_text(result: CommandResult) -> str:
    if result.accepted:
        return result.message
    return f"Rejected ({result.reason}): {result.message}"


def help_text() -> str:
    return f"Commands: {verbs_csv()}. Type q to quit."


def completion_text(description: str) -> str:
    return f"Timer finished: {description}" if description else "Timer finished"
