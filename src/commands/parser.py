"""Parse one line of command text into a typed command."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar, Iterable, Optional

from timerboard.constants import (
    LANE_LEFT,
    LANE_RIGHT,
    REASON_INVALID_ARGUMENT,
    REASON_UNKNOWN_COMMAND,
)
from timerboard.timer import Lane

from .contract import (
    ADD_VERBS,
    VERB_ADD_POMODORO,
    VERB_ADD_REVERSED,
    VERB_ADD_RIGHT,
    VERB_CLEAR,
    VERB_DELETE_SET,
    VERB_LIST_SETS,
    VERB_LOAD_SET,
    VERB_MERGE,
    VERB_MINUS,
    VERB_MOVE,
    VERB_MOVE_DOWN,
    VERB_MOVE_UP,
    VERB_PAUSE,
    VERB_PLUS,
    VERB_REMOVE,
    VERB_RENAME,
    VERB_REPEAT,
    VERB_SAVE_SET,
    VERB_SET,
    canonical_verb,
)

_DIGITS = re.compile(r"[0-9]+")
_CLOCK_LENGTH = 8


@dataclass(frozen=True)
class ParsedDuration:
    """Duration read from the first `add` argument."""
    hours: int
    minutes: int
    seconds: int
    # False when the token was not a duration and belongs to the description.
    consumed: bool = True

    @property
    def total_seconds(self) -> int:
        return self.hours * 3600 + self.minutes * 60 + self.seconds


@dataclass(frozen=True)
class AddTimer:
    verb: str
    duration: ParsedDuration
    description: str
    lane: Lane
    reverse: bool
    completion_tag: Optional[str] = None


@dataclass(frozen=True)
class AddPomodoro:
    verb: ClassVar[str] = VERB_ADD_POMODORO


@dataclass(frozen=True)
class RemoveTimer:
    verb: ClassVar[str] = VERB_REMOVE
    timer_id: int


@dataclass(frozen=True)
class ClearTimers:
    verb: ClassVar[str] = VERB_CLEAR


@dataclass(frozen=True)
class MoveTimer:
    verb: ClassVar[str] = VERB_MOVE
    from_id: int
    to_id: int


@dataclass(frozen=True)
class MoveTimerUp:
    verb: ClassVar[str] = VERB_MOVE_UP
    timer_id: int


@dataclass(frozen=True)
class MoveTimerDown:
    verb: ClassVar[str] = VERB_MOVE_DOWN
    timer_id: int


@dataclass(frozen=True)
class MergeTimers:
    verb: ClassVar[str] = VERB_MERGE
    timer_id: int
    other_id: int


@dataclass(frozen=True)
class IncreaseTimer:
    verb: ClassVar[str] = VERB_PLUS
    timer_id: int
    minutes: int


@dataclass(frozen=True)
class DecreaseTimer:
    verb: ClassVar[str] = VERB_MINUS
    timer_id: int
    minutes: int


@dataclass(frozen=True)
class RenameTimer:
    verb: ClassVar[str] = VERB_RENAME
    timer_id: int
    description: str


@dataclass(frozen=True)
class RepeatTimer:
    verb: ClassVar[str] = VERB_REPEAT
    timer_id: int
    count: int


@dataclass(frozen=True)
class TogglePause:
    verb: ClassVar[str] = VERB_PAUSE


@dataclass(frozen=True)
class SaveSet:
    verb: ClassVar[str] = VERB_SAVE_SET
    name: str


@dataclass(frozen=True)
class LoadSet:
    verb: ClassVar[str] = VERB_LOAD_SET
    name: str


@dataclass(frozen=True)
class DeleteSet:
    verb: ClassVar[str] = VERB_DELETE_SET
    name: str


@dataclass(frozen=True)
class ListSets:
    verb: ClassVar[str] = VERB_LIST_SETS


@dataclass(frozen=True)
class UpdateSetting:
    verb: ClassVar[str] = VERB_SET
    key: str
    value: str


@dataclass(frozen=True)
class InvalidCommand:
    """A recognized verb whose arguments could not be used."""
    verb: str
    reason: str
    detail: str


Command = (
    AddTimer
    | AddPomodoro
    | RemoveTimer
    | ClearTimers
    | MoveTimer
    | MoveTimerUp
    | MoveTimerDown
    | MergeTimers
    | IncreaseTimer
    | DecreaseTimer
    | RenameTimer
    | RepeatTimer
    | TogglePause
    | SaveSet
    | LoadSet
    | DeleteSet
    | ListSets
    | UpdateSetting
    | InvalidCommand
)


def parse_command(line: str, tag_names: Iterable[str] = ()) -> Optional[Command]:
    """Return the command for `line`, or None when the line is blank.

    `<verb> [<arg1>] [<arg2...>]`: arg1 is the first token after the verb and
    the remaining tokens, joined by single spaces, form arg2. A leading arg2
    token naming a completion tag is split off as the tag.
    """
    tokens = line.split()
    if not tokens:
        return None

    raw_verb = tokens[0]
    verb = canonical_verb(raw_verb)
    if verb is None:
        return InvalidCommand(
            verb=raw_verb,
            reason=REASON_UNKNOWN_COMMAND,
            detail=f"Unknown command: {raw_verb}",
        )

    arg1 = tokens[1] if len(tokens) > 1 else ""
    rest = tokens[2:]
    completion_tag: Optional[str] = None
    known_tags = {name.lower() for name in tag_names}
    if rest and rest[0].lower() in known_tags:
        completion_tag = rest[0].lower()
        rest = rest[1:]
    arg2 = " ".join(rest)

    if verb in ADD_VERBS:
        return _parse_add(verb, arg1, arg2, completion_tag)
    if verb == VERB_ADD_POMODORO:
        return AddPomodoro()
    if verb == VERB_CLEAR:
        return ClearTimers()
    if verb == VERB_PAUSE:
        return TogglePause()
    if verb == VERB_LIST_SETS:
        return ListSets()
    if verb == VERB_SET:
        if not arg1:
            return _invalid(verb, "Usage: set <key> <value>")
        return UpdateSetting(key=arg1, value=" ".join(tokens[2:]))
    if verb in (VERB_SAVE_SET, VERB_LOAD_SET, VERB_DELETE_SET):
        if not arg1:
            return _invalid(verb, f"Usage: {verb} <name>")
        if verb == VERB_SAVE_SET:
            return SaveSet(name=arg1)
        if verb == VERB_LOAD_SET:
            return LoadSet(name=arg1)
        return DeleteSet(name=arg1)

    timer_id = parse_unsigned(arg1)
    if timer_id is None:
        return _invalid(verb, f"Expected a timer id, got: {arg1 or '<nothing>'}")

    if verb == VERB_REMOVE:
        return RemoveTimer(timer_id=timer_id)
    if verb == VERB_MOVE_UP:
        return MoveTimerUp(timer_id=timer_id)
    if verb == VERB_MOVE_DOWN:
        return MoveTimerDown(timer_id=timer_id)
    if verb == VERB_RENAME:
        return RenameTimer(timer_id=timer_id, description=arg2)

    second = parse_unsigned(arg2)
    if second is None:
        return _invalid(verb, f"Expected a number, got: {arg2 or '<nothing>'}")

    if verb == VERB_MOVE:
        return MoveTimer(from_id=timer_id, to_id=second)
    if verb == VERB_MERGE:
        return MergeTimers(timer_id=timer_id, other_id=second)
    if verb == VERB_PLUS:
        return IncreaseTimer(timer_id=timer_id, minutes=second)
    if verb == VERB_MINUS:
        return DecreaseTimer(timer_id=timer_id, minutes=second)
    if verb == VERB_REPEAT:
        return RepeatTimer(timer_id=timer_id, count=second)

    raise AssertionError(f"Verb without parser branch: {verb}")


def parse_duration(token: str) -> ParsedDuration:
    """Read `HH:MM:SS` (exactly 8 characters) or a whole number of minutes."""
    if len(token) == _CLOCK_LENGTH:
        return ParsedDuration(
            hours=parse_unsigned(token[0:2]) or 0,
            minutes=parse_unsigned(token[3:5]) or 0,
            seconds=parse_unsigned(token[6:8]) or 0,
        )

    total_minutes = parse_unsigned(token) or 0
    hours, minutes = divmod(total_minutes, 60)
    return ParsedDuration(
        hours=hours,
        minutes=minutes,
        seconds=0,
        consumed=total_minutes != 0,
    )


def parse_unsigned(token: str) -> Optional[int]:
    if not _DIGITS.fullmatch(token):
        return None
    return int(token)


def _parse_add(
    verb: str,
    arg1: str,
    arg2: str,
    completion_tag: Optional[str],
) -> AddTimer:
    duration = parse_duration(arg1)
    description = arg2
    if not duration.consumed:
        description = " ".join(part for part in (arg1, arg2) if part)
    return AddTimer(
        verb=verb,
        duration=duration,
        description=description,
        lane=LANE_RIGHT if verb == VERB_ADD_RIGHT else LANE_LEFT,
        reverse=verb == VERB_ADD_REVERSED,
        completion_tag=completion_tag,
    )


def _invalid(verb: str, detail: str) -> InvalidCommand:
    return InvalidCommand(verb=verb, reason=REASON_INVALID_ARGUMENT, detail=detail)
