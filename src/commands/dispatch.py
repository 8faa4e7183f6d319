"""Apply parsed commands to a timer configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from storage import InvalidSetNameError, PersistenceError, SetNotFoundError
from timerboard import (
    BoardSettingsError,
    Configuration,
    Timer,
    TimerIndexError,
    TimerNotFoundError,
    update_setting,
)
from timerboard.constants import (
    LANE_LEFT,
    POMODORO_BIG_BREAK_EVERY,
    POMODORO_BREAK_DESCRIPTION,
    POMODORO_WORK_DESCRIPTION,
    REASON_APPLIED,
    REASON_INVALID_ARGUMENT,
    REASON_INVALID_SETTING,
    REASON_NOT_FOUND,
    REASON_OUT_OF_RANGE,
    REASON_STORAGE_ERROR,
    TAG_BREAK,
    TAG_FOCUS,
)
from timerboard.timer import format_clock

from .contract import TRANSIENT_VERBS
from .parser import (
    AddPomodoro,
    AddTimer,
    ClearTimers,
    Command,
    DecreaseTimer,
    DeleteSet,
    IncreaseTimer,
    InvalidCommand,
    ListSets,
    LoadSet,
    MergeTimers,
    MoveTimer,
    MoveTimerDown,
    MoveTimerUp,
    RemoveTimer,
    RenameTimer,
    RepeatTimer,
    SaveSet,
    TogglePause,
    UpdateSetting,
    parse_command,
)


class StateStoreLike(Protocol):
    def save(self, config: Configuration) -> None:
        ...


class SetStoreLike(Protocol):
    def write(self, name: str, timers: tuple[Timer, ...]) -> object:
        ...

    def list(self) -> list[str]:
        ...

    def read(self, name: str, *, tag_colors: Optional[dict[str, str]] = None) -> list[Timer]:
        ...

    def delete(self, name: str) -> None:
        ...


@dataclass(frozen=True)
class CommandResult:
    """Result envelope returned after applying one command line."""
    verb: str
    accepted: bool
    reason: str
    message: str = ""
    set_names: tuple[str, ...] = ()

    @property
    def mutated(self) -> bool:
        return self.accepted and self.verb not in TRANSIENT_VERBS


class CommandInterpreter:
    """Parses command lines and applies them to a `Configuration`."""

    def __init__(
        self,
        *,
        state_store: Optional[StateStoreLike] = None,
        set_store: Optional[SetStoreLike] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._state_store = state_store
        self._set_store = set_store
        self._logger = logger or logging.getLogger("commands")

    def handle_line(self, line: str, config: Configuration) -> Optional[CommandResult]:
        """Parse and apply `line`; blank input yields None.

        Raises `PersistenceError` when an accepted change cannot be saved.
        The in-memory configuration keeps the change either way.
        """
        command = parse_command(line, config.settings.tag_names)
        if command is None:
            return None
        result = self.apply(command, config)
        if result.accepted:
            self._logger.debug("Command %s applied: %s", result.verb, result.message)
        else:
            self._logger.info(
                "Command %s rejected (%s): %s",
                result.verb,
                result.reason,
                result.message,
            )
        if result.mutated and self._state_store is not None:
            self._state_store.save(config)
        return result

    def apply(self, command: Command, config: Configuration) -> CommandResult:
        if isinstance(command, InvalidCommand):
            return _rejected(command.verb, command.reason, command.detail)

        try:
            return self._apply(command, config)
        except TimerNotFoundError as error:
            return _rejected(command.verb, REASON_NOT_FOUND, str(error))
        except TimerIndexError as error:
            return _rejected(command.verb, REASON_OUT_OF_RANGE, str(error))
        except BoardSettingsError as error:
            return _rejected(command.verb, REASON_INVALID_SETTING, str(error))
        except SetNotFoundError as error:
            return _rejected(command.verb, REASON_NOT_FOUND, str(error))
        except InvalidSetNameError as error:
            return _rejected(command.verb, REASON_INVALID_ARGUMENT, str(error))
        except PersistenceError as error:
            self._logger.error("Set store operation failed: %s", error)
            return _rejected(command.verb, REASON_STORAGE_ERROR, str(error))

    def _apply(self, command: Command, config: Configuration) -> CommandResult:
        verb = command.verb

        if isinstance(command, AddTimer):
            timer = Timer.create(
                command.description,
                command.duration.total_seconds,
                lane=command.lane,
                completion_tag=command.completion_tag,
            )
            config.add_timer(timer, reverse=command.reverse)
            return _accepted(
                verb,
                f"Added {format_clock(timer.initial_duration_secs)} {timer.description}".rstrip(),
            )

        if isinstance(command, AddPomodoro):
            return self._add_pomodoro(config)

        if isinstance(command, RemoveTimer):
            removed = config.remove_timer(command.timer_id)
            return _accepted(verb, f"Removed {removed.description}")

        if isinstance(command, ClearTimers):
            config.clear()
            return _accepted(verb, "Removed all timers")

        if isinstance(command, MoveTimer):
            config.move_timer(command.from_id, command.to_id)
            return _accepted(verb, f"Moved timer {command.from_id} to {command.to_id}")

        if isinstance(command, MoveTimerUp):
            config.move_up(command.timer_id)
            return _accepted(verb, f"Moved timer {command.timer_id} up")

        if isinstance(command, MoveTimerDown):
            config.move_down(command.timer_id)
            return _accepted(verb, f"Moved timer {command.timer_id} down")

        if isinstance(command, MergeTimers):
            merged = config.merge_timers(command.timer_id, command.other_id)
            return _accepted(verb, f"Merged into {merged.description}")

        if isinstance(command, IncreaseTimer):
            timer = config.get(command.timer_id)
            timer.add_seconds(command.minutes * 60)
            return _accepted(verb, f"{timer.description}: {format_clock(timer.remaining_secs)} left")

        if isinstance(command, DecreaseTimer):
            timer = config.get(command.timer_id)
            timer.subtract_seconds(command.minutes * 60)
            return _accepted(verb, f"{timer.description}: {format_clock(timer.remaining_secs)} left")

        if isinstance(command, RenameTimer):
            timer = config.get(command.timer_id)
            timer.description = command.description
            return _accepted(verb, f"Renamed timer {timer.id} to {timer.description}")

        if isinstance(command, RepeatTimer):
            timer = config.get(command.timer_id)
            timer.repeat_count = command.count
            return _accepted(verb, f"{timer.description} repeats {timer.repeat_count} more times")

        if isinstance(command, TogglePause):
            paused = config.toggle_pause()
            return _accepted(verb, "Paused" if paused else "Resumed")

        if isinstance(command, UpdateSetting):
            config.settings = update_setting(config.settings, command.key, command.value)
            return _accepted(verb, f"{command.key} = {command.value}")

        if isinstance(command, (SaveSet, LoadSet, DeleteSet, ListSets)):
            return self._apply_set_command(command, config)

        raise AssertionError(f"Command without handler: {type(command).__name__}")

    def _add_pomodoro(self, config: Configuration) -> CommandResult:
        settings = config.settings
        count = len(config)
        if count and count % POMODORO_BIG_BREAK_EVERY == 0:
            break_minutes = settings.pomodoro_bigbreak
        else:
            break_minutes = settings.pomodoro_smallbreak

        config.append_timer(
            Timer.create(
                POMODORO_WORK_DESCRIPTION,
                settings.pomodoro_time * 60,
                lane=LANE_LEFT,
                completion_tag=TAG_FOCUS,
            )
        )
        config.append_timer(
            Timer.create(
                POMODORO_BREAK_DESCRIPTION,
                break_minutes * 60,
                lane=LANE_LEFT,
                completion_tag=TAG_BREAK,
            )
        )
        return _accepted(
            AddPomodoro.verb,
            f"Added pomodoro {settings.pomodoro_time} min + {break_minutes} min break",
        )

    def _apply_set_command(
        self,
        command: SaveSet | LoadSet | DeleteSet | ListSets,
        config: Configuration,
    ) -> CommandResult:
        if self._set_store is None:
            return _rejected(command.verb, REASON_STORAGE_ERROR, "No set store configured")

        if isinstance(command, ListSets):
            names = tuple(self._set_store.list())
            message = ", ".join(names) if names else "No saved sets"
            return CommandResult(
                verb=command.verb,
                accepted=True,
                reason=REASON_APPLIED,
                message=message,
                set_names=names,
            )

        if isinstance(command, SaveSet):
            self._set_store.write(command.name, config.timers)
            return _accepted(command.verb, f"Saved set {command.name}")

        if isinstance(command, LoadSet):
            timers = self._set_store.read(
                command.name,
                tag_colors=dict(config.settings.tag_colors),
            )
            config.replace_timers(timers)
            return _accepted(command.verb, f"Loaded set {command.name} ({len(timers)} timers)")

        self._set_store.delete(command.name)
        return _accepted(command.verb, f"Deleted set {command.name}")


def _accepted(verb: str, message: str) -> CommandResult:
    return CommandResult(verb=verb, accepted=True, reason=REASON_APPLIED, message=message)


def _rejected(verb: str, reason: str, message: str) -> CommandResult:
    return CommandResult(verb=verb, accepted=False, reason=reason, message=message)
