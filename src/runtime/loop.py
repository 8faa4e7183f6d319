"""Runtime orchestration loop for command input, ticks, and autosave."""

from __future__ import annotations

import logging
import sys
import threading
import time
from dataclasses import dataclass, field
from queue import Empty, Queue
from typing import Callable, Optional, TextIO

from notifier import Notifier
from storage import PersistenceError
from timerboard import Configuration, TickReport

from .contracts import AppConfigLike, CommandHandlerLike, StateStoreLike
from .messages import help_text, render_board_lines, result_text
from .ticks import TickDependencies, TickProcessor

QUIT_WORDS = frozenset({"q", "quit", "exit"})
HELP_WORDS = frozenset({"h", "help", "?"})
SHOW_WORDS = frozenset({"ls", "show"})


class _EndOfInput:
    """Queue marker pushed when the input stream is exhausted."""


_END_OF_INPUT = _EndOfInput()


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    app_config: AppConfigLike
    configuration: Configuration
    interpreter: CommandHandlerLike
    state_store: StateStoreLike
    notifier: Notifier
    input_stream: Optional[TextIO] = None
    emit: Callable[[str], None] = print
    clock: Callable[[], float] = time.monotonic


@dataclass
class RuntimeResources:
    """Mutable runtime resources created for the event loop lifecycle."""
    event_queue: Queue[object]
    next_tick_at: float = 0.0
    ticks_since_save: int = 0
    reader: Optional[threading.Thread] = field(default=None, repr=False)


class RuntimeEngine:
    """Single-threaded loop that ticks timers and applies queued command lines."""
    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._config = bootstrap.configuration
        self._settings = bootstrap.app_config.runtime
        self._emit = bootstrap.emit

        self._tick_processor = TickProcessor(
            TickDependencies(
                notifier=bootstrap.notifier,
                logger=self._logger,
                emit=self._emit,
            )
        )
        self._resources = RuntimeResources(event_queue=Queue())

    @property
    def configuration(self) -> Configuration:
        return self._config

    def run(self) -> int:
        self._logger.info(
            "Starting timer loop (tick=%ss, autosave every %d ticks)",
            self._settings.tick_seconds,
            self._settings.autosave_ticks,
        )
        self._start_reader()
        self._emit(help_text())

        try:
            self._emit_board()
            self._resources.next_tick_at = self._bootstrap.clock() + self._settings.tick_seconds
            while True:
                self._run_due_tick()

                event = self._poll_event()
                if event is None:
                    continue
                if event is _END_OF_INPUT:
                    self._logger.info("Input closed, stopping.")
                    return 0

                exit_code = self.process_line(str(event))
                if exit_code is not None:
                    return exit_code

        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown()

    def process_line(self, line: str) -> Optional[int]:
        """Handle one input line; returns an exit code when the loop should stop."""
        stripped = line.strip()
        if stripped in QUIT_WORDS:
            return 0
        if stripped in HELP_WORDS:
            self._emit(help_text())
            return None
        if stripped in SHOW_WORDS:
            self._emit_board()
            return None

        try:
            result = self._bootstrap.interpreter.handle_line(stripped, self._config)
        except PersistenceError as error:
            self._logger.error("Failed to save state: %s", error)
            self._emit(f"Change applied but not saved: {error}")
            self._emit_board()
            return None

        if result is None:
            return None
        self._emit(result_text(result))
        if result.accepted:
            self._emit_board()
        return None

    def tick(self) -> TickReport:
        report = self._config.tick_all()
        self._tick_processor.handle_tick(report)
        if any(event.reached_zero for event in report.events):
            self._emit_board()

        if not report.paused:
            self._resources.ticks_since_save += 1
            if self._resources.ticks_since_save >= self._settings.autosave_ticks:
                self._save("autosave")
        return report

    def _run_due_tick(self) -> None:
        now = self._bootstrap.clock()
        if now < self._resources.next_tick_at:
            return
        self.tick()
        interval = self._settings.tick_seconds
        next_tick_at = self._resources.next_tick_at + interval
        if next_tick_at <= now:
            # Fell behind (suspend or a slow handler); restart the cadence from now.
            self._logger.debug("Tick loop fell behind by %.2fs", now - next_tick_at)
            next_tick_at = now + interval
        self._resources.next_tick_at = next_tick_at

    def _poll_event(self) -> Optional[object]:
        timeout = max(0.0, self._resources.next_tick_at - self._bootstrap.clock())
        try:
            return self._resources.event_queue.get(timeout=timeout)
        except Empty:
            return None

    def _start_reader(self) -> None:
        stream = self._bootstrap.input_stream or sys.stdin
        queue = self._resources.event_queue

        def read_lines() -> None:
            for line in stream:
                queue.put(line.rstrip("\r\n"))
            queue.put(_END_OF_INPUT)

        reader = threading.Thread(target=read_lines, name="command-input", daemon=True)
        reader.start()
        self._resources.reader = reader

    def _emit_board(self) -> None:
        for line in render_board_lines(self._config.snapshot()):
            self._emit(line)

    def _save(self, reason: str) -> None:
        self._resources.ticks_since_save = 0
        try:
            self._bootstrap.state_store.save(self._config)
        except PersistenceError as error:
            self._logger.error("State %s failed: %s", reason, error)

    def _shutdown(self) -> None:
        self._logger.info("Saving state before exit...")
        self._save("final save")
