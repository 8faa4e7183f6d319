"""Tick handlers that fire completion notifications and system actions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from notifier import Notifier, NotifierError
from timerboard import TickReport

from .messages import completion_text


@dataclass(frozen=True)
class TickDependencies:
    """Dependencies required for processing timer tick reports."""
    notifier: Notifier
    logger: logging.Logger
    emit: Callable[[str], None]


class TickProcessor:
    """Handles tick side effects such as completion notifications."""
    def __init__(self, dependencies: TickDependencies):
        self._dependencies = dependencies

    def handle_tick(self, report: TickReport) -> None:
        deps = self._dependencies
        for event in report.events:
            if not event.reached_zero:
                continue
            deps.emit(completion_text(event.description))
            try:
                deps.notifier.notify(event.description)
            except NotifierError as error:
                deps.logger.error("Completion notification failed: %s", error)

        if report.completion_action is None:
            return
        deps.emit(f"All timers finished, running {report.completion_action}")
        try:
            deps.notifier.system_action(report.completion_action)
        except NotifierError as error:
            deps.logger.error(
                "System action %s failed: %s",
                report.completion_action,
                error,
            )
