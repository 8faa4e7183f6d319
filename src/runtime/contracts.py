"""Protocols describing runtime-facing config and storage capabilities."""

from __future__ import annotations

from typing import Optional, Protocol

from commands import CommandResult
from commands.dispatch import StateStoreLike
from timerboard import Configuration

__all__ = [
    "AppConfigLike",
    "CommandHandlerLike",
    "RuntimeSettingsLike",
    "StateStoreLike",
]


class RuntimeSettingsLike(Protocol):
    """Subset of runtime settings required by the host loop."""
    tick_seconds: float
    autosave_ticks: int


class AppConfigLike(Protocol):
    """Subset of app configuration required by the runtime engine."""
    runtime: RuntimeSettingsLike


class CommandHandlerLike(Protocol):
    def handle_line(self, line: str, config: Configuration) -> Optional[CommandResult]:
        ...
