"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_CONFIG_FILE = "config.toml"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class StateSettings:
    """State file and named-set locations from `[state]`."""
    path: str = "config.json"
    sets_dir: str = "sets"


@dataclass(frozen=True)
class RuntimeSettings:
    """Host loop cadence from `[runtime]`."""
    tick_seconds: float = 1.0
    autosave_ticks: int = 30


@dataclass(frozen=True)
class NotifierSettings:
    """Completion notification settings from `[notifier]`."""
    enabled: bool = True
    sound: str = "bell"
    desktop: bool = True
    tone_frequency_hz: float = 880.0
    tone_seconds: float = 0.4


@dataclass(frozen=True)
class LoggingSettings:
    """Log verbosity from `[logging]`."""
    level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    state: StateSettings = field(default_factory=StateSettings)
    runtime: RuntimeSettings = field(default_factory=RuntimeSettings)
    notifier: NotifierSettings = field(default_factory=NotifierSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    # Empty when no config file was found and defaults are in use.
    source_file: str = ""
