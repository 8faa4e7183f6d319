"""Public exports for timer completion notifications."""

from .errors import (
    NotifierCommandError,
    NotifierConfigurationError,
    NotifierDependencyError,
    NotifierError,
)
from .service import (
    SOUND_BACKENDS,
    SOUND_BELL,
    SOUND_OFF,
    SOUND_TONE,
    Notifier,
    SilentNotifier,
    SystemNotifier,
    build_notifier,
)
from .tone import TonePlayer

__all__ = [
    "Notifier",
    "NotifierCommandError",
    "NotifierConfigurationError",
    "NotifierDependencyError",
    "NotifierError",
    "SOUND_BACKENDS",
    "SOUND_BELL",
    "SOUND_OFF",
    "SOUND_TONE",
    "SilentNotifier",
    "SystemNotifier",
    "TonePlayer",
    "build_notifier",
]
