"""Completion side effects: terminal bell, tone, desktop popups, power actions."""

from __future__ import annotations

import logging
import subprocess
import sys
from typing import Optional, Protocol, Sequence

from timerboard.constants import ACTION_HIBERNATE, ACTION_SHUTDOWN

from .errors import NotifierCommandError, NotifierConfigurationError, NotifierError
from .tone import TonePlayer

SOUND_BELL = "bell"
SOUND_TONE = "tone"
SOUND_OFF = "off"

SOUND_BACKENDS: tuple[str, ...] = (SOUND_BELL, SOUND_TONE, SOUND_OFF)

NOTIFICATION_TITLE = "Timer finished"

_BELL_COMMAND = ("bash", "-c", 'echo -e "\\a"')

_SYSTEM_ACTION_COMMANDS: dict[str, dict[str, tuple[str, ...]]] = {
    "linux": {
        ACTION_HIBERNATE: ("systemctl", "hibernate"),
        ACTION_SHUTDOWN: ("systemctl", "poweroff"),
    },
    "win32": {
        ACTION_HIBERNATE: ("shutdown", "/h"),
        ACTION_SHUTDOWN: ("shutdown", "/s", "/t", "0"),
    },
    "darwin": {
        ACTION_HIBERNATE: ("pmset", "sleepnow"),
        ACTION_SHUTDOWN: ("shutdown", "-h", "now"),
    },
}


class Notifier(Protocol):
    def notify(self, description: str) -> None:
        ...

    def system_action(self, kind: str) -> None:
        ...


class NotifierSettingsLike(Protocol):
    """Subset of notifier settings required to build a notifier."""
    enabled: bool
    sound: str
    desktop: bool
    tone_frequency_hz: float
    tone_seconds: float


class SilentNotifier:
    """Notifier used when completion side effects are disabled."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger("notifier")

    def notify(self, description: str) -> None:
        self._logger.debug("Notification suppressed: %s", description)

    def system_action(self, kind: str) -> None:
        self._logger.warning("System action %s suppressed, notifier disabled", kind)


class SystemNotifier:
    """Spawns notification and power commands without waiting for them."""

    def __init__(
        self,
        *,
        sound: str = SOUND_BELL,
        desktop: bool = True,
        tone_player: Optional[TonePlayer] = None,
        platform: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if sound not in SOUND_BACKENDS:
            raise NotifierConfigurationError(
                f"sound must be one of {', '.join(SOUND_BACKENDS)}, got: {sound!r}"
            )
        if sound == SOUND_TONE and tone_player is None:
            raise NotifierConfigurationError("tone sound requires a tone player")
        self._sound = sound
        self._desktop = desktop
        self._tone_player = tone_player
        self._platform = platform or sys.platform
        self._logger = logger or logging.getLogger("notifier")

    def notify(self, description: str) -> None:
        """Ring and show a desktop notification for a finished timer."""
        self._play_sound()
        if not self._desktop:
            return
        if self._platform.startswith("linux"):
            self._spawn(("notify-send", NOTIFICATION_TITLE, description))
        elif self._platform == "win32":
            self._spawn(("msg", "*", NOTIFICATION_TITLE, description))

    def system_action(self, kind: str) -> None:
        commands = _SYSTEM_ACTION_COMMANDS.get(_platform_key(self._platform), {})
        command = commands.get(kind)
        if command is None:
            raise NotifierCommandError(
                f"System action {kind!r} is not supported on {self._platform}"
            )
        self._logger.info("Running system action %s: %s", kind, " ".join(command))
        self._spawn(command)

    def _play_sound(self) -> None:
        if self._sound == SOUND_OFF:
            return
        if self._sound == SOUND_TONE and self._tone_player is not None:
            self._tone_player.play()
            return
        if self._platform == "win32":
            sys.stdout.write("\a")
            sys.stdout.flush()
            return
        self._spawn(_BELL_COMMAND)

    def _spawn(self, command: Sequence[str]) -> None:
        try:
            subprocess.Popen(
                list(command),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as error:
            raise NotifierCommandError(f"Failed to start {command[0]}: {error}") from error


def build_notifier(
    settings: NotifierSettingsLike,
    *,
    logger: Optional[logging.Logger] = None,
) -> Notifier:
    """Create the configured notifier, falling back to the terminal bell."""
    logger = logger or logging.getLogger("notifier")
    if not settings.enabled:
        logger.info("Notifications disabled")
        return SilentNotifier(logger=logger)

    if settings.sound != SOUND_TONE:
        return SystemNotifier(sound=settings.sound, desktop=settings.desktop, logger=logger)

    try:
        tone_player = TonePlayer(
            frequency_hz=settings.tone_frequency_hz,
            duration_seconds=settings.tone_seconds,
            logger=logging.getLogger("notifier.tone"),
        )
    except NotifierError as error:
        logger.warning("Tone playback unavailable, using terminal bell: %s", error)
        return SystemNotifier(sound=SOUND_BELL, desktop=settings.desktop, logger=logger)

    return SystemNotifier(
        sound=SOUND_TONE,
        desktop=settings.desktop,
        tone_player=tone_player,
        logger=logger,
    )


def _platform_key(platform: str) -> str:
    if platform.startswith("linux"):
        return "linux"
    return platform
