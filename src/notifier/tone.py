"""Sine beep playback through sounddevice."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .errors import NotifierCommandError, NotifierConfigurationError, NotifierDependencyError

DEFAULT_SAMPLE_RATE_HZ = 44100
DEFAULT_TONE_FREQUENCY_HZ = 880.0
DEFAULT_TONE_SECONDS = 0.4
# Short linear fade that keeps the beep from clicking.
_FADE_SECONDS = 0.01


def _load_backend() -> tuple[Any, Any]:
    try:
        import numpy as np
        import sounddevice as sd
    except ImportError as error:  # pragma: no cover - depends on audio env
        raise NotifierDependencyError(
            f"Tone playback dependency import failed ({error}). "
            "Install numpy and sounddevice."
        ) from error
    except OSError as error:  # pragma: no cover - PortAudio missing
        raise NotifierDependencyError(
            f"Tone playback backend unavailable ({error}). Install PortAudio."
        ) from error
    return np, sd


class TonePlayer:
    """Plays a short sine tone without blocking the caller."""

    def __init__(
        self,
        *,
        frequency_hz: float = DEFAULT_TONE_FREQUENCY_HZ,
        duration_seconds: float = DEFAULT_TONE_SECONDS,
        sample_rate_hz: int = DEFAULT_SAMPLE_RATE_HZ,
        logger: Optional[logging.Logger] = None,
    ):
        if frequency_hz <= 0:
            raise NotifierConfigurationError("tone frequency must be greater than zero")
        if duration_seconds <= 0:
            raise NotifierConfigurationError("tone duration must be greater than zero")

        self._np, self._sd = _load_backend()
        self._sample_rate_hz = sample_rate_hz
        self._logger = logger or logging.getLogger("notifier.tone")
        self._wave = self._build_wave(frequency_hz, duration_seconds)

    def _build_wave(self, frequency_hz: float, duration_seconds: float) -> Any:
        np = self._np
        samples = int(self._sample_rate_hz * duration_seconds)
        t = np.arange(samples, dtype=np.float32) / self._sample_rate_hz
        wave = 0.3 * np.sin(2.0 * np.pi * frequency_hz * t)

        fade = min(int(self._sample_rate_hz * _FADE_SECONDS), samples // 2)
        if fade > 0:
            ramp = np.linspace(0.0, 1.0, fade, dtype=np.float32)
            wave[:fade] *= ramp
            wave[-fade:] *= ramp[::-1]
        return wave.astype(np.float32)

    def play(self) -> None:
        try:
            self._sd.play(self._wave, self._sample_rate_hz, blocking=False)
        except Exception as error:
            raise NotifierCommandError(f"Tone playback failed: {error}") from error
