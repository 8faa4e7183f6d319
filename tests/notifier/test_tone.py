import importlib.util
import unittest
from unittest.mock import Mock, patch

from notifier import NotifierCommandError, NotifierConfigurationError, TonePlayer

_HAS_NUMPY = importlib.util.find_spec("numpy") is not None


@unittest.skipUnless(_HAS_NUMPY, "numpy is not installed")
class TonePlayerTests(unittest.TestCase):
    def _player(self, sd: Mock, **kwargs) -> TonePlayer:
        import numpy as np

        with patch("notifier.tone._load_backend", return_value=(np, sd)):
            return TonePlayer(sample_rate_hz=8000, **kwargs)

    def test_play_is_non_blocking_and_sized_from_duration(self) -> None:
        sd = Mock()
        player = self._player(sd, frequency_hz=440.0, duration_seconds=0.5)

        player.play()

        wave, rate = sd.play.call_args.args
        self.assertEqual(8000, rate)
        self.assertEqual(4000, len(wave))
        self.assertFalse(sd.play.call_args.kwargs["blocking"])
        self.assertLessEqual(float(abs(wave).max()), 0.3)
        self.assertEqual(0.0, float(wave[0]))

    def test_backend_failure_is_wrapped(self) -> None:
        sd = Mock()
        sd.play.side_effect = RuntimeError("device busy")
        player = self._player(sd)

        with self.assertRaises(NotifierCommandError):
            player.play()

    def test_invalid_parameters_are_rejected(self) -> None:
        with self.assertRaises(NotifierConfigurationError):
            TonePlayer(frequency_hz=0)
        with self.assertRaises(NotifierConfigurationError):
            TonePlayer(duration_seconds=-1)


if __name__ == "__main__":
    unittest.main()
