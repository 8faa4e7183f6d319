import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from storage import PersistenceError, StateStore, configuration_from_dict, configuration_to_dict
from timerboard import BoardSettings, Configuration, Timer


def _sample_configuration() -> Configuration:
    repeating = Timer.create("Stretch", 300, lane="right", completion_tag="break")
    repeating.repeat_count = 2
    repeating.remaining_secs = 120
    return Configuration(
        settings=BoardSettings(
            dark_mode=False,
            completion_action="Hibernate",
            pomodoro_time=50,
            tag_colors={"focus": "Red", "reading": "Cyan"},
        ),
        timers=[Timer.create("Write", 1500, completion_tag="focus"), repeating],
    )


class StateStoreTests(unittest.TestCase):
    def test_round_trip_preserves_timers_and_settings(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            store = StateStore(Path(temp_dir) / "config.json")
            original = _sample_configuration()

            store.save(original)
            loaded = store.load()

        self.assertEqual(list(original.timers), list(loaded.timers))
        self.assertEqual(original.settings, loaded.settings)
        self.assertEqual([0, 1], [timer.id for timer in loaded.timers])

    def test_transient_fields_are_not_written(self) -> None:
        config = _sample_configuration()
        config.toggle_pause()
        config.tick_all()

        payload = configuration_to_dict(config)

        self.assertEqual(1, payload["schema_version"])
        self.assertNotIn("paused", payload)
        for record in payload["timers"]:
            self.assertEqual(
                {
                    "lane",
                    "description",
                    "initial_duration_secs",
                    "remaining_secs",
                    "completion_tag",
                    "repeat_count",
                },
                set(record),
            )

    def test_missing_file_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            loaded = StateStore(Path(temp_dir) / "absent.json").load()

        self.assertEqual(0, len(loaded))
        self.assertEqual(BoardSettings(), loaded.settings)

    def test_malformed_file_falls_back_with_warning(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            store = StateStore(path)

            with self.assertLogs("storage.state", level="WARNING"):
                loaded = store.load()

        self.assertEqual(0, len(loaded))

    def test_invalid_fields_are_defaulted_individually(self) -> None:
        raw = {
            "dark_mode": "sometimes",
            "active_color": "Mauve",
            "pomodoro_time": 45,
            "timers": [
                {"lane": "left", "description": "ok", "remaining_secs": 10},
                {"lane": "sideways", "description": "bad", "remaining_secs": 10},
            ],
        }

        with self.assertLogs("storage.state", level="WARNING") as logs:
            config = configuration_from_dict(raw)

        self.assertTrue(config.settings.dark_mode)
        self.assertEqual("Green", config.settings.active_color)
        self.assertEqual(45, config.settings.pomodoro_time)
        self.assertEqual(["ok"], [timer.description for timer in config.timers])
        self.assertEqual(10, config.get(0).initial_duration_secs)
        self.assertTrue(any("active_color" in line for line in logs.output))

    def test_legacy_keys_are_understood(self) -> None:
        raw = {
            "darkmode": False,
            "reverseadding": True,
            "action_timeout": "Shutdown",
            "timers": [
                {
                    "left_view": False,
                    "description": "Old",
                    "initial_time": 600,
                    "timeleft_secs": 300,
                    "timer_type": "Magenta",
                    "repeat_times": 1,
                }
            ],
        }

        config = configuration_from_dict(raw)

        self.assertFalse(config.settings.dark_mode)
        self.assertTrue(config.settings.insert_at_front)
        self.assertEqual("Shutdown", config.settings.completion_action)
        timer = config.get(0)
        self.assertEqual(("right", 600, 300, "focus", 1), (
            timer.lane,
            timer.initial_duration_secs,
            timer.remaining_secs,
            timer.completion_tag,
            timer.repeat_count,
        ))

    def test_non_object_root_is_rejected(self) -> None:
        with self.assertRaises(PersistenceError):
            configuration_from_dict([1, 2, 3])

    def test_save_failure_raises_persistence_error(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            store = StateStore(Path(temp_dir) / "config.json")
            with patch("storage.files.json.dump", side_effect=OSError("disk full")):
                with self.assertRaises(PersistenceError):
                    store.save(_sample_configuration())
            self.assertFalse((Path(temp_dir) / "config.json.tmp").exists())

    def test_saved_document_is_plain_json(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "nested" / "config.json"
            StateStore(path).save(_sample_configuration())
            payload = json.loads(path.read_text(encoding="utf-8"))

        self.assertEqual("Hibernate", payload["completion_action"])
        self.assertEqual({"focus": "Red", "reading": "Cyan"}, payload["tag_colors"])


if __name__ == "__main__":
    unittest.main()
