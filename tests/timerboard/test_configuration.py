import datetime as dt
import unittest

from timerboard import (
    BoardSettings,
    Configuration,
    Timer,
    TimerIndexError,
    TimerNotFoundError,
    project_end_times,
)

_NOW = dt.datetime(2024, 5, 1, 12, 0, 0)


def _timer(description: str, seconds: int, lane: str = "left") -> Timer:
    return Timer.create(description, seconds, lane=lane)


def _descriptions(config: Configuration) -> list[str]:
    return [timer.description for timer in config.timers]


class ConfigurationMutationTests(unittest.TestCase):
    def test_add_appends_and_reindexes(self) -> None:
        config = Configuration()
        config.add_timer(_timer("a", 60))
        config.add_timer(_timer("b", 60))

        self.assertEqual(["a", "b"], _descriptions(config))
        self.assertEqual([0, 1], [timer.id for timer in config.timers])

    def test_reverse_flag_prepends(self) -> None:
        config = Configuration(timers=[_timer("a", 60)])

        config.add_timer(_timer("b", 60), reverse=True)

        self.assertEqual(["b", "a"], _descriptions(config))

    def test_insert_at_front_setting_and_reverse_flag_cancel_out(self) -> None:
        config = Configuration(
            settings=BoardSettings(insert_at_front=True),
            timers=[_timer("a", 60)],
        )

        config.add_timer(_timer("b", 60))
        config.add_timer(_timer("c", 60), reverse=True)

        self.assertEqual(["b", "a", "c"], _descriptions(config))

    def test_remove_unknown_id_raises_not_found(self) -> None:
        config = Configuration(timers=[_timer("a", 60)])
        with self.assertRaises(TimerNotFoundError):
            config.remove_timer(3)

    def test_remove_drops_the_timer_at_the_given_id_among_equal_timers(self) -> None:
        config = Configuration()
        first = config.add_timer(_timer("x", 300))
        second = config.add_timer(_timer("x", 300))
        config.add_timer(_timer("y", 300, lane="right"))

        removed = config.remove_timer(1)

        self.assertIs(second, removed)
        self.assertIs(first, config.timers[0])
        self.assertEqual(["x", "y"], _descriptions(config))
        self.assertEqual([0, 1], [timer.id for timer in config.timers])

    def test_move_reinserts_at_target(self) -> None:
        config = Configuration(timers=[_timer("a", 1), _timer("b", 1), _timer("c", 1)])

        config.move_timer(0, 2)

        self.assertEqual(["b", "c", "a"], _descriptions(config))
        self.assertEqual([0, 1, 2], [timer.id for timer in config.timers])

    def test_move_out_of_range_is_rejected_without_change(self) -> None:
        config = Configuration(timers=[_timer("a", 1), _timer("b", 1)])

        with self.assertRaises(TimerIndexError):
            config.move_timer(0, 2)
        self.assertEqual(["a", "b"], _descriptions(config))

    def test_move_up_and_down_guard_boundaries(self) -> None:
        config = Configuration(timers=[_timer("a", 1), _timer("b", 1)])

        with self.assertRaises(TimerIndexError):
            config.move_up(0)
        with self.assertRaises(TimerIndexError):
            config.move_down(1)

        config.move_down(0)
        self.assertEqual(["b", "a"], _descriptions(config))
        config.move_up(1)
        self.assertEqual(["a", "b"], _descriptions(config))

    def test_merge_sums_remaining_and_joins_descriptions(self) -> None:
        config = Configuration(timers=[_timer("Write", 60), _timer("Edit", 120)])

        merged = config.merge_timers(0, 1)

        self.assertEqual(1, len(config))
        self.assertEqual(0, merged.id)
        self.assertEqual(180, merged.remaining_secs)
        self.assertEqual(180, merged.initial_duration_secs)
        self.assertEqual("Write (Edit)", merged.description)

    def test_merge_uses_index_after_removal(self) -> None:
        config = Configuration(
            timers=[_timer("a", 10), _timer("b", 20), _timer("c", 30)]
        )

        merged = config.merge_timers(1, 0)

        self.assertEqual("c (a)", merged.description)
        self.assertEqual(40, merged.remaining_secs)
        self.assertEqual(["b", "c (a)"], _descriptions(config))

    def test_merge_rejects_same_id_and_trailing_target(self) -> None:
        config = Configuration(timers=[_timer("a", 10), _timer("b", 20)])

        with self.assertRaises(TimerIndexError):
            config.merge_timers(0, 0)
        with self.assertRaises(TimerIndexError):
            config.merge_timers(1, 0)
        with self.assertRaises(TimerNotFoundError):
            config.merge_timers(0, 5)
        self.assertEqual(["a", "b"], _descriptions(config))


class ConfigurationTickTests(unittest.TestCase):
    def test_five_second_timer_finishes_on_fifth_tick(self) -> None:
        config = Configuration()
        config.add_timer(_timer("Test", 5))

        remaining = []
        report = None
        for _ in range(5):
            report = config.tick_all()
            remaining.append(config.get(0).remaining_secs)

        self.assertEqual([4, 3, 2, 1, 0], remaining)
        assert report is not None
        self.assertEqual("just_finished", report.events[0].outcome)
        self.assertFalse(config.get(0).is_active)

    def test_each_lane_ticks_only_its_first_unfinished_timer(self) -> None:
        config = Configuration(
            timers=[
                _timer("done", 0),
                _timer("left-1", 10),
                _timer("right-1", 10, lane="right"),
                _timer("left-2", 10),
                _timer("right-2", 10, lane="right"),
            ]
        )

        report = config.tick_all()

        self.assertEqual(
            [0, 9, 9, 10, 10],
            [timer.remaining_secs for timer in config.timers],
        )
        self.assertEqual(
            [False, True, True, False, False],
            [timer.is_active for timer in config.timers],
        )
        self.assertEqual(["left", "right"], [event.lane for event in report.events])

    def test_tick_on_finished_board_changes_nothing(self) -> None:
        config = Configuration(timers=[_timer("a", 0), _timer("b", 0, lane="right")])

        report = config.tick_all()

        self.assertEqual((), report.events)
        self.assertEqual([0, 0], [timer.remaining_secs for timer in config.timers])
        self.assertEqual([0, 0], [timer.initial_duration_secs for timer in config.timers])
        self.assertFalse(any(timer.is_active for timer in config.timers))

    def test_finished_timer_moves_to_end(self) -> None:
        config = Configuration(timers=[_timer("a", 1), _timer("b", 5), _timer("c", 5)])

        config.tick_all()

        self.assertEqual(["b", "c", "a"], _descriptions(config))
        self.assertEqual([0, 1, 2], [timer.id for timer in config.timers])

    def test_finished_timer_moves_without_touching_an_equal_timer(self) -> None:
        config = Configuration()
        first = config.add_timer(_timer("x", 1))
        config.tick_all()
        second = config.add_timer(_timer("x", 1))

        config.tick_all()

        self.assertEqual(first, second)
        self.assertIs(first, config.timers[0])
        self.assertIs(second, config.timers[1])
        self.assertEqual(2, len({id(timer) for timer in config.timers}))
        self.assertEqual(list(range(len(config))), [timer.id for timer in config.timers])

    def test_finished_timers_from_both_lanes_move_in_lane_order(self) -> None:
        config = Configuration(
            timers=[_timer("x", 1), _timer("x", 1, lane="right"), _timer("y", 5)]
        )
        left, right, pending = config.timers

        config.tick_all()

        self.assertEqual([pending, left, right], list(config.timers))
        self.assertIs(left, config.timers[1])
        self.assertIs(right, config.timers[2])
        self.assertEqual([0, 1, 2], [timer.id for timer in config.timers])

    def test_finished_timer_stays_when_setting_disabled(self) -> None:
        config = Configuration(
            settings=BoardSettings(move_finished_to_end=False),
            timers=[_timer("a", 1), _timer("b", 5)],
        )

        config.tick_all()

        self.assertEqual(["a", "b"], _descriptions(config))

    def test_rearmed_timer_is_not_moved(self) -> None:
        repeating = _timer("a", 1)
        repeating.repeat_count = 2
        config = Configuration(timers=[repeating, _timer("b", 5)])

        report = config.tick_all()

        self.assertEqual("rearmed", report.events[0].outcome)
        self.assertTrue(report.events[0].reached_zero)
        self.assertEqual(["a", "b"], _descriptions(config))
        self.assertEqual(1, config.get(0).remaining_secs)
        self.assertEqual(1, config.get(0).repeat_count)

    def test_paused_board_does_not_tick(self) -> None:
        config = Configuration(timers=[_timer("a", 5)])
        config.toggle_pause()

        report = config.tick_all()

        self.assertTrue(report.paused)
        self.assertEqual(5, config.get(0).remaining_secs)

    def test_completion_action_fires_once_when_everything_is_done(self) -> None:
        config = Configuration(
            settings=BoardSettings(completion_action="Shutdown"),
            timers=[_timer("a", 1), _timer("b", 2)],
        )

        first = config.tick_all()
        second = config.tick_all()
        third = config.tick_all()
        fourth = config.tick_all()

        self.assertIsNone(first.completion_action)
        self.assertIsNone(second.completion_action)
        self.assertEqual("Shutdown", third.completion_action)
        self.assertIsNone(fourth.completion_action)

    def test_completion_action_goes_to_longer_timer_with_left_winning_ties(self) -> None:
        config = Configuration(
            settings=BoardSettings(completion_action="Hibernate"),
            timers=[_timer("left", 1), _timer("right", 1, lane="right")],
        )

        report = config.tick_all()

        self.assertEqual("Hibernate", report.completion_action)
        assert report.action_event is not None
        self.assertEqual("left", report.action_event.lane)

        config = Configuration(
            settings=BoardSettings(completion_action="Hibernate"),
            timers=[_timer("left", 1), _timer("right", 1, lane="right")],
        )
        config.get(1).initial_duration_secs = 90
        report = config.tick_all()
        assert report.action_event is not None
        self.assertEqual("right", report.action_event.lane)

    def test_no_completion_action_when_disabled(self) -> None:
        config = Configuration(timers=[_timer("a", 1)])

        report = config.tick_all()

        self.assertIsNone(report.completion_action)


class ProjectionTests(unittest.TestCase):
    def test_end_times_accumulate_per_lane(self) -> None:
        timers = [
            _timer("l1", 60),
            _timer("r1", 30, lane="right"),
            _timer("done", 0),
            _timer("l2", 120),
        ]

        ends = project_end_times(timers, _NOW)

        self.assertEqual(_NOW + dt.timedelta(seconds=60), ends[0])
        self.assertEqual(_NOW + dt.timedelta(seconds=30), ends[1])
        self.assertIsNone(ends[2])
        self.assertEqual(_NOW + dt.timedelta(seconds=180), ends[3])

    def test_end_time_past_the_calendar_has_no_projection(self) -> None:
        timers = [
            _timer("far", 5_000_000_000 * 60),
            _timer("after", 60),
            _timer("r1", 30, lane="right"),
        ]

        ends = project_end_times(timers, _NOW)

        self.assertIsNone(ends[0])
        self.assertIsNone(ends[1])
        self.assertEqual(_NOW + dt.timedelta(seconds=30), ends[2])

    def test_snapshot_with_huge_timer_keeps_remaining_time(self) -> None:
        config = Configuration(
            settings=BoardSettings(completion_action="Shutdown"),
            timers=[_timer("far", 10**15), _timer("r", 60, lane="right")],
        )

        snapshot = config.snapshot(_NOW)

        self.assertEqual(10**15, snapshot.timers[0].remaining_secs)
        self.assertIsNone(snapshot.timers[0].end_time)
        self.assertEqual(["(S)", ""], [timer.action_marker for timer in snapshot.timers])

    def test_snapshot_marks_lane_last_timer_with_later_end(self) -> None:
        config = Configuration(
            settings=BoardSettings(completion_action="Hibernate"),
            timers=[
                _timer("l1", 60),
                _timer("r1", 300, lane="right"),
                _timer("l2", 60),
            ],
        )

        snapshot = config.snapshot(_NOW)

        self.assertEqual(["", "(H)", ""], [timer.action_marker for timer in snapshot.timers])
        self.assertEqual(("l1", "l2"), tuple(t.description for t in snapshot.lane("left")))

    def test_snapshot_marker_tie_goes_left(self) -> None:
        config = Configuration(
            settings=BoardSettings(completion_action="Shutdown"),
            timers=[_timer("l", 60), _timer("r", 60, lane="right")],
        )

        snapshot = config.snapshot(_NOW)

        self.assertEqual(["(S)", ""], [timer.action_marker for timer in snapshot.timers])

    def test_snapshot_without_action_has_no_marker(self) -> None:
        config = Configuration(timers=[_timer("l", 60)])

        snapshot = config.snapshot(_NOW)

        self.assertEqual("", snapshot.timers[0].action_marker)
        self.assertEqual("None", snapshot.completion_action)

    def test_snapshot_carries_tag_color(self) -> None:
        config = Configuration(
            timers=[Timer.create("Deep work", 60, completion_tag="focus")]
        )

        snapshot = config.snapshot(_NOW)

        self.assertEqual("Magenta", snapshot.timers[0].color)


if __name__ == "__main__":
    unittest.main()
