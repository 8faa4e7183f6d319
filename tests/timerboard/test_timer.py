import unittest

from timerboard import Timer, format_clock, split_duration


class TimerTickTests(unittest.TestCase):
    def test_tick_counts_down_and_marks_active(self) -> None:
        timer = Timer.create("Tea", 3)

        outcome = timer.tick()

        self.assertEqual("running", outcome)
        self.assertEqual(2, timer.remaining_secs)
        self.assertTrue(timer.is_active)

    def test_tick_reaching_zero_reports_just_finished(self) -> None:
        timer = Timer.create("Tea", 1)

        outcome = timer.tick()

        self.assertEqual("just_finished", outcome)
        self.assertEqual(0, timer.remaining_secs)
        self.assertFalse(timer.is_active)
        self.assertTrue(timer.is_finished)

    def test_finished_timer_is_left_untouched(self) -> None:
        timer = Timer.create("Done", 0)

        self.assertEqual("running", timer.tick())
        self.assertEqual(0, timer.remaining_secs)
        self.assertFalse(timer.is_active)

    def test_repeat_rearms_with_initial_duration(self) -> None:
        timer = Timer.create("Stretch", 2)
        timer.repeat_count = 1

        self.assertEqual("running", timer.tick())
        self.assertEqual("rearmed", timer.tick())
        self.assertEqual(2, timer.remaining_secs)
        self.assertEqual(0, timer.repeat_count)

        timer.tick()
        self.assertEqual("just_finished", timer.tick())

    def test_negative_values_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Timer(description="x", initial_duration_secs=-1, remaining_secs=0)
        with self.assertRaises(ValueError):
            Timer(description="x", initial_duration_secs=1, remaining_secs=1, lane="up")


class TimerAdjustTests(unittest.TestCase):
    def test_add_seconds_grows_remaining_and_initial(self) -> None:
        timer = Timer.create("Read", 60)
        timer.remaining_secs = 30

        timer.add_seconds(600)

        self.assertEqual(630, timer.remaining_secs)
        self.assertEqual(660, timer.initial_duration_secs)

    def test_subtract_more_than_remaining_zeroes_and_keeps_initial(self) -> None:
        timer = Timer.create("Read", 600)

        timer.subtract_seconds(900)

        self.assertEqual(0, timer.remaining_secs)
        self.assertEqual(600, timer.initial_duration_secs)

    def test_subtract_within_remaining_moves_both(self) -> None:
        timer = Timer.create("Read", 600)
        timer.remaining_secs = 400

        timer.subtract_seconds(300)

        self.assertEqual(100, timer.remaining_secs)
        self.assertEqual(300, timer.initial_duration_secs)

    def test_subtract_saturates_initial_at_zero(self) -> None:
        timer = Timer(description="Merged", initial_duration_secs=60, remaining_secs=120)

        timer.subtract_seconds(90)

        self.assertEqual(30, timer.remaining_secs)
        self.assertEqual(0, timer.initial_duration_secs)


class ClockFormattingTests(unittest.TestCase):
    def test_split_duration(self) -> None:
        self.assertEqual((1, 1, 1), split_duration(3661))
        self.assertEqual((0, 0, 0), split_duration(-5))

    def test_format_clock(self) -> None:
        self.assertEqual("00:25:00", format_clock(1500))
        self.assertEqual("100:00:00", format_clock(360000))


if __name__ == "__main__":
    unittest.main()
