from django.test import SimpleTestCase

from parking_management.core.booking.intervals import TimeInterval
from parking_management.core.exceptions import ValidationError
from tests.helpers import at


class TimeIntervalTestCase(SimpleTestCase):

    def test_disjoint_intervals_do_not_overlap(self):
        first = TimeInterval(at(0), at(60))
        second = TimeInterval(at(90), at(120))
        self.assertFalse(first.overlaps(second))
        self.assertFalse(second.overlaps(first))

    def test_nested_and_partial_intervals_overlap(self):
        outer = TimeInterval(at(0), at(120))
        self.assertTrue(outer.overlaps(TimeInterval(at(30), at(60))))
        self.assertTrue(outer.overlaps(TimeInterval(at(100), at(200))))

    def test_shared_endpoint_counts_as_overlap(self):
        self.assertTrue(TimeInterval(at(0), at(60)).overlaps(TimeInterval(at(60), at(90))))

    def test_open_interval_extends_forever(self):
        ongoing = TimeInterval(at(0))
        self.assertTrue(ongoing.is_open)
        self.assertTrue(ongoing.overlaps(TimeInterval(at(10_000), at(10_060))))
        self.assertFalse(ongoing.overlaps(TimeInterval(at(-120), at(-60))))

    def test_two_open_intervals_always_overlap(self):
        self.assertTrue(TimeInterval(at(0)).overlaps(TimeInterval(at(5_000))))

    def test_end_must_follow_start(self):
        with self.assertRaises(ValidationError):
            TimeInterval(at(60), at(60))
        with self.assertRaises(ValidationError):
            TimeInterval(at(60), at(0))

    def test_contains(self):
        interval = TimeInterval(at(0), at(60))
        self.assertTrue(interval.contains(at(30)))
        self.assertFalse(interval.contains(at(61)))
        self.assertTrue(TimeInterval(at(0)).contains(at(100_000)))
