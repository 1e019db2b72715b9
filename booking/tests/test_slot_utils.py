from datetime import date, time

from django.test import SimpleTestCase

from booking.exceptions import InvalidInput
from booking.services.slot_utils import (
    format_hhmm,
    generate_candidates,
    normalize_date,
    parse_time,
    to_minutes,
)


class NormalizeDateTests(SimpleTestCase):
    def test_iso_and_locale_forms_are_the_same_day(self):
        iso = normalize_date("2025-01-06")
        local = normalize_date("06.01.2025")
        self.assertEqual(iso, local)
        self.assertEqual(iso.weekday(), 0)

    def test_date_passes_through(self):
        self.assertEqual(normalize_date(date(2025, 3, 1)), date(2025, 3, 1))

    def test_rejects_other_formats(self):
        for raw in ["2025/01/06", "6.1.2025", "tomorrow", "", "2025-02-30", None]:
            with self.assertRaises(InvalidInput):
                normalize_date(raw)


class TimeOfDayTests(SimpleTestCase):
    def test_minutes_round_trip(self):
        self.assertEqual(to_minutes("09:30"), 570)
        self.assertEqual(to_minutes(time(17, 5)), 1025)
        self.assertEqual(format_hhmm(570), "09:30")

    def test_rejects_malformed_times(self):
        for raw in ["9.30", "24:00", "12:60", "noon", 930]:
            with self.assertRaises(InvalidInput):
                parse_time(raw)

    def test_rejects_seconds(self):
        with self.assertRaises(InvalidInput):
            parse_time(time(9, 0, 30))


class GenerateCandidatesTests(SimpleTestCase):
    def test_steps_and_includes_latest_start_off_grid(self):
        # 09:00..09:40 on a 30-minute grid: 09:40 is not on the grid but must be offered
        slots = generate_candidates(to_minutes("09:00"), to_minutes("09:40"), 30)
        self.assertEqual([format_hhmm(m) for m in slots], ["09:00", "09:30", "09:40"])

    def test_end_on_grid_appears_once(self):
        slots = generate_candidates(to_minutes("09:00"), to_minutes("10:00"), 30)
        self.assertEqual([format_hhmm(m) for m in slots], ["09:00", "09:30", "10:00"])

    def test_single_point_window(self):
        self.assertEqual(generate_candidates(540, 540, 30), [540])

    def test_inverted_window_is_empty(self):
        self.assertEqual(generate_candidates(600, 540, 30), [])

    def test_is_restartable(self):
        slots = generate_candidates(540, 600, 15)
        self.assertEqual(list(slots), list(slots))

    def test_rejects_bad_step(self):
        with self.assertRaises(InvalidInput):
            generate_candidates(540, 600, 0)
