from datetime import date

from django.test import SimpleTestCase

from booking.exceptions import InvalidInput
from booking.services.availability_engine import AvailabilityEngine
from booking.services.capacity import capacity_status, month_capacity, parse_month
from booking.services.exclusions import Scope, Vacation

from .helpers import MONDAY, TUESDAY, StaticSource, booking, week


class ParseMonthTests(SimpleTestCase):
    def test_bounds(self):
        self.assertEqual(parse_month("2024-02"), (date(2024, 2, 1), date(2024, 2, 29)))

    def test_invalid(self):
        for raw in ["2024-13", "2024-2", "02-2024", "", None]:
            with self.assertRaises(InvalidInput):
                parse_month(raw)


class CapacityStatusTests(SimpleTestCase):
    def test_thresholds(self):
        self.assertEqual(capacity_status(0, 0), "closed")
        self.assertEqual(capacity_status(10, 0), "empty")
        self.assertEqual(capacity_status(10, 10), "available")
        self.assertEqual(capacity_status(10, 70), "busy")
        self.assertEqual(capacity_status(10, 100), "full")


class MonthCapacityTests(SimpleTestCase):
    def setUp(self):
        source = StaticSource(
            week("09:00", "17:00", range(5)), week("09:00", "17:00", range(5)),
            per_day={
                MONDAY: {"bookings": (booking("09:00", "10:00"),)},
                TUESDAY: {"staff_exclusions": (Vacation(Scope.STAFF, TUESDAY, TUESDAY),)},
            },
        )
        self.data = month_capacity(AvailabilityEngine(source), 1, "2025-01", 60)
        self.by_date = {row["date"]: row for row in self.data["capacity"]}

    def test_one_row_per_day(self):
        self.assertEqual(self.data["month"], "2025-01")
        self.assertEqual(len(self.data["capacity"]), 31)

    def test_booked_day(self):
        row = self.by_date["2025-01-06"]
        # starts 09:00..16:00 every 30 min; the 09:00-10:00 booking blocks 09:00 and 09:30
        self.assertEqual(row["total_slots"], 15)
        self.assertEqual(row["free_slots"], 13)
        self.assertEqual(row["occupied_slots"], 2)
        self.assertEqual(row["percentage"], 13)
        self.assertEqual(row["status"], "available")

    def test_vacation_day_is_full(self):
        self.assertEqual(self.by_date["2025-01-07"]["status"], "full")

    def test_free_and_closed_days(self):
        self.assertEqual(self.by_date["2025-01-08"]["status"], "empty")
        self.assertEqual(self.by_date["2025-01-11"]["status"], "closed")
