from django.test import SimpleTestCase

from booking.exceptions import InvalidReference
from booking.services.schedule_resolver import Window, WeeklySchedule, effective_window
from booking.services.slot_utils import to_minutes

from .helpers import MONDAY, SATURDAY, week


class EffectiveWindowTests(SimpleTestCase):
    def test_intersection_of_salon_and_staff_hours(self):
        window = effective_window(week("09:00", "18:00"), week("12:00", "20:00"), MONDAY)
        self.assertEqual(window, Window(to_minutes("12:00"), to_minutes("18:00")))

    def test_disjoint_hours_have_no_window(self):
        self.assertIsNone(effective_window(week("09:00", "18:00"), week("19:00", "20:00"), MONDAY))

    def test_touching_hours_have_no_window(self):
        self.assertIsNone(effective_window(week("09:00", "12:00"), week("12:00", "20:00"), MONDAY))

    def test_salon_closed(self):
        salon = week("09:00", "18:00", days=range(5))
        self.assertIsNone(effective_window(salon, week("09:00", "18:00"), SATURDAY))

    def test_staff_off(self):
        staff = week("09:00", "18:00", days=range(5))
        self.assertIsNone(effective_window(week("09:00", "18:00"), staff, SATURDAY))

    def test_missing_schedule_is_invalid_reference(self):
        with self.assertRaises(InvalidReference):
            effective_window(None, week("09:00", "18:00"), MONDAY)


class WeeklyScheduleFromMappingTests(SimpleTestCase):
    def test_salon_keys(self):
        schedule = WeeklySchedule.from_mapping(
            {"monday": {"is_open": True, "open": "08:00", "close": "20:00"}},
            active_key="is_open", start_key="open", end_key="close",
        )
        monday = schedule.for_date(MONDAY)
        self.assertTrue(monday.is_active)
        self.assertEqual((monday.start, monday.end), (480, 1200))

    def test_unlisted_and_inactive_days_are_closed(self):
        schedule = WeeklySchedule.from_mapping({
            "monday": {"is_working": False, "start": "09:00", "end": "17:00"},
            "tuesday": {"is_working": True, "start": "09:00", "end": "17:00"},
        }, active_key="is_working")
        self.assertFalse(schedule.for_date(MONDAY).is_active)
        self.assertFalse(schedule.for_date(SATURDAY).is_active)
        self.assertEqual(len(schedule.days), 7)

    def test_empty_mapping_is_invalid_reference(self):
        for empty in ({}, None):
            with self.assertRaises(InvalidReference):
                WeeklySchedule.from_mapping(empty)


class ClosedWeekTests(SimpleTestCase):
    def test_no_window_any_day(self):
        closed = WeeklySchedule.closed_week()
        self.assertEqual(len(closed.days), 7)
        self.assertIsNone(effective_window(closed, week("09:00", "17:00"), MONDAY))
