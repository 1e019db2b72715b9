from datetime import date, time

from django.core.exceptions import ValidationError
from django.test import TestCase

from booking.models import Salon, Staff
from booking.services.availability_engine import AvailabilityEngine

from .models import StaffBreak, StaffVacation

HOURS = {"monday": {"is_working": True, "start": "09:00", "end": "17:00"}}
SALON_HOURS = {"monday": {"is_open": True, "open": "08:00", "close": "20:00"}}
MONDAY = date(2025, 1, 6)


class StaffExclusionModelTests(TestCase):
    def setUp(self):
        salon = Salon.objects.create(name="Studio", working_hours=SALON_HOURS)
        self.staff = Staff.objects.create(salon=salon, name="Ana", email="ana@studio.test",
                                          working_hours=HOURS)

    def test_break_needs_exactly_one_recurrence(self):
        neither = StaffBreak(staff=self.staff, start_time=time(12), end_time=time(13))
        both = StaffBreak(staff=self.staff, day_of_week=0, date=MONDAY,
                          start_time=time(12), end_time=time(13))
        for brk in (neither, both):
            with self.assertRaises(ValidationError):
                brk.full_clean()

    def test_break_must_start_before_it_ends(self):
        brk = StaffBreak(staff=self.staff, day_of_week=0, start_time=time(13), end_time=time(12))
        with self.assertRaises(ValidationError):
            brk.full_clean()

    def test_vacation_range(self):
        with self.assertRaises(ValidationError):
            StaffVacation(staff=self.staff, start_date=date(2025, 1, 7), end_date=MONDAY).full_clean()
        StaffVacation(staff=self.staff, start_date=MONDAY, end_date=MONDAY).full_clean()

    def test_weekly_break_blocks_every_matching_weekday(self):
        StaffBreak.objects.create(staff=self.staff, day_of_week=0, start_time=time(12), end_time=time(13))
        engine = AvailabilityEngine()
        for monday in (MONDAY, date(2025, 1, 13)):
            slots = engine.available_slots(self.staff.pk, monday, 30)
            self.assertIn("11:30", slots)
            self.assertNotIn("12:00", slots)
            self.assertNotIn("12:30", slots)
            self.assertIn("13:00", slots)

    def test_dated_break_blocks_one_day(self):
        StaffBreak.objects.create(staff=self.staff, date=MONDAY, start_time=time(9), end_time=time(10))
        engine = AvailabilityEngine()
        self.assertNotIn("09:00", engine.available_slots(self.staff.pk, MONDAY, 30))
        self.assertIn("09:00", engine.available_slots(self.staff.pk, date(2025, 1, 13), 30))

    def test_vacation_blocks_whole_day(self):
        StaffVacation.objects.create(staff=self.staff, start_date=MONDAY, end_date=MONDAY)
        self.assertEqual(AvailabilityEngine().available_slots(self.staff.pk, MONDAY, 30), [])
