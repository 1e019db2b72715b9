from datetime import date, time, timedelta

from django.test import TestCase, override_settings

from booking.exceptions import InvalidReference
from booking.models import Booking, SalonBreak, SalonVacation, Staff
from booking.services.availability_engine import AvailabilityEngine
from booking.services.exclusions import OnDate, Vacation, Weekly
from booking.services.snapshots import OrmSnapshotSource
from configmgr.models import SystemSetting
from staff.models import StaffBreak, StaffVacation

from .helpers import MONDAY, create_salon


class OrmSnapshotSourceTests(TestCase):
    def setUp(self):
        self.salon, self.staff, self.cut, _ = create_salon()
        self.source = OrmSnapshotSource()

    def test_schedules_are_read_from_working_hours(self):
        snapshot = self.source.load(self.staff.pk, MONDAY)
        monday = snapshot.staff_schedule.for_date(MONDAY)
        self.assertEqual((monday.start, monday.end), (540, 1020))
        self.assertEqual(snapshot.window(), (540, 1020))
        self.assertFalse(snapshot.staff_schedule.days[5].is_active)

    def test_unknown_staff(self):
        with self.assertRaises(InvalidReference):
            self.source.load(999999, MONDAY)

    def test_only_blocking_bookings_for_the_day_are_loaded(self):
        for status, start in [("confirmed", time(10)), ("cancelled", time(11)), ("completed", time(12))]:
            Booking.objects.create(staff=self.staff, date=MONDAY, start_time=start,
                                   end_time=start.replace(minute=30), status=status, client_name="c")
        Booking.objects.create(staff=self.staff, date=MONDAY + timedelta(days=1), start_time=time(10),
                               end_time=time(10, 30), status="confirmed", client_name="c")

        bookings = self.source.load(self.staff.pk, MONDAY).bookings
        self.assertEqual([(b.start, b.status) for b in bookings], [(600, "confirmed")])

    def test_breaks_and_vacations_from_both_levels(self):
        SalonBreak.objects.create(salon=self.salon, day_of_week=0, start_time=time(12), end_time=time(13))
        StaffBreak.objects.create(staff=self.staff, date=MONDAY, start_time=time(15), end_time=time(16))
        StaffBreak.objects.create(staff=self.staff, day_of_week=0, start_time=time(9), end_time=time(10),
                                  is_active=False)
        StaffVacation.objects.create(staff=self.staff, start_date=date(2025, 2, 1), end_date=date(2025, 2, 7))

        snapshot = self.source.load(self.staff.pk, MONDAY)
        self.assertEqual([type(e.recurrence) for e in snapshot.salon_exclusions], [Weekly])
        self.assertEqual([type(e.recurrence) for e in snapshot.staff_exclusions], [OnDate])
        self.assertFalse(snapshot.exclusions().whole_day)

        SalonVacation.objects.create(salon=self.salon, start_date=MONDAY, end_date=MONDAY)
        snapshot = self.source.load(self.staff.pk, MONDAY)
        self.assertTrue(any(isinstance(e, Vacation) for e in snapshot.salon_exclusions))
        self.assertTrue(snapshot.exclusions().whole_day)

    def test_break_without_recurrence_is_ignored(self):
        StaffBreak.objects.create(staff=self.staff, start_time=time(12), end_time=time(13))
        with self.assertLogs("booking.services.snapshots", level="WARNING"):
            snapshot = self.source.load(self.staff.pk, MONDAY)
        self.assertEqual(snapshot.staff_exclusions, ())

    def test_staff_flags(self):
        self.staff.accepts_bookings = False
        self.staff.is_public = False
        self.staff.save()
        snapshot = self.source.load(self.staff.pk, MONDAY)
        self.assertFalse(snapshot.is_bookable)
        self.assertFalse(snapshot.is_public)

    def test_engine_reads_database_by_default(self):
        Booking.objects.create(staff=self.staff, date=MONDAY, start_time=time(12), end_time=time(12, 30),
                               status="pending", client_name="c")
        slots = AvailabilityEngine().available_slots(self.staff.pk, MONDAY, 30)
        self.assertNotIn("12:00", slots)
        self.assertIn("12:30", slots)


@override_settings(BOOKING_DEFAULT_SLOT_INTERVAL=30)
class SlotIntervalTests(TestCase):
    def setUp(self):
        self.salon, self.staff, _, _ = create_salon()
        self.source = OrmSnapshotSource()

    def interval(self):
        return self.source.load(self.staff.pk, MONDAY).slot_interval

    def test_salon_interval_wins(self):
        self.salon.booking_slot_interval = 15
        self.salon.save()
        self.assertEqual(self.interval(), 15)

    def test_unset_interval_uses_settings_default(self):
        self.salon.booking_slot_interval = None
        self.salon.save()
        self.assertEqual(self.interval(), 30)

    def test_system_setting_overrides_default(self):
        self.salon.booking_slot_interval = None
        self.salon.save()
        SystemSetting.objects.create(key=SystemSetting.DEFAULT_SLOT_INTERVAL, value="45")
        self.assertEqual(self.interval(), 45)

    def test_bad_system_setting_is_ignored(self):
        self.salon.booking_slot_interval = None
        self.salon.save()
        SystemSetting.objects.create(key=SystemSetting.DEFAULT_SLOT_INTERVAL, value="ten")
        with self.assertLogs("booking.services.slot_utils", level="WARNING"):
            self.assertEqual(self.interval(), 30)

    def test_unsupported_salon_interval_falls_back(self):
        self.salon.booking_slot_interval = 20
        self.salon.save()
        with self.assertLogs("booking.services.slot_utils", level="WARNING"):
            self.assertEqual(self.interval(), 30)


class UnbookableStaffTests(TestCase):
    """Staff who can't take bookings have no availability, even with no hours set."""

    def setUp(self):
        self.salon, _, _, _ = create_salon()
        self.engine = AvailabilityEngine()

    def make_staff(self, **flags):
        return Staff.objects.create(salon=self.salon, name="New", email="new@studio.test",
                                    working_hours={}, **flags)

    def test_inactive_staff_without_hours(self):
        staff = self.make_staff(is_active=False)
        self.assertEqual(self.engine.available_slots(staff.pk, MONDAY, 30), [])
        self.assertFalse(self.engine.is_available(staff.pk, MONDAY, "10:00", 30))

    def test_staff_not_accepting_bookings_without_hours(self):
        staff = self.make_staff(accepts_bookings=False, is_public=True)
        self.assertEqual(self.engine.available_slots(staff.pk, MONDAY, 30), [])
        self.assertEqual(self.engine.slot_board(staff.pk, MONDAY, 30), [])

    def test_bookable_staff_without_hours_is_still_an_error(self):
        staff = self.make_staff()
        with self.assertRaises(InvalidReference):
            self.engine.available_slots(staff.pk, MONDAY, 30)


class StoredSecondsTests(TestCase):
    """Rows saved with seconds are rounded outwards to whole minutes."""

    def setUp(self):
        self.salon, self.staff, _, _ = create_salon()
        self.source = OrmSnapshotSource()

    def test_break_with_seconds(self):
        StaffBreak.objects.create(staff=self.staff, day_of_week=0,
                                  start_time=time(12, 0, 30), end_time=time(12, 59, 30))
        snapshot = self.source.load(self.staff.pk, MONDAY)
        self.assertEqual(snapshot.exclusions().windows, [(720, 780)])

        slots = AvailabilityEngine().available_slots(self.staff.pk, MONDAY, 30)
        self.assertNotIn("12:00", slots)
        self.assertNotIn("12:30", slots)
        self.assertIn("13:00", slots)

    def test_booking_with_seconds(self):
        Booking.objects.create(staff=self.staff, date=MONDAY, start_time=time(10, 0, 15),
                               end_time=time(10, 30, 15), status="confirmed", client_name="c")
        record = self.source.load(self.staff.pk, MONDAY).bookings[0]
        self.assertEqual((record.start, record.end), (600, 631))

        slots = AvailabilityEngine().available_slots(self.staff.pk, MONDAY, 30)
        self.assertNotIn("10:00", slots)
        self.assertNotIn("10:30", slots)
        self.assertIn("11:00", slots)
