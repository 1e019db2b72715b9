# booking/tests/helpers.py
#
# Builders shared by the booking tests.
from datetime import date, timedelta
from decimal import Decimal

from django.utils import timezone

from booking.models import Salon, Service, Staff
from booking.services.availability_engine import StaffDaySnapshot
from booking.services.conflict_checker import BookingRecord
from booking.services.schedule_resolver import DaySchedule, WeeklySchedule
from booking.services.slot_utils import to_minutes

MONDAY = date(2025, 1, 6)
TUESDAY = date(2025, 1, 7)
SATURDAY = date(2025, 1, 11)


def week(start, end, days=range(7)):
    """WeeklySchedule open start-end on the given weekdays (Monday = 0)."""
    return WeeklySchedule(days=tuple(
        DaySchedule(True, to_minutes(start), to_minutes(end)) if i in days else DaySchedule.closed()
        for i in range(7)
    ))


def booking(start, end, status="confirmed", day=MONDAY, staff_id=1):
    return BookingRecord(staff_id=staff_id, date=day, start=to_minutes(start),
                         end=to_minutes(end), status=status)


class StaticSource:
    """
    Snapshot source returning the same data for any staff/date.
    `per_day` maps a date to snapshot fields that apply on that date only.
    """

    def __init__(self, salon_schedule, staff_schedule, per_day=None, **extra):
        self.salon_schedule = salon_schedule
        self.staff_schedule = staff_schedule
        self.per_day = per_day or {}
        self.extra = extra
        self.loads = 0

    def load(self, staff_id, day):
        self.loads += 1
        fields = dict(self.extra, **self.per_day.get(day, {}))
        return StaffDaySnapshot(
            staff_id=staff_id,
            day=day,
            salon_schedule=self.salon_schedule,
            staff_schedule=self.staff_schedule,
            **fields,
        )


# -------------------------
# Database fixtures
# -------------------------
SALON_HOURS = {
    day: {"is_open": True, "open": "08:00", "close": "20:00"}
    for day in ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
}

STAFF_HOURS = {
    day: {"is_working": day not in ("saturday", "sunday"), "start": "09:00", "end": "17:00"}
    for day in ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
}


def next_monday():
    """A Monday strictly in the future, so cancellation cutoffs never bite."""
    today = timezone.localdate()
    return today + timedelta(days=7 - today.weekday())


def create_salon(**overrides):
    """Salon open 08-20 daily, one stylist working 09-17 on weekdays, two services."""
    salon = Salon.objects.create(name="Studio", working_hours=SALON_HOURS, **overrides)
    cut = Service.objects.create(salon=salon, name="Haircut", duration_minutes=30, price=Decimal("25.00"))
    blow_dry = Service.objects.create(salon=salon, name="Blow-dry", duration_minutes=45, price=Decimal("20.00"))
    staff = Staff.objects.create(salon=salon, name="Ana", email="ana@studio.test", working_hours=STAFF_HOURS)
    staff.services.set([cut, blow_dry])
    return salon, staff, cut, blow_dry
