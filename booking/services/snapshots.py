"""
snapshots.py
------------
Loads the read-only data the availability engine works on for one staff
member and one date, straight from the ORM, and converts it into the
engine's value types (WeeklySchedule, Break/Vacation, BookingRecord).

Nothing is cached: every call reads fresh rows.
"""

import logging
from datetime import date

from ..exceptions import InvalidReference
from ..models import Booking, Service, Staff
from .availability_engine import ServiceRequest, StaffDaySnapshot
from .conflict_checker import BLOCKING_STATUSES, BookingRecord
from .exclusions import Break, OnDate, Scope, Vacation, Weekly
from .schedule_resolver import WeeklySchedule
from .slot_utils import resolve_slot_interval

logger = logging.getLogger(__name__)


def _row_minutes(value, round_up=False) -> int:
    """
    Minutes since midnight for a stored TimeField value. Rows may carry
    seconds (admin input); starts are floored and ends ceiled so the row
    never blocks less than it says.
    """
    minutes = value.hour * 60 + value.minute
    if round_up and (value.second or value.microsecond):
        minutes += 1
    return minutes


def salon_schedule(salon) -> WeeklySchedule:
    return WeeklySchedule.from_mapping(
        salon.working_hours, active_key="is_open", start_key="open", end_key="close"
    )


def staff_schedule(staff) -> WeeklySchedule:
    return WeeklySchedule.from_mapping(
        staff.working_hours, active_key="is_working", start_key="start", end_key="end"
    )


def to_break(row, scope: Scope):
    """A BreakBase row as an engine Break, or None when it has no recurrence."""
    if row.date is not None:
        recurrence = OnDate(row.date)
    elif row.day_of_week is not None:
        recurrence = Weekly(row.day_of_week)
    else:
        logger.warning("Ignoring %s break #%s with neither weekday nor date", scope.value, row.pk)
        return None
    return Break(
        scope=scope,
        recurrence=recurrence,
        start=_row_minutes(row.start_time),
        end=_row_minutes(row.end_time, round_up=True),
        active=row.is_active,
    )


def to_vacation(row, scope: Scope) -> Vacation:
    return Vacation(scope=scope, start_date=row.start_date, end_date=row.end_date, active=row.is_active)


def to_booking_record(row) -> BookingRecord:
    return BookingRecord(
        staff_id=row.staff_id,
        date=row.date,
        start=_row_minutes(row.start_time),
        end=_row_minutes(row.end_time, round_up=True),
        status=row.status,
    )


def _exclusions(break_rows, vacation_rows, scope: Scope) -> tuple:
    items = [to_break(row, scope) for row in break_rows]
    items += [to_vacation(row, scope) for row in vacation_rows]
    return tuple(item for item in items if item is not None)


class OrmSnapshotSource:
    """Builds StaffDaySnapshot objects from the database."""

    def get_staff(self, staff_id):
        try:
            return Staff.objects.select_related("salon").get(pk=staff_id)
        except (Staff.DoesNotExist, ValueError, TypeError):
            raise InvalidReference(f"Unknown staff member {staff_id!r}.")

    def load(self, staff_id, day: date) -> StaffDaySnapshot:
        staff = self.get_staff(staff_id)
        salon = staff.salon

        if not (staff.is_active and staff.accepts_bookings):
            # No availability either way; don't parse schedules that may be unset
            return StaffDaySnapshot(
                staff_id=staff.pk,
                day=day,
                salon_schedule=WeeklySchedule.closed_week(),
                staff_schedule=WeeklySchedule.closed_week(),
                slot_interval=resolve_slot_interval(salon.booking_slot_interval),
                is_active=staff.is_active,
                accepts_bookings=staff.accepts_bookings,
                is_public=staff.is_public,
            )

        # Only rows that can matter for this date
        salon_breaks = salon.breaks.filter(is_active=True)
        salon_vacations = salon.vacations.filter(is_active=True, start_date__lte=day, end_date__gte=day)
        staff_breaks = staff.breaks.filter(is_active=True)
        staff_vacations = staff.vacations.filter(is_active=True, start_date__lte=day, end_date__gte=day)

        bookings = Booking.objects.filter(
            staff=staff, date=day, status__in=BLOCKING_STATUSES
        ).order_by("start_time")

        return StaffDaySnapshot(
            staff_id=staff.pk,
            day=day,
            salon_schedule=salon_schedule(salon),
            staff_schedule=staff_schedule(staff),
            salon_exclusions=_exclusions(salon_breaks, salon_vacations, Scope.SALON),
            staff_exclusions=_exclusions(staff_breaks, staff_vacations, Scope.STAFF),
            bookings=tuple(to_booking_record(b) for b in bookings),
            slot_interval=resolve_slot_interval(salon.booking_slot_interval),
            is_active=staff.is_active,
            accepts_bookings=staff.accepts_bookings,
            is_public=staff.is_public,
        )


def service_requests(staff_id, service_ids) -> list:
    """
    ServiceRequests for the given ids, in order; a repeated id is booked twice.
    Every id must be an active service the staff member performs.
    """
    ids = list(service_ids)
    services = {
        s.id: s
        for s in Service.objects.filter(id__in=ids, active=True, staff_members__id=staff_id)
    }
    unknown = [i for i in ids if i not in services]
    if unknown:
        raise InvalidReference(f"Staff {staff_id} does not perform service(s) {unknown}.")
    return [ServiceRequest(i, services[i].duration_minutes) for i in ids]
