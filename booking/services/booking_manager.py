"""
booking_manager.py
------------------
Coordinates booking creation and cancellation.

Double-booking prevention:
- The availability answer shown to a client can go stale before they book.
  create_booking therefore re-checks AvailabilityEngine.is_available inside the
  same transaction that inserts the booking, while holding a row lock on the
  staff member (select_for_update). Locking is scoped per staff member; other
  staff and salons are never contended.
- The booking_no_double_booking unique constraint on (staff, date, start_time)
  backs this on databases where the row lock is a no-op (SQLite).
"""

import logging
from datetime import datetime, timedelta

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from ..models import Booking, Staff
from .availability_engine import AvailabilityEngine, ServiceRequest, total_duration
from .conflict_checker import CANCELLED
from .slot_utils import format_hhmm, parse_time, to_minutes

logger = logging.getLogger(__name__)


class BookingManager:
    def __init__(self, engine=None):
        self.availability = engine or AvailabilityEngine()

    def create_booking(self, staff, services, day, start_time, client_name,
                       client_email="", client_phone="", notes="", status="pending"):
        """
        Create a booking after re-checking availability under a staff row lock.

        Args:
            staff: Staff instance performing every requested service
            services: list of Service instances, performed back-to-back
            day: datetime.date
            start_time: datetime.time or "HH:MM"
            client_name / client_email / client_phone / notes: booking details
            status: initial status (pending or confirmed)

        Raises:
            ValueError: if the services can't be booked or the slot is taken.
        """
        services = list(services)
        for service in services:
            if not service.active:
                raise ValueError(f"Service '{service.name}' is not currently available.")
            if service.salon_id != staff.salon_id:
                raise ValueError(f"Service '{service.name}' is not offered by this salon.")

        duration = total_duration(ServiceRequest(s.pk, s.duration_minutes) for s in services)
        if duration == 0:
            raise ValueError("Cannot book services that have no duration.")

        start = parse_time(start_time)
        end_minutes = to_minutes(start) + duration

        try:
            with transaction.atomic():
                # Serialize booking attempts for this staff member
                Staff.objects.select_for_update().get(pk=staff.pk)

                if not self.availability.is_available(staff.pk, day, start, duration):
                    raise ValueError("The selected staff is not available at the requested time.")

                booking = Booking.objects.create(
                    staff=staff,
                    date=day,
                    start_time=start,
                    end_time=parse_time(format_hhmm(end_minutes)),
                    status=status,
                    client_name=client_name,
                    client_email=client_email,
                    client_phone=client_phone,
                    notes=notes,
                )
                booking.services.set(services)
        except IntegrityError:
            logger.warning(
                "Double booking attempt prevented: staff=%s date=%s time=%s",
                staff.pk, day, start.strftime("%H:%M"),
            )
            raise ValueError("This time slot has just been booked. Please select a different time.")

        logger.info("Booked staff %s on %s %s-%s", staff.pk, day, start.strftime("%H:%M"),
                    format_hhmm(end_minutes))
        return booking

    @transaction.atomic
    def cancel_booking(self, booking, cutoff_minutes=None) -> bool:
        """
        Cancel a booking if outside the cutoff window.
        A cancelled booking stops blocking its slot immediately.
        """
        if cutoff_minutes is None:
            cutoff_minutes = settings.BOOKING_CANCEL_CUTOFF_MINUTES

        if booking.status == CANCELLED:
            raise ValueError("This booking is already cancelled.")

        starts_at = timezone.make_aware(
            datetime.combine(booking.date, booking.start_time), timezone.get_current_timezone()
        )
        if starts_at - timezone.now() <= timedelta(minutes=cutoff_minutes):
            raise ValueError(f"Cannot cancel within {cutoff_minutes} minutes of appointment start.")

        booking.status = CANCELLED
        booking.cancellation_time = timezone.now()
        booking.save(update_fields=["status", "cancellation_time"])
        return True
