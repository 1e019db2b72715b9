# booking/models.py
#
# Purpose:
# - Storage for salons, staff, services, bookings and salon-level exclusions.
#   The availability engine never queries these directly; booking/services/snapshots.py
#   turns them into read-only snapshots per request.
#
# Design highlights:
# - Salon / Staff working hours are JSON keyed by weekday name:
#     salon: {"monday": {"is_open": true, "open": "09:00", "close": "18:00"}, ...}
#     staff: {"monday": {"is_working": true, "start": "09:00", "end": "17:00"}, ...}
# - Booking stores its own end_time (start + summed service durations).
# - Only pending/confirmed/in_progress bookings occupy staff time. A conditional
#   unique constraint on (staff, date, start_time) for those statuses is the
#   database-level guard against double booking.
# - Breaks recur weekly (day_of_week) or are pinned to one date; vacations block
#   whole days over an inclusive date range. Staff-level versions live in staff/models.py.
#

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q

from .services.conflict_checker import (
    BLOCKING_STATUSES,
    CANCELLED,
    COMPLETED,
    CONFIRMED,
    IN_PROGRESS,
    NO_SHOW,
    PENDING,
)

WEEKDAY_CHOICES = [
    (0, "Monday"),
    (1, "Tuesday"),
    (2, "Wednesday"),
    (3, "Thursday"),
    (4, "Friday"),
    (5, "Saturday"),
    (6, "Sunday"),
]


# -------------------------
# Salon
# -------------------------
class Salon(models.Model):
    """
    A salon with weekly opening hours and a configurable booking step.
    booking_slot_interval: one of 15/30/45/60; empty falls back to the configured default.
    """
    name = models.CharField(max_length=200)
    working_hours = models.JSONField(default=dict, blank=True)
    booking_slot_interval = models.PositiveSmallIntegerField(
        choices=[(m, f"{m} min") for m in settings.BOOKING_SLOT_INTERVAL_CHOICES],
        default=30,
        null=True,
        blank=True,
    )

    def __str__(self):
        return self.name


# -------------------------
# Service catalog item
# -------------------------
class Service(models.Model):
    """
    A service offered by a salon.
    duration_minutes may be 0 for add-ons with no time cost of their own.
    """
    salon = models.ForeignKey(Salon, on_delete=models.CASCADE, related_name="services")
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    duration_minutes = models.PositiveIntegerField(default=30)
    price = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        validators=[MinValueValidator(0)],
    )
    active = models.BooleanField(default=True)

    def __str__(self):
        return f"{self.name} ({self.duration_minutes} min)"


# -------------------------
# Staff member / Stylist
# -------------------------
class Staff(models.Model):
    """
    A stylist. Inactive staff, or staff that don't accept bookings, have no availability.
    """
    salon = models.ForeignKey(Salon, on_delete=models.CASCADE, related_name="staff_members")
    name = models.CharField(max_length=200)
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=100, blank=True)
    working_hours = models.JSONField(default=dict, blank=True)
    services = models.ManyToManyField(Service, related_name="staff_members", blank=True)
    is_active = models.BooleanField(default=True)
    is_public = models.BooleanField(default=True)
    accepts_bookings = models.BooleanField(default=True)

    def __str__(self):
        return self.name


# -------------------------
# Booking record
# -------------------------
class Booking(models.Model):
    """
    Appointment for one staff member, covering one or more services back-to-back.
    """
    STATUS_CHOICES = [
        (PENDING, "Pending"),
        (CONFIRMED, "Confirmed"),
        (IN_PROGRESS, "In progress"),
        (COMPLETED, "Completed"),
        (CANCELLED, "Cancelled"),
        (NO_SHOW, "No show"),
    ]

    staff = models.ForeignKey(Staff, on_delete=models.CASCADE, related_name="bookings")
    services = models.ManyToManyField(Service, related_name="bookings")
    date = models.DateField()
    start_time = models.TimeField()
    end_time = models.TimeField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)
    client_name = models.CharField(max_length=200)
    client_email = models.EmailField(blank=True)
    client_phone = models.CharField(max_length=20, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    cancellation_time = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["date", "start_time"]
        indexes = [models.Index(fields=["staff", "date"], name="booking_staff_date_idx")]
        constraints = [
            models.UniqueConstraint(
                fields=["staff", "date", "start_time"],
                condition=Q(status__in=sorted(BLOCKING_STATUSES)),
                name="booking_no_double_booking",
            ),
        ]

    def __str__(self):
        return f"{self.client_name} with {self.staff} on {self.date} {self.start_time:%H:%M}"


# -------------------------
# Exclusions (shared fields)
# -------------------------
class BreakBase(models.Model):
    """
    Partial-day break. Set exactly one of day_of_week (recurs weekly) or date (one day).
    """
    day_of_week = models.PositiveSmallIntegerField(choices=WEEKDAY_CHOICES, null=True, blank=True)
    date = models.DateField(null=True, blank=True)
    start_time = models.TimeField()
    end_time = models.TimeField()
    reason = models.CharField(max_length=200, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        abstract = True

    def clean(self):
        if (self.day_of_week is None) == (self.date is None):
            raise ValidationError("Set either a weekday or a date for the break, not both.")
        if self.start_time and self.end_time and self.start_time >= self.end_time:
            raise ValidationError("Break must start before it ends.")


class VacationBase(models.Model):
    """Whole-day block over an inclusive date range."""
    start_date = models.DateField()
    end_date = models.DateField()
    reason = models.CharField(max_length=200, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        abstract = True

    def clean(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValidationError("Vacation cannot end before it starts.")


class SalonBreak(BreakBase):
    salon = models.ForeignKey(Salon, on_delete=models.CASCADE, related_name="breaks")

    def __str__(self):
        return f"{self.salon} break {self.start_time:%H:%M}-{self.end_time:%H:%M}"


class SalonVacation(VacationBase):
    salon = models.ForeignKey(Salon, on_delete=models.CASCADE, related_name="vacations")

    def __str__(self):
        return f"{self.salon} closed {self.start_date}..{self.end_date}"
