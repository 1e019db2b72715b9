"""
conflict_checker.py
-------------------
Overlap detection against existing bookings.

Intervals are half-open [start, end): a booking ending at 11:00 does not
conflict with one starting at 11:00.

Only bookings whose status still occupies staff time are considered
(pending, confirmed, in_progress). Completed, cancelled and no-show
bookings never block new ones.
"""

from dataclasses import dataclass
from datetime import date

PENDING = "pending"
CONFIRMED = "confirmed"
IN_PROGRESS = "in_progress"
COMPLETED = "completed"
CANCELLED = "cancelled"
NO_SHOW = "no_show"

BLOCKING_STATUSES = frozenset({PENDING, CONFIRMED, IN_PROGRESS})


@dataclass(frozen=True)
class BookingRecord:
    staff_id: int
    date: date
    start: int
    end: int
    status: str

    @property
    def is_blocking(self) -> bool:
        return self.status in BLOCKING_STATUSES


def overlaps(start: int, end: int, other_start: int, other_end: int) -> bool:
    """Symmetric half-open overlap: start < other_end AND end > other_start."""
    return start < other_end and end > other_start


def conflicts(candidate_start: int, candidate_end: int, existing_bookings) -> bool:
    for booking in existing_bookings:
        if not booking.is_blocking:
            continue
        if overlaps(candidate_start, candidate_end, booking.start, booking.end):
            return True
    return False
