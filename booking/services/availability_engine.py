"""
availability_engine.py
----------------------
Computes bookable start times for one staff member on one date by checking
candidate slots against:
1) the effective window (salon hours intersected with staff hours),
2) breaks and vacations at salon and staff level, and
3) existing bookings that still occupy staff time (double-booking prevention).

The engine is a pure computation over a StaffDaySnapshot fetched fresh per
call. It keeps no state between calls and caches nothing, so it is safe to
share between concurrent requests. Closing the check-then-book race is the
job of BookingManager, which re-runs is_available under a row lock.

Multi-service bookings are performed back-to-back by one staff member, so
they are handled by the same code path with the summed duration.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Tuple

from ..exceptions import InvalidInput
from .conflict_checker import conflicts, overlaps
from .exclusions import Exclusions, collect_exclusions
from .schedule_resolver import Window, WeeklySchedule, effective_window
from .slot_utils import format_hhmm, generate_candidates, to_minutes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceRequest:
    """One requested service. Only the duration matters to the engine."""
    service_id: int
    duration_minutes: int


@dataclass(frozen=True)
class StaffDaySnapshot:
    """Read-only view of everything the engine needs for one staff member and date."""
    staff_id: int
    day: date
    salon_schedule: WeeklySchedule
    staff_schedule: WeeklySchedule
    salon_exclusions: tuple = ()
    staff_exclusions: tuple = ()
    bookings: tuple = ()
    slot_interval: int = 30
    is_active: bool = True
    accepts_bookings: bool = True
    is_public: bool = True

    @property
    def is_bookable(self) -> bool:
        return self.is_active and self.accepts_bookings

    def window(self) -> Optional[Window]:
        return effective_window(self.salon_schedule, self.staff_schedule, self.day)

    def exclusions(self) -> Exclusions:
        return collect_exclusions(self.day, self.salon_exclusions, self.staff_exclusions)


# -------------------------
# Input checks
# -------------------------
def check_date(day) -> date:
    if isinstance(day, datetime) or not isinstance(day, date):
        raise InvalidInput(f"Expected a calendar date, got {day!r}.")
    return day


def check_duration(duration_minutes) -> int:
    if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int):
        raise InvalidInput(f"Duration must be whole minutes, got {duration_minutes!r}.")
    if duration_minutes < 0:
        raise InvalidInput(f"Duration cannot be negative, got {duration_minutes}.")
    return duration_minutes


def total_duration(services) -> int:
    """Sum of durations for services executed back-to-back by one staff member."""
    services = list(services or [])
    if not services:
        raise InvalidInput("At least one service is required.")
    return sum(check_duration(s.duration_minutes) for s in services)


# -------------------------
# Pure checks over a snapshot
# -------------------------
def is_blocked(start: int, end: int, exclusions: Exclusions, bookings) -> bool:
    """Blocked by a vacation, a break window, or a blocking booking."""
    if exclusions.whole_day:
        return True
    for window in exclusions.windows:
        if overlaps(start, end, window.start, window.end):
            return True
    return conflicts(start, end, bookings)


def is_free(snapshot: StaffDaySnapshot, start: int, duration_minutes: int) -> bool:
    if not snapshot.is_bookable:
        return False

    window = snapshot.window()
    if window is None:
        return False

    end = start + duration_minutes
    if start < window.start or end > window.end:
        return False

    return not is_blocked(start, end, snapshot.exclusions(), snapshot.bookings)


def candidate_starts(snapshot: StaffDaySnapshot, duration_minutes: int,
                     step_minutes: int) -> List[int]:
    """Grid starts in [window start, latest legal start], before filtering."""
    if not snapshot.is_bookable:
        logger.info("Staff %s is not accepting bookings", snapshot.staff_id)
        return []

    window = snapshot.window()
    if window is None:
        return []

    latest_start = window.end - duration_minutes
    if latest_start < window.start:
        logger.info(
            "No slots for staff %s on %s: %s min does not fit in %s",
            snapshot.staff_id, snapshot.day, duration_minutes, window,
        )
        return []

    return generate_candidates(window.start, latest_start, step_minutes)


def free_starts(snapshot: StaffDaySnapshot, duration_minutes: int,
                step_minutes: int) -> List[int]:
    candidates = candidate_starts(snapshot, duration_minutes, step_minutes)
    if not candidates:
        return []

    exclusions = snapshot.exclusions()
    available = [
        start for start in candidates
        if not is_blocked(start, start + duration_minutes, exclusions, snapshot.bookings)
    ]
    logger.debug(
        "Staff %s on %s: %d candidate(s), %d available",
        snapshot.staff_id, snapshot.day, len(candidates), len(available),
    )
    return available


# -------------------------
# Orchestrator
# -------------------------
class AvailabilityEngine:
    """
    Entry points:
    - is_available(staff_id, day, at, duration_minutes) -> bool
    - available_slots(staff_id, day, total_duration_minutes, step_minutes=None) -> ["HH:MM", ...]
    - available_slots_with_step(...) -> (["HH:MM", ...], step used)
    - available_slots_for_services(staff_id, day, services, step_minutes=None)
    - slot_board(staff_id, day, duration_minutes, step_minutes=None)

    `source` loads a StaffDaySnapshot for (staff_id, day); by default the
    Django ORM is used. step_minutes defaults to the salon's slot interval.
    """

    def __init__(self, source=None):
        if source is None:
            from .snapshots import OrmSnapshotSource
            source = OrmSnapshotSource()
        self.source = source

    def _snapshot(self, staff_id, day) -> StaffDaySnapshot:
        return self.source.load(staff_id, check_date(day))

    def _step(self, snapshot: StaffDaySnapshot, step_minutes) -> int:
        step = snapshot.slot_interval if step_minutes is None else step_minutes
        if isinstance(step, bool) or not isinstance(step, int) or step <= 0:
            raise InvalidInput(f"Slot step must be a positive number of minutes, got {step!r}.")
        return step

    def is_available(self, staff_id, day, at, duration_minutes: int) -> bool:
        start = to_minutes(at)
        duration_minutes = check_duration(duration_minutes)
        snapshot = self._snapshot(staff_id, day)
        return is_free(snapshot, start, duration_minutes)

    def available_slots(self, staff_id, day, total_duration_minutes: int,
                        step_minutes: Optional[int] = None) -> List[str]:
        slots, _ = self.available_slots_with_step(staff_id, day, total_duration_minutes, step_minutes)
        return slots

    def available_slots_with_step(self, staff_id, day, total_duration_minutes: int,
                                  step_minutes: Optional[int] = None) -> Tuple[List[str], int]:
        """Like available_slots, also returning the step that was used."""
        total_duration_minutes = check_duration(total_duration_minutes)
        snapshot = self._snapshot(staff_id, day)
        step = self._step(snapshot, step_minutes)
        slots = [format_hhmm(m) for m in free_starts(snapshot, total_duration_minutes, step)]
        return slots, step

    def available_slots_for_services(self, staff_id, day, services,
                                     step_minutes: Optional[int] = None) -> List[str]:
        return self.available_slots(staff_id, day, total_duration(services), step_minutes)

    def slot_board(self, staff_id, day, duration_minutes: int,
                   step_minutes: Optional[int] = None) -> List[dict]:
        """Every candidate start with an `available` flag."""
        duration_minutes = check_duration(duration_minutes)
        snapshot = self._snapshot(staff_id, day)
        step = self._step(snapshot, step_minutes)

        candidates = candidate_starts(snapshot, duration_minutes, step)
        free = set(free_starts(snapshot, duration_minutes, step)) if candidates else set()
        return [{"time": format_hhmm(m), "available": m in free} for m in candidates]
