"""
schedule_resolver.py
--------------------
Weekly opening/working hours and the effective booking window for one date.

A booking must fall inside the salon's opening hours AND the staff member's
working hours at the same time, so the effective window is the intersection
of the two for the date's weekday.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import NamedTuple, Optional

from ..exceptions import InvalidInput, InvalidReference
from .slot_utils import format_hhmm, to_minutes

logger = logging.getLogger(__name__)

# Monday = 0, matching date.weekday()
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class Window(NamedTuple):
    """Half-open [start, end) in minutes since midnight."""
    start: int
    end: int

    def __str__(self):
        return f"{format_hhmm(self.start)}-{format_hhmm(self.end)}"


@dataclass(frozen=True)
class DaySchedule:
    is_active: bool
    start: int = 0
    end: int = 0

    @classmethod
    def closed(cls):
        return cls(is_active=False)


@dataclass(frozen=True)
class WeeklySchedule:
    """
    Exactly seven DaySchedule entries indexed by weekday (Monday = 0).
    A day that is not listed when building from a mapping is closed.
    """
    days: tuple

    def __post_init__(self):
        if len(self.days) != 7:
            raise InvalidInput(f"A weekly schedule needs 7 days, got {len(self.days)}.")

    def for_date(self, day: date) -> DaySchedule:
        return self.days[day.weekday()]

    @classmethod
    def closed_week(cls):
        return cls(days=(DaySchedule.closed(),) * 7)

    @classmethod
    def from_mapping(cls, mapping, active_key="is_active", start_key="start", end_key="end"):
        """
        Build from the stored JSON form: {"monday": {"is_active": true,
        "start": "09:00", "end": "17:00"}, ...}.

        Salons store {"is_open", "open", "close"} and staff store
        {"is_working", "start", "end"}; the key names are parameters.
        An empty mapping is an error, not a closed week.
        """
        if not mapping:
            raise InvalidReference("Empty weekly schedule.")

        days = []
        for name in WEEKDAYS:
            entry = mapping.get(name)
            if not entry or not entry.get(active_key):
                days.append(DaySchedule.closed())
                continue
            days.append(
                DaySchedule(
                    is_active=True,
                    start=to_minutes(entry.get(start_key)),
                    end=to_minutes(entry.get(end_key)),
                )
            )
        return cls(days=tuple(days))


def effective_window(salon_schedule: WeeklySchedule, staff_schedule: WeeklySchedule,
                     day: date) -> Optional[Window]:
    """
    Intersection of salon and staff hours on `day`, or None when the salon is
    closed, the staff member is off, or the two don't overlap.
    """
    if salon_schedule is None or staff_schedule is None:
        raise InvalidReference("Both salon and staff schedules are required.")

    salon_day = salon_schedule.for_date(day)
    if not salon_day.is_active:
        logger.info("Salon closed on %s (%s)", day, WEEKDAYS[day.weekday()])
        return None

    staff_day = staff_schedule.for_date(day)
    if not staff_day.is_active:
        logger.info("Staff not working on %s (%s)", day, WEEKDAYS[day.weekday()])
        return None

    start = max(salon_day.start, staff_day.start)
    end = min(salon_day.end, staff_day.end)
    if start >= end:
        logger.info("Salon and staff hours don't overlap on %s", day)
        return None
    return Window(start, end)
