"""
exclusions.py
-------------
Breaks and vacations that remove availability on a given date.

- A Break blocks part of a day. It recurs every week on one weekday
  (Weekly) or is pinned to one calendar date (OnDate).
- A Vacation blocks whole days over an inclusive date range.

Salon-level and staff-level exclusions are unioned: salon breaks and
vacations apply to every staff member of the salon.

Inactive entries are skipped. Inconsistent entries (start >= end, reversed
date range) are ignored with a warning: they can never make a slot more
available, so dropping them is safe.
"""

import enum
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Union

from .schedule_resolver import Window
from .slot_utils import format_hhmm

logger = logging.getLogger(__name__)


class Scope(enum.Enum):
    SALON = "salon"
    STAFF = "staff"


@dataclass(frozen=True)
class Weekly:
    weekday: int  # Monday = 0

    def applies_to(self, day: date) -> bool:
        return day.weekday() == self.weekday


@dataclass(frozen=True)
class OnDate:
    on: date

    def applies_to(self, day: date) -> bool:
        return day == self.on


Recurrence = Union[Weekly, OnDate]


@dataclass(frozen=True)
class Break:
    scope: Scope
    recurrence: Recurrence
    start: int
    end: int
    active: bool = True

    def is_consistent(self) -> bool:
        return self.start < self.end


@dataclass(frozen=True)
class Vacation:
    scope: Scope
    start_date: date
    end_date: date
    active: bool = True

    def is_consistent(self) -> bool:
        return self.start_date <= self.end_date

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass
class Exclusions:
    """What blocks booking on one date."""
    windows: list = field(default_factory=list)
    whole_day: bool = False


def collect_exclusions(day: date, salon_exclusions=(), staff_exclusions=()) -> Exclusions:
    """
    Gather blocked break windows for `day`, and whether any vacation
    (salon or staff) blocks the entire day.
    """
    result = Exclusions()

    for item in list(salon_exclusions) + list(staff_exclusions):
        if not item.active:
            continue

        if isinstance(item, Vacation):
            if not item.is_consistent():
                logger.warning("Ignoring %s vacation with reversed range %s..%s",
                               item.scope.value, item.start_date, item.end_date)
                continue
            if item.covers(day):
                result.whole_day = True

        elif isinstance(item, Break):
            if not item.is_consistent():
                logger.warning("Ignoring %s break %s-%s (start is not before end)",
                               item.scope.value, format_hhmm(item.start), format_hhmm(item.end))
                continue
            if item.recurrence.applies_to(day):
                result.windows.append(Window(item.start, item.end))

        else:
            raise TypeError(f"Unknown exclusion type {type(item).__name__}")

    result.windows.sort()
    return result
