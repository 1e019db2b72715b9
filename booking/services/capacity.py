"""
capacity.py
-----------
Month overview of how booked-up a staff member is, day by day.

For each day:
- total_slots: grid starts before filtering (the day's bookable grid)
- free_slots: starts that survive breaks, vacations and bookings
- occupied_slots / percentage: the rest, as a count and a rounded percentage
- status: full (>= 100%), busy (>= 70%), available (> 0%), empty (0%),
  or closed when the day has no grid at all.
"""

import calendar
import re
from datetime import date, timedelta

from ..exceptions import InvalidInput
from .availability_engine import candidate_starts, check_duration, free_starts

MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")

BUSY_PERCENTAGE = 70


def parse_month(value: str):
    """'YYYY-MM' -> (first day, last day)."""
    match = MONTH_RE.match((value or "").strip())
    if not match:
        raise InvalidInput("Invalid month format. Use YYYY-MM.")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise InvalidInput("Invalid month format. Use YYYY-MM.")
    _, last_day = calendar.monthrange(year, month)
    return date(year, month, 1), date(year, month, last_day)


def capacity_status(total: int, percentage: int) -> str:
    if total == 0:
        return "closed"
    if percentage >= 100:
        return "full"
    if percentage >= BUSY_PERCENTAGE:
        return "busy"
    if percentage > 0:
        return "available"
    return "empty"


def day_capacity(snapshot, duration_minutes: int, step_minutes=None) -> dict:
    step = snapshot.slot_interval if step_minutes is None else step_minutes
    total = len(candidate_starts(snapshot, duration_minutes, step))
    free = len(free_starts(snapshot, duration_minutes, step)) if total else 0
    occupied = total - free
    percentage = round(occupied / total * 100) if total else 0
    return {
        "date": snapshot.day.isoformat(),
        "total_slots": total,
        "occupied_slots": occupied,
        "free_slots": free,
        "percentage": percentage,
        "status": capacity_status(total, percentage),
    }


def month_capacity(engine, staff_id, month: str, duration_minutes: int = 30, step_minutes=None):
    """Capacity rows for every day of `month` ('YYYY-MM')."""
    first, last = parse_month(month)
    duration_minutes = check_duration(duration_minutes)
    rows = []
    current = first
    while current <= last:
        snapshot = engine.source.load(staff_id, current)
        rows.append(day_capacity(snapshot, duration_minutes, step_minutes))
        current += timedelta(days=1)
    return {"month": f"{first:%Y-%m}", "staff": staff_id, "capacity": rows}
