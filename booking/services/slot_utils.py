"""
slot_utils.py
-------------
Time-of-day helpers and candidate slot generation.

Times of day are handled internally as integer minutes since midnight so that
"start + duration" and "end - duration" are plain arithmetic. They are turned
back into "HH:MM" strings only at the edges (API responses, logs).

Date normalization (normalize_date) belongs to the calling layer: the engine
itself only accepts datetime.date objects.
"""

import logging
import re
from datetime import date, datetime, time

from django.conf import settings

from ..exceptions import InvalidInput

logger = logging.getLogger(__name__)

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
LOCAL_DATE_RE = re.compile(r"^\d{2}\.\d{2}\.\d{4}$")
HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

MINUTES_PER_DAY = 24 * 60


def _parse_hhmm(value: str) -> time:
    match = HHMM_RE.match((value or "").strip())
    if not match:
        raise InvalidInput(f"Invalid time {value!r}. Use HH:MM.")
    h, m = int(match.group(1)), int(match.group(2))
    if h > 23 or m > 59:
        raise InvalidInput(f"Invalid time {value!r}. Use HH:MM.")
    return time(h, m)


def parse_time(value) -> time:
    """
    Accept a datetime.time or an "HH:MM" string.
    Seconds are not meaningful for bookings; a time carrying them is rejected.
    """
    if isinstance(value, time):
        if value.second or value.microsecond:
            raise InvalidInput(f"Time {value} has sub-minute precision.")
        return value
    if isinstance(value, str):
        return _parse_hhmm(value)
    raise InvalidInput(f"Expected a time of day, got {type(value).__name__}.")


def to_minutes(value) -> int:
    """Minutes since midnight for a time (or "HH:MM")."""
    t = parse_time(value)
    return t.hour * 60 + t.minute


def format_hhmm(minutes: int) -> str:
    """Format minutes since midnight as HH:MM."""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise InvalidInput(f"{minutes} minutes is outside a single day.")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalize_date(value) -> date:
    """
    Caller-side date normalization.

    Accepts a date, 'YYYY-MM-DD' or the locale form 'DD.MM.YYYY'; both strings
    resolve to the same calendar day (and so the same weekday).
    Anything else raises InvalidInput.
    """
    if isinstance(value, datetime):
        raise InvalidInput("Expected a calendar date, got a datetime.")
    if isinstance(value, date):
        return value

    raw = (value or "").strip() if isinstance(value, str) else None
    if not raw:
        raise InvalidInput("Missing date.")

    try:
        if ISO_DATE_RE.match(raw):
            return datetime.strptime(raw, "%Y-%m-%d").date()
        if LOCAL_DATE_RE.match(raw):
            return datetime.strptime(raw, "%d.%m.%Y").date()
    except ValueError:
        pass
    raise InvalidInput(f"Invalid date {raw!r}. Use YYYY-MM-DD or DD.MM.YYYY.")


def get_default_slot_interval() -> int:
    """
    Default step between candidate slots, in minutes.
    A configmgr SystemSetting row DEFAULT_SLOT_INTERVAL overrides the
    BOOKING_DEFAULT_SLOT_INTERVAL setting.
    """
    default = settings.BOOKING_DEFAULT_SLOT_INTERVAL

    from configmgr.models import SystemSetting

    row = SystemSetting.objects.filter(key=SystemSetting.DEFAULT_SLOT_INTERVAL).first()
    if row is None:
        return default
    try:
        value = int(row.value)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", row.key, row.value)
        return default
    if value not in settings.BOOKING_SLOT_INTERVAL_CHOICES:
        logger.warning("Ignoring unsupported %s=%r", row.key, row.value)
        return default
    return value


def resolve_slot_interval(value) -> int:
    """A salon's configured interval, or the default when unset/unrecognized."""
    if value in settings.BOOKING_SLOT_INTERVAL_CHOICES:
        return value
    if value is not None:
        logger.warning("Unsupported slot interval %r, using default", value)
    return get_default_slot_interval()


def generate_candidates(window_start: int, window_end: int, step_minutes: int) -> list:
    """
    Candidate start times from window_start up to window_end, on a fixed step.

    window_end is always the last candidate, even when it is off the step grid:
    a start exactly at the latest legal start time must be bookable.
    Returns an empty list for an inverted window.
    """
    if not isinstance(step_minutes, int) or step_minutes <= 0:
        raise InvalidInput(f"Slot step must be a positive number of minutes, got {step_minutes!r}.")
    if window_start > window_end:
        return []

    slots = list(range(window_start, window_end, step_minutes))
    slots.append(window_end)
    return slots
