# barbercrm/core.py
"""Calendar-day handling for appointments.

Appointments are booked on a calendar day of the shop, which runs on a single
fixed UTC offset. A day is stored as the UTC instant of its local midnight, so
every stored ``date`` of one business day is the same instant and range
filters can compare instants directly.
"""

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Union

from barbercrm.config import shop_settings
from barbercrm.errors import ValidationError

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

DateInput = Union[str, date, datetime]


def business_tz() -> timezone:
    offset = timedelta(hours=shop_settings["utc_offset_hours"])
    return timezone(offset, shop_settings["timezone"])


def parse_business_day(value: DateInput) -> date:
    """Return the calendar day a caller meant.

    Strings are read as written. ``datetime`` objects are instants (naive
    ones are UTC, like the stored values) and are read in the business zone.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(business_tz()).date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Invalid date")

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError("Invalid date") from None


def normalize_date(value: DateInput) -> datetime:
    """Local midnight of the given day as a naive UTC instant (06:00 for UTC-6)."""
    day = parse_business_day(value)
    local_midnight = datetime.combine(day, time.min, tzinfo=business_tz())
    return local_midnight.astimezone(timezone.utc).replace(tzinfo=None)


def range_end(value: DateInput) -> datetime:
    """Inclusive upper bound covering the whole local day.

    For UTC-6 this is hour 29 of the UTC day, i.e. 05:00 UTC on the next day.
    """
    return normalize_date(value) + timedelta(hours=23)


def validate_time(value: str) -> str:
    if not isinstance(value, str) or not TIME_PATTERN.match(value):
        raise ValidationError("Time must use the HH:MM format")
    return value
