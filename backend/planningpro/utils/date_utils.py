"""
Date helpers for the calendar views (French locale, weeks start on Monday).

Formatting helpers never raise: invalid input renders as a placeholder.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

INVALID_DATE_LABEL = "Date invalide"

DAY_NAMES = ["lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche"]
DAY_NAMES_SHORT = ["lun.", "mar.", "mer.", "jeu.", "ven.", "sam.", "dim."]
MONTH_NAMES = [
    "janvier",
    "février",
    "mars",
    "avril",
    "mai",
    "juin",
    "juillet",
    "août",
    "septembre",
    "octobre",
    "novembre",
    "décembre",
]
MONTH_NAMES_SHORT = [
    "janv.",
    "févr.",
    "mars",
    "avr.",
    "mai",
    "juin",
    "juil.",
    "août",
    "sept.",
    "oct.",
    "nov.",
    "déc.",
]


def is_valid_date(value: Any) -> bool:
    return isinstance(value, date)


def _as_date(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def _localize(fmt: str, value: date) -> str:
    # strftime names depend on the process locale; substitute French ones
    return (
        fmt.replace("%A", DAY_NAMES[value.weekday()])
        .replace("%a", DAY_NAMES_SHORT[value.weekday()])
        .replace("%B", MONTH_NAMES[value.month - 1])
        .replace("%b", MONTH_NAMES_SHORT[value.month - 1])
    )


def format_date(value: Any, fmt: str = "%d/%m/%Y") -> str:
    if not is_valid_date(value):
        logger.warning(f"format_date: invalid date received: {value!r}")
        return INVALID_DATE_LABEL
    return value.strftime(_localize(fmt, value))


def format_time(value: Any) -> str:
    if not isinstance(value, datetime):
        return "--:--"
    return value.strftime("%H:%M")


def format_datetime(value: Any) -> str:
    if not isinstance(value, datetime):
        return INVALID_DATE_LABEL
    return value.strftime("%d/%m/%Y %H:%M")


def format_date_long(value: Any) -> str:
    if not is_valid_date(value):
        return INVALID_DATE_LABEL
    return format_date(value, "%A %d %B %Y")


def get_week_days(value: date) -> List[date]:
    """The seven days, Monday to Sunday, of the week containing value."""
    day = _as_date(value)
    monday = day - timedelta(days=day.weekday())
    return [monday + timedelta(days=i) for i in range(7)]


def get_month_days(value: date) -> List[date]:
    day = _as_date(value)
    first = day.replace(day=1)
    days = []
    current = first
    while current.month == first.month:
        days.append(current)
        current += timedelta(days=1)
    return days


def get_calendar_days(value: date) -> List[date]:
    """Month grid: from the Monday on/before the 1st to the Sunday on/after the last day."""
    month_days = get_month_days(value)
    start = month_days[0] - timedelta(days=month_days[0].weekday())
    end = month_days[-1] + timedelta(days=6 - month_days[-1].weekday())
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def is_same_day(first: Any, second: Any) -> bool:
    if not is_valid_date(first) or not is_valid_date(second):
        return False
    return _as_date(first) == _as_date(second)


def is_same_month(first: Any, second: Any) -> bool:
    if not is_valid_date(first) or not is_valid_date(second):
        return False
    return (first.year, first.month) == (second.year, second.month)


def is_today(value: Any, now: Optional[datetime] = None) -> bool:
    if not is_valid_date(value):
        return False
    today = (now or datetime.now()).date()
    return _as_date(value) == today


def add_months(value: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month's length."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    last_day = get_month_days(date(year, month, 1))[-1].day
    return value.replace(year=year, month=month, day=min(value.day, last_day))


def create_time_slots(start_hour: int = 0, end_hour: int = 24, interval: int = 30) -> List[str]:
    slots = []
    for hour in range(start_hour, end_hour):
        for minute in range(0, 60, interval):
            slots.append(f"{hour:02d}:{minute:02d}")
    return slots


def parse_time_slot(time_slot: str, day: date) -> datetime:
    """
    Combine an "HH:MM" slot label with a calendar day.

    Raises:
        ValueError: If the slot label is malformed
    """
    hours, minutes = (int(part) for part in time_slot.split(":"))
    return datetime.combine(_as_date(day), time(hours, minutes))


def get_time_from_date(value: Any) -> str:
    if not isinstance(value, datetime):
        return "00:00"
    return f"{value.hour:02d}:{value.minute:02d}"


def parse_iso_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string (trailing 'Z' accepted); None when unparsable."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
