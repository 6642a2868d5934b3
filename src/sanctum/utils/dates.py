"""Calendar arithmetic and date display helpers.

All dates are local calendar dates. ISO strings (YYYY-MM-DD) are the
storage format; ``date`` objects are used for arithmetic.
"""

from datetime import date, datetime, timedelta

MONTH_ABBREVS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]


def parse_local_date(iso_date: str) -> date:
    """Parse an ISO date string (YYYY-MM-DD) into a local date.

    Anything after the date part (e.g. a time component) is ignored.
    """
    year, month, day = (int(part) for part in iso_date[:10].split("-"))
    return date(year, month, day)


def to_local_date(value: date | datetime) -> date:
    """Drop the time component of a datetime, keeping dates as-is."""
    if isinstance(value, datetime):
        return value.date()
    return value


def to_iso_date(value: date | datetime) -> str:
    """Format a date (or datetime) as YYYY-MM-DD."""
    return to_local_date(value).isoformat()


def add_days(value: date | datetime, days: int) -> date:
    """Return the calendar date ``days`` after ``value``."""
    return to_local_date(value) + timedelta(days=days)


def day_of_week(value: date | datetime) -> int:
    """Day-of-week index with Monday as 0 and Sunday as 6."""
    return to_local_date(value).weekday()


def get_monday(value: date | datetime) -> date:
    """Return the Monday of the week containing ``value``."""
    local = to_local_date(value)
    return local - timedelta(days=local.weekday())


def format_week_range(monday_iso: str) -> str:
    """Format a Monday-Sunday week as a compact range.

    "Feb 3 – 9" within a month, "Dec 29 – Jan 4" across months.
    """
    start = parse_local_date(monday_iso)
    end = start + timedelta(days=6)
    start_month = MONTH_ABBREVS[start.month - 1]
    end_month = MONTH_ABBREVS[end.month - 1]

    if start.month == end.month:
        return f"{start_month} {start.day} – {end.day}"
    return f"{start_month} {start.day} – {end_month} {end.day}"


def _format_month_day(value: date, today: date) -> str:
    month = MONTH_ABBREVS[value.month - 1]
    if value.year != today.year:
        return f"{month} {value.day}, {value.year}"
    return f"{month} {value.day}"


def format_relative_date(iso_date: str, now: date | datetime | None = None) -> str:
    """Human-friendly date label.

    Returns "Today", "Yesterday", "Feb 6" for other same-year dates, or
    "Dec 25, 2024" for dates in a different year.
    """
    today = to_local_date(now or datetime.now())
    value = parse_local_date(iso_date)

    if value == today:
        return "Today"
    if value == today - timedelta(days=1):
        return "Yesterday"
    return _format_month_day(value, today)


def format_short_date(iso_date: str, now: date | datetime | None = None) -> str:
    """Month and day, with the year only when it differs from ``now``."""
    today = to_local_date(now or datetime.now())
    return _format_month_day(parse_local_date(iso_date), today)
