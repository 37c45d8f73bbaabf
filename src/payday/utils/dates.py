"""Date utilities.

All comparisons happen on plain ``date`` values, so results do not depend on
the wall-clock time or timezone. "Today" comes from an injected clock.
"""

import re
from datetime import date, datetime, timedelta
from typing import Optional, Protocol, Union

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from payday.domain.entities import PaydayFrequency
from payday.domain.errors import ValidationError, invalid_date

DateLike = Union[date, datetime, str]

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


class Clock(Protocol):
    """Source of the current day."""

    def today(self) -> date:
        ...


class SystemClock:
    """Clock backed by the local system date."""

    def today(self) -> date:
        return date.today()


class FixedClock:
    """Clock pinned to a single day."""

    def __init__(self, day: date):
        self.day = day

    def today(self) -> date:
        return self.day


def parse_date(value: DateLike, clock: Optional[Clock] = None) -> date:
    """Parse a value into a date.

    Supports:
    - ``date`` and ``datetime`` values (the date part is used)
    - "YYYY-MM-DD" strings, read literally as year, month and day
    - "today", "yesterday" and "tomorrow"
    - anything else ``dateutil`` understands, e.g. "April 4, 2025"

    Args:
        value: Date value or string
        clock: Clock used for relative words (defaults to the system clock)

    Returns:
        Date object

    Raises:
        ValidationError: If the value is not a valid calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(invalid_date(value))

    text = value.strip().lower()

    match = _ISO_DATE.match(text)
    if match:
        year, month, day = (int(part) for part in match.groups())
        try:
            return date(year, month, day)
        except ValueError as e:
            raise ValidationError(f"{invalid_date(value)}: {e}") from e

    today = (clock or SystemClock()).today()
    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in relative_dates:
        return relative_dates[text]

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValidationError(f"{invalid_date(value)}: {e}") from e


def days_between(start: DateLike, end: DateLike) -> int:
    """Return the signed number of days from ``start`` to ``end``.

    Raises:
        ValidationError: If either value is not a valid calendar date
    """
    return (parse_date(end) - parse_date(start)).days


def is_past(value: DateLike, clock: Clock) -> bool:
    """Return True if the day is strictly before today."""
    return parse_date(value) < clock.today()


def is_within(value: DateLike, days: int, clock: Clock) -> bool:
    """Return True if the day falls between today and ``days`` days from now."""
    delta = days_between(clock.today(), value)
    return 0 <= delta <= days


def next_occurrence(frequency: Union[PaydayFrequency, str], start: DateLike) -> date:
    """Project the next payday after ``start``.

    Monthly steps keep the day of month, clamped to the last day of shorter
    months (Jan 31 -> Feb 28). Unknown frequencies are treated as biweekly.
    """
    start_date = parse_date(start)
    try:
        frequency = PaydayFrequency(frequency)
    except ValueError:
        frequency = PaydayFrequency.BIWEEKLY

    if frequency == PaydayFrequency.WEEKLY:
        return start_date + timedelta(days=7)
    if frequency == PaydayFrequency.MONTHLY:
        return start_date + relativedelta(months=1)
    return start_date + timedelta(days=14)


def one_month_before(value: DateLike) -> date:
    """Return the same day one calendar month earlier, clamped to month end."""
    return parse_date(value) - relativedelta(months=1)


def one_month_after(value: DateLike) -> date:
    """Return the same day one calendar month later, clamped to month end."""
    return parse_date(value) + relativedelta(months=1)


def is_second_occurrence_of_month(value: DateLike) -> bool:
    """Guess whether a payday is the second one of its month.

    This is a heuristic for biweekly pay: any payday after the 15th counts as
    the second. It does not count the actual paydays in the month.
    """
    return parse_date(value).day > 15
