from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Tuple, Union

BUSINESS_DAYS_PER_WEEK = 5

DateLike = Union[date, datetime]


class TimestampParseError(ValueError):
    """Raised when a millisecond epoch string cannot be parsed."""


def _as_date(value: DateLike) -> date:
    return value.date() if isinstance(value, datetime) else value


def _weekday_offset(day: date) -> int:
    # ISO weekday: Monday=1 .. Sunday=7. Days since Monday, with Saturday and
    # Sunday clamped to 5 so a weekend counts as "after Friday".
    return min(day.isoweekday() - 1, BUSINESS_DAYS_PER_WEEK)


def business_days_between(start: DateLike, end: DateLike) -> int:
    """
    Count Monday-Friday calendar days in [start, end).

    Both instants are aligned to the Monday of their ISO week; whole weeks
    between the two Mondays are worth 5 days each, and the offsets of start
    and end inside their own weeks are added back (weekend offsets clamp to
    5). Time of day is ignored. Same day gives 0; end before start gives a
    negative count.

    Examples: Mon -> Fri of the same week is 4, Fri -> next Mon is 1,
    Sat -> next Mon is 0.
    """
    start_day = _as_date(start)
    end_day = _as_date(end)

    start_monday = start_day - timedelta(days=start_day.isoweekday() - 1)
    end_monday = end_day - timedelta(days=end_day.isoweekday() - 1)
    weeks = (end_monday - start_monday).days // 7

    return (
        weeks * BUSINESS_DAYS_PER_WEEK
        + _weekday_offset(end_day)
        - _weekday_offset(start_day)
    )


def parse_epoch_millis(value: Union[str, int], tz: tzinfo = timezone.utc) -> datetime:
    """Parse the API's epoch-millisecond timestamps ("1640818767000")."""
    try:
        millis = int(value)
    except (TypeError, ValueError) as exc:
        raise TimestampParseError(f"invalid epoch milliseconds: {value!r}") from exc
    return datetime.fromtimestamp(millis / 1000, tz=tz)


def status_interval(
    since_ms: Union[str, int], by_minute: int, tz: tzinfo = timezone.utc
) -> Tuple[datetime, datetime]:
    """Start/end instants of a status period from its raw since/by_minute pair."""
    start = parse_epoch_millis(since_ms, tz=tz)
    return start, start + timedelta(minutes=by_minute)


def workday_duration(
    since_ms: Union[str, int], by_minute: int, tz: tzinfo = timezone.utc
) -> int:
    start, end = status_interval(since_ms, by_minute, tz=tz)
    return business_days_between(start, end)


__all__ = [
    "BUSINESS_DAYS_PER_WEEK",
    "TimestampParseError",
    "business_days_between",
    "parse_epoch_millis",
    "status_interval",
    "workday_duration",
]
