# fittrack/utils/progress.py
"""
Analytics over progress entries.

Entries are any objects exposing ``value`` and ``date`` (and ``updated_at``,
``goal_id``, ``user_id`` where noted). Inputs are copied before sorting so
callers keep their original ordering.
"""
from datetime import date, datetime, timedelta
from typing import Iterable, List, Sequence, Tuple

from fittrack.core.exceptions import InsufficientDataError, InvalidInputError
from fittrack.schemas.analytics import ProgressAggregate, ProgressTrend, ProjectedProgress

SECONDS_PER_DAY = 24 * 60 * 60


def _by_date(entries: Iterable) -> List:
    return sorted(entries, key=lambda entry: entry.date)


def _days_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / SECONDS_PER_DAY


def _calendar_days(entries: Iterable) -> List[date]:
    return sorted({entry.date.date() for entry in entries})


def analyze_trend(entries: Sequence) -> ProgressTrend:
    """Majority direction of the last three values (by date)"""
    if len(entries) < 2:
        return ProgressTrend.stable

    recent = [entry.value for entry in _by_date(entries)[-3:]]
    differences = [later - earlier for earlier, later in zip(recent, recent[1:])]
    increasing = sum(1 for diff in differences if diff > 0)
    decreasing = sum(1 for diff in differences if diff < 0)

    if increasing > decreasing:
        return ProgressTrend.increasing
    if decreasing > increasing:
        return ProgressTrend.decreasing
    return ProgressTrend.stable


def calculate_streak(entries: Sequence) -> int:
    """Consecutive calendar days with an entry, walking back from the most recent one.

    Several entries on the same day count once.
    """
    days = _calendar_days(entries)
    if not days:
        return 0

    days.reverse()
    streak = 1
    previous = days[0]
    for day in days[1:]:
        if day != previous - timedelta(days=1):
            break
        streak += 1
        previous = day
    return streak


def longest_streak(entries: Sequence) -> int:
    days = _calendar_days(entries)
    if not days:
        return 0

    longest = current = 1
    for earlier, later in zip(days, days[1:]):
        if later - earlier == timedelta(days=1):
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


def aggregate(entries: Sequence) -> ProgressAggregate:
    if not entries:
        raise InvalidInputError("No progress entries provided")

    values = [entry.value for entry in entries]
    total = sum(values)
    return ProgressAggregate(
        goal_id=getattr(entries[0], "goal_id", None),
        total=total,
        average=total / len(values),
        min=min(values),
        max=max(values),
        count=len(values),
        last_updated=max(getattr(entry, "updated_at", None) or entry.date for entry in entries),
    )


def interpolate(start, end, at: datetime) -> float:
    """Linear estimate of the value at ``at`` between two entries"""
    span = (end.date - start.date).total_seconds()
    if span == 0:
        raise InvalidInputError("Cannot interpolate between entries with the same date")
    fraction = (at - start.date).total_seconds() / span
    return start.value + fraction * (end.value - start.value)


def bracketing_entries(entries: Sequence, at: datetime) -> Tuple:
    """The consecutive pair of entries whose dates enclose ``at``"""
    ordered = _by_date(entries)
    for earlier, later in zip(ordered, ordered[1:]):
        if earlier.date <= at <= later.date and earlier.date < later.date:
            return earlier, later
    raise InsufficientDataError("No progress entries on both sides of the requested date")


def average_change_per_day(entries: Sequence) -> float:
    """Arithmetic mean of the per-day rate of each consecutive pair.

    Pairs logged at the same instant carry no rate and are ignored.
    """
    ordered = _by_date(entries)
    rates = []
    for earlier, later in zip(ordered, ordered[1:]):
        elapsed = _days_between(earlier.date, later.date)
        if elapsed == 0:
            continue
        rates.append((later.value - earlier.value) / elapsed)

    if not rates:
        raise InsufficientDataError("Insufficient data for projection")
    return sum(rates) / len(rates)


def project_future(entries: Sequence, days: int) -> List[ProjectedProgress]:
    if len(entries) < 2:
        raise InsufficientDataError("Insufficient data for projection")
    if days < 0:
        raise InvalidInputError("Number of days to project must not be negative")

    last = _by_date(entries)[-1]
    rate = average_change_per_day(entries)

    return [
        ProjectedProgress(
            id=f"projected-{i}",
            goal_id=getattr(last, "goal_id", None),
            user_id=getattr(last, "user_id", None),
            value=last.value + rate * i,
            date=last.date + timedelta(days=i),
        )
        for i in range(1, days + 1)
    ]


def sort_entries(entries: Iterable, sort_by: str = "date", order: str = "asc") -> List:
    if sort_by not in ("date", "value"):
        raise InvalidInputError(f"Cannot sort progress entries by {sort_by!r}")
    if order not in ("asc", "desc"):
        raise InvalidInputError(f"Unknown sort order {order!r}")
    return sorted(entries, key=lambda entry: getattr(entry, sort_by), reverse=order == "desc")


def motivational_message(streak: int) -> str:
    if streak == 0:
        return "Start your journey today!"
    if streak < 3:
        return "Great start! Keep it up!"
    if streak < 7:
        return "You're on a roll!"
    if streak < 14:
        return "Impressive dedication!"
    if streak < 30:
        return "You're unstoppable!"
    return "You're a true champion!"
