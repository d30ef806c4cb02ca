# fittrack/utils/goals.py
"""
Goal progress, status and text helpers.

Every function here is pure: goals are read through their attributes
(``title``, ``current_value``, ``target_value``, ``target_date``, ``status``,
``category``) and input sequences are never reordered in place.
"""
import math
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from fittrack.core.clock import utcnow
from fittrack.models.goal import GoalCategory, GoalStatus
from fittrack.schemas.analytics import GoalSummary

SECONDS_PER_DAY = 24 * 60 * 60


def progress_percentage(current: float, target: float) -> int:
    """Whole percentage of ``target`` reached, clamped to 0..100.

    A non-positive target has no meaningful percentage and yields 0.
    """
    if target is None or target <= 0:
        return 0
    pct = round((current or 0) / target * 100)
    return max(0, min(int(pct), 100))


def derive_status(
    current: float,
    target: float,
    target_date: datetime,
    now: Optional[datetime] = None,
) -> GoalStatus:
    # Completion is checked before the deadline
    if current >= target:
        return GoalStatus.completed
    now = now or utcnow()
    if now > target_date:
        return GoalStatus.abandoned
    return GoalStatus.active


def effective_status(goal, now: Optional[datetime] = None) -> GoalStatus:
    """Status a goal should be shown with: paused is kept, anything else is derived"""
    if goal.status == GoalStatus.paused:
        return GoalStatus.paused
    return derive_status(goal.current_value, goal.target_value, goal.target_date, now)


def goal_percentage(goal) -> int:
    return progress_percentage(goal.current_value, goal.target_value)


def sort_by_progress_descending(goals: Iterable) -> List:
    # sorted() is stable, so goals with equal percentages keep their input order
    return sorted(goals, key=goal_percentage, reverse=True)


def filter_by_category(goals: Iterable, category: GoalCategory) -> List:
    return [goal for goal in goals if goal.category == category]


def upcoming_goals(
    goals: Iterable,
    threshold_days: int,
    now: Optional[datetime] = None,
) -> List:
    """Active goals whose target date falls in ``(now, now + threshold_days]``"""
    now = now or utcnow()
    threshold = now + timedelta(days=threshold_days)
    return [
        goal for goal in goals
        if effective_status(goal, now) == GoalStatus.active
        and now < goal.target_date <= threshold
    ]


def days_remaining(target_date: datetime, now: Optional[datetime] = None) -> int:
    now = now or utcnow()
    return math.ceil((target_date - now).total_seconds() / SECONDS_PER_DAY)


def generate_insight(goal, now: Optional[datetime] = None) -> str:
    pct = goal_percentage(goal)
    insight = f"You're {pct}% towards your goal of {goal.title}. "

    if pct >= 90:
        insight += "You're almost there! Keep pushing!"
    elif pct >= 50:
        insight += "Great progress! You're over halfway there."
    elif pct >= 25:
        insight += "You're making steady progress. Keep it up!"
    else:
        insight += "You've taken the first steps. Stay committed to your goal!"

    days_left = days_remaining(goal.target_date, now)
    if days_left <= 0:
        insight += " Your target date has passed."
    else:
        insight += f" You have {days_left} days left to reach your target."
    return insight


def reminder_text(goal, now: Optional[datetime] = None) -> str:
    days_left = days_remaining(goal.target_date, now)
    pct = goal_percentage(goal)

    if days_left <= 0:
        return (
            f'Your goal "{goal.title}" has reached its target date. '
            "Update your progress or adjust the goal if needed."
        )
    if days_left <= 7:
        return (
            f'Only {days_left} days left to reach your goal "{goal.title}". '
            f"You're {pct}% there. Keep pushing!"
        )
    if pct >= 90:
        return (
            f'You\'re so close to achieving your goal "{goal.title}"! '
            "Just a little more effort to reach 100%!"
        )
    if pct <= 10 and days_left <= 30:
        return (
            f'Your goal "{goal.title}" needs attention. '
            f"You're only {pct}% complete with {days_left} days left."
        )
    return f"Remember your goal: {goal.title}. You're {pct}% there with {days_left} days to go."


def goal_summary(goals: Sequence, now: Optional[datetime] = None) -> GoalSummary:
    now = now or utcnow()
    summary = GoalSummary(total_goals=len(goals))
    for goal in goals:
        status = effective_status(goal, now)
        if status == GoalStatus.completed:
            summary.completed_goals += 1
        elif status == GoalStatus.abandoned:
            summary.abandoned_goals += 1
        elif status == GoalStatus.paused:
            summary.paused_goals += 1
        else:
            summary.active_goals += 1
    return summary


def shareable_message(goal) -> str:
    return (
        f"I'm {goal_percentage(goal)}% towards my goal of {goal.title} on FitTrack! "
        "Join me on my fitness journey!"
    )
