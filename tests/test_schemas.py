from datetime import datetime, timezone, timedelta

import pytest
from pydantic import ValidationError

from fittrack.models.goal import GoalCategory, GoalPrivacy
from fittrack.schemas.goal import GoalCreate, GoalUpdate
from fittrack.schemas.progress import ProgressCreate
from fittrack.schemas.user import UserUpdate


def test_goal_defaults():
    goal = GoalCreate(title="Plank 5 min", target_date="2030-01-01T00:00:00", target_value=5)
    assert goal.unit == "units"
    assert goal.description == ""
    assert goal.category == GoalCategory.custom
    assert goal.privacy == GoalPrivacy.private


def test_aware_dates_are_stored_as_naive_utc():
    local = datetime(2030, 1, 1, 9, 0, tzinfo=timezone(timedelta(hours=2)))
    goal = GoalCreate(title="Plank", target_date=local, target_value=5)
    assert goal.target_date == datetime(2030, 1, 1, 7, 0)
    assert goal.target_date.tzinfo is None


@pytest.mark.parametrize("field,value", [
    ("title", ""),
    ("title", "x" * 101),
    ("description", "x" * 501),
    ("target_value", -1),
    ("target_value", 1_000_001),
    ("unit", ""),
    ("category", "juggling"),
    ("privacy", "everyone"),
    ("target_date", "next tuesday"),
])
def test_goal_field_bounds(field, value):
    payload = {"title": "Plank", "target_date": "2030-01-01T00:00:00", "target_value": 5, field: value}
    with pytest.raises(ValidationError):
        GoalCreate(**payload)


def test_goal_update_only_sets_given_fields():
    update = GoalUpdate(title="New title")
    assert update.model_dump(exclude_unset=True) == {"title": "New title"}


def test_progress_bounds():
    with pytest.raises(ValidationError):
        ProgressCreate(goal_id="not-a-uuid", value=1, date="2024-01-01T00:00:00")
    with pytest.raises(ValidationError):
        ProgressCreate(goal_id="6f1c2b4e-8a1d-4c1e-9b7a-2f3d4e5a6b7c", value=1, date="2024-01-01", notes="x" * 501)


def test_user_update_avatar_url():
    assert UserUpdate(avatar_url="").avatar_url == ""
    assert UserUpdate(avatar_url="https://example.com/me.png").avatar_url == "https://example.com/me.png"
    with pytest.raises(ValidationError):
        UserUpdate(avatar_url="ftp:/nope")


def test_update_schemas_reject_null_for_required_fields():
    with pytest.raises(ValidationError):
        GoalUpdate(target_value=None)
    with pytest.raises(ValidationError):
        UserUpdate(email=None)
    assert GoalUpdate(description=None).description == ""
    assert UserUpdate(bio=None).model_dump(exclude_unset=True) == {"bio": None}
