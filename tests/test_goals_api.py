from datetime import datetime, timedelta

from fittrack.core.clock import utcnow
from fittrack.models.progress import Progress

BASE = "/api/v1"
DAY0 = datetime(2024, 3, 1, 8, 0, 0)


def create_goal(client, payload):
    response = client.post(f"{BASE}/goals", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def log_progress(client, goal_id, value, day):
    response = client.post(f"{BASE}/progress", json={
        "goal_id": goal_id,
        "value": value,
        "date": (DAY0 + timedelta(days=day)).isoformat(),
    })
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_goals_require_authentication(anonymous_client):
    response = anonymous_client.get(f"{BASE}/goals")
    assert response.status_code == 401


def test_create_and_read_goal(client, goal_payload, users):
    goal = create_goal(client, goal_payload())

    assert goal["title"] == "Run 100 km"
    assert goal["user_id"] == str(users.owner)
    assert goal["current_value"] == 0
    assert goal["status"] == "active"
    assert goal["progress_percentage"] == 0
    assert goal["privacy"] == "private"

    response = client.get(f"{BASE}/goals/{goal['id']}")
    assert response.status_code == 200
    assert response.json()["id"] == goal["id"]


def test_create_goal_validation_errors(client, goal_payload):
    response = client.post(f"{BASE}/goals", json=goal_payload(title="", target_value=-1))

    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Validation error"
    fields = {error["field"] for error in body["errors"]}
    assert fields == {"title", "target_value"}
    assert client.get(f"{BASE}/goals").json() == []


def test_create_goal_rejects_unknown_category(client, goal_payload):
    response = client.post(f"{BASE}/goals", json=goal_payload(category="juggling"))
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "category"


def test_other_users_goal_is_not_found(client, act_as, users, goal_payload):
    goal = create_goal(client, goal_payload())

    act_as(users.other)
    assert client.get(f"{BASE}/goals/{goal['id']}").status_code == 404
    assert client.patch(f"{BASE}/goals/{goal['id']}", json={"title": "Mine now"}).status_code == 404
    assert client.delete(f"{BASE}/goals/{goal['id']}").status_code == 404
    assert client.get(f"{BASE}/goals").json() == []


def test_list_goals_filter_and_sort(client, goal_payload):
    run = create_goal(client, goal_payload(title="Run", category="endurance", target_value=100))
    lift = create_goal(client, goal_payload(title="Lift", category="strength", target_value=10))
    client.patch(f"{BASE}/goals/{run['id']}", json={"current_value": 20})
    client.patch(f"{BASE}/goals/{lift['id']}", json={"current_value": 8})

    by_progress = client.get(f"{BASE}/goals", params={"sort": "progress"}).json()
    assert [goal["title"] for goal in by_progress] == ["Lift", "Run"]
    assert [goal["progress_percentage"] for goal in by_progress] == [80, 20]

    strength = client.get(f"{BASE}/goals", params={"category": "strength"}).json()
    assert [goal["title"] for goal in strength] == ["Lift"]


def test_patch_goal(client, goal_payload):
    goal = create_goal(client, goal_payload())

    response = client.patch(f"{BASE}/goals/{goal['id']}", json={"title": "Run 120 km", "target_value": 120})
    assert response.status_code == 200
    assert response.json()["title"] == "Run 120 km"
    assert response.json()["target_value"] == 120
    assert response.json()["unit"] == "km"

    assert client.patch(f"{BASE}/goals/{goal['id']}", json={}).status_code == 400


def test_reaching_target_completes_goal(client, goal_payload):
    goal = create_goal(client, goal_payload())

    response = client.patch(f"{BASE}/goals/{goal['id']}", json={"current_value": 100})
    assert response.json()["status"] == "completed"
    assert response.json()["progress_percentage"] == 100


def test_paused_status_is_kept(client, goal_payload):
    goal = create_goal(client, goal_payload())

    response = client.patch(f"{BASE}/goals/{goal['id']}", json={"status": "paused", "current_value": 100})
    assert response.json()["status"] == "paused"


def test_goal_past_target_date_is_abandoned(client, goal_payload):
    goal = create_goal(client, goal_payload(target_date=(utcnow() - timedelta(days=2)).isoformat()))
    assert goal["status"] == "abandoned"


def test_replace_goal(client, goal_payload):
    goal = create_goal(client, goal_payload())

    response = client.put(f"{BASE}/goals/{goal['id']}", json=goal_payload(title="Swim 20 km", unit="km", target_value=20))
    assert response.status_code == 200
    assert response.json()["title"] == "Swim 20 km"
    assert response.json()["target_value"] == 20


def test_delete_goal_removes_progress(client, goal_payload, count_rows):
    goal = create_goal(client, goal_payload())
    entry = log_progress(client, goal["id"], 10, 0)
    log_progress(client, goal["id"], 20, 1)

    assert client.delete(f"{BASE}/goals/{goal['id']}").status_code == 204

    assert client.get(f"{BASE}/goals/{goal['id']}").status_code == 404
    assert client.get(f"{BASE}/progress/{entry['id']}").status_code == 404
    assert count_rows(Progress) == 0


def test_upcoming_goals(client, goal_payload):
    create_goal(client, goal_payload(title="Soon", target_date=(utcnow() + timedelta(days=3)).isoformat()))
    create_goal(client, goal_payload(title="Later", target_date=(utcnow() + timedelta(days=20)).isoformat()))

    upcoming = client.get(f"{BASE}/goals/upcoming").json()
    assert [goal["title"] for goal in upcoming] == ["Soon"]

    wider = client.get(f"{BASE}/goals/upcoming", params={"days": 30}).json()
    assert {goal["title"] for goal in wider} == {"Soon", "Later"}


def test_goal_insight(client, goal_payload):
    goal = create_goal(client, goal_payload(title="Lose 10 kg"))
    client.patch(f"{BASE}/goals/{goal['id']}", json={"current_value": 45})

    insight = client.get(f"{BASE}/goals/{goal['id']}/insight").json()

    assert insight["progress_percentage"] == 45
    assert insight["days_remaining"] == 30
    assert "45%" in insight["insight"]
    assert "30 days left" in insight["insight"]
    assert "Lose 10 kg" in insight["reminder"]


def test_analytics_without_entries(client, goal_payload):
    goal = create_goal(client, goal_payload())

    analytics = client.get(f"{BASE}/goals/{goal['id']}/analytics").json()

    assert analytics["trend"] == "stable"
    assert analytics["current_streak"] == 0
    assert analytics["motivational_message"] == "Start your journey today!"
    assert analytics["aggregate"] is None
    assert analytics["projection"] is None
    assert analytics["projection_error"] == "Insufficient data for projection"


def test_analytics_with_entries(client, goal_payload):
    goal = create_goal(client, goal_payload())
    log_progress(client, goal["id"], 10, 0)
    log_progress(client, goal["id"], 20, 2)

    analytics = client.get(f"{BASE}/goals/{goal['id']}/analytics", params={"project_days": 2}).json()

    assert analytics["trend"] == "increasing"
    assert analytics["current_streak"] == 1
    assert analytics["aggregate"]["total"] == 30
    assert analytics["aggregate"]["count"] == 2
    assert [round(p["value"], 6) for p in analytics["projection"]] == [25, 30]
    assert analytics["projection_error"] is None
    assert analytics["progress_percentage"] == 20


def test_interpolate(client, goal_payload):
    goal = create_goal(client, goal_payload())
    log_progress(client, goal["id"], 10, 0)
    log_progress(client, goal["id"], 20, 2)

    response = client.get(
        f"{BASE}/goals/{goal['id']}/interpolate",
        params={"at": (DAY0 + timedelta(days=1)).isoformat()},
    )
    assert response.status_code == 200
    assert response.json()["value"] == 15

    outside = client.get(
        f"{BASE}/goals/{goal['id']}/interpolate",
        params={"at": (DAY0 + timedelta(days=5)).isoformat()},
    )
    assert outside.status_code == 400


def test_goal_reminder_notification(client, goal_payload):
    goal = create_goal(client, goal_payload(title="Swim"))

    response = client.post(f"{BASE}/goals/{goal['id']}/reminder")
    assert response.status_code == 201
    assert response.json()["type"] == "goal_reminder"
    assert "Swim" in response.json()["message"]

    notifications = client.get(f"{BASE}/notification").json()
    assert [n["id"] for n in notifications] == [response.json()["id"]]


def test_patch_goal_rejects_null_for_required_fields(client, goal_payload):
    goal = create_goal(client, goal_payload())

    for field in ("title", "target_date", "target_value", "current_value", "unit", "category", "status", "privacy"):
        response = client.patch(f"{BASE}/goals/{goal['id']}", json={field: None})
        assert response.status_code == 400, field
        assert response.json()["errors"][0]["field"] == field

    unchanged = client.get(f"{BASE}/goals/{goal['id']}").json()
    assert unchanged["title"] == "Run 100 km"
    assert unchanged["target_value"] == 100


def test_patch_goal_null_description_clears_it(client, goal_payload):
    goal = create_goal(client, goal_payload())

    response = client.patch(f"{BASE}/goals/{goal['id']}", json={"description": None})
    assert response.status_code == 200
    assert response.json()["description"] == ""


def test_delete_goal_unlinks_notifications(client, goal_payload):
    goal = create_goal(client, goal_payload())
    reminder = client.post(f"{BASE}/goals/{goal['id']}/reminder").json()

    assert client.delete(f"{BASE}/goals/{goal['id']}").status_code == 204

    notifications = client.get(f"{BASE}/notification").json()
    assert [n["id"] for n in notifications] == [reminder["id"]]
    assert notifications[0]["goal_id"] is None
