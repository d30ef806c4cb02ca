from datetime import datetime, timedelta

from fittrack.core.clock import utcnow

BASE = "/api/v1"
DAY0 = datetime(2024, 3, 1, 8, 0, 0)


def create_goal(client, payload):
    response = client.post(f"{BASE}/goals", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_dashboard_summary(client, goal_payload):
    soon = create_goal(client, goal_payload(title="Soon", target_date=(utcnow() + timedelta(days=3)).isoformat()))
    later = create_goal(client, goal_payload(title="Later", target_value=10))
    done = create_goal(client, goal_payload(title="Done", target_value=5))
    client.patch(f"{BASE}/goals/{later['id']}", json={"current_value": 6})
    for day, value in enumerate([1, 2, 5]):
        client.post(f"{BASE}/progress", json={
            "goal_id": done["id"],
            "value": value,
            "date": (DAY0 + timedelta(days=day)).isoformat(),
        })

    summary = client.get(f"{BASE}/dashboard/summary").json()

    assert summary["goals"]["total_goals"] == 3
    assert summary["goals"]["completed_goals"] == 1
    assert summary["goals"]["active_goals"] == 2
    assert summary["current_streak"] == 3
    assert summary["longest_streak"] == 3
    assert summary["motivational_message"] == "You're on a roll!"
    assert [goal["id"] for goal in summary["upcoming_goals"]] == [soon["id"]]
    # Active goals only, highest progress first
    assert len(summary["reminders"]) == 2
    assert "Later" in summary["reminders"][0]
    assert "Only 3 days left" in summary["reminders"][1]


def test_empty_dashboard(client):
    summary = client.get(f"{BASE}/dashboard/summary").json()
    assert summary["goals"]["total_goals"] == 0
    assert summary["current_streak"] == 0
    assert summary["upcoming_goals"] == []
    assert summary["reminders"] == []


def test_feed_shows_public_goals_of_other_users(client, act_as, users, goal_payload):
    create_goal(client, goal_payload(title="My public goal", privacy="public"))

    act_as(users.other)
    shared = create_goal(client, goal_payload(title="Bench 100 kg", privacy="public", target_value=100))
    client.patch(f"{BASE}/goals/{shared['id']}", json={"current_value": 50})
    create_goal(client, goal_payload(title="Secret goal", privacy="private"))

    act_as(users.owner)
    feed = client.get(f"{BASE}/feed").json()

    assert [item["title"] for item in feed] == ["Bench 100 kg"]
    assert feed[0]["user_name"] == "Sam Lifter"
    assert feed[0]["progress_percentage"] == 50
    assert feed[0]["message"].startswith("I'm 50% towards my goal of Bench 100 kg")


def test_feed_paging(client, act_as, users, goal_payload):
    act_as(users.other)
    for i in range(3):
        create_goal(client, goal_payload(title=f"Shared {i}", privacy="public"))

    act_as(users.owner)
    assert len(client.get(f"{BASE}/feed", params={"limit": 2}).json()) == 2
    assert len(client.get(f"{BASE}/feed", params={"skip": 2, "limit": 2}).json()) == 1
