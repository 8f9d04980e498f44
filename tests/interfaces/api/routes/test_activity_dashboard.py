"""Tests for the activity feed and the dashboard summary."""

from __future__ import annotations

from datetime import date, timedelta

from coretrack.application.use_cases.activity import record_activity


def test_non_admins_only_see_their_own_activity(client, member, admin, member_headers, admin_headers, db_session) -> None:
    record_activity(db_session, member, "created", "project", 1, {"title": "Mine"})
    record_activity(db_session, admin, "created", "project", 2, {"title": "Theirs"})

    own = client.get("/activity/", params={"actor_id": admin.id}, headers=member_headers).json()
    everything = client.get("/activity/", headers=admin_headers).json()
    filtered = client.get("/activity/", params={"actor_id": member.id}, headers=admin_headers).json()

    assert [item["entity_id"] for item in own] == ["1"]
    assert own[0]["actor"]["full_name"] == "Max Member"
    assert {item["entity_id"] for item in everything} == {"1", "2"}
    assert [item["entity_id"] for item in filtered] == ["1"]


def test_activity_search_and_stats(client, member, member_headers, db_session) -> None:
    record_activity(db_session, member, "created", "goal", 3, {"title": "Grow revenue"})
    record_activity(db_session, member, "update", "goal", 3, {"title": "Grow revenue"})
    record_activity(db_session, member, "2fa_enabled", "security", member.id)

    found = client.get("/activity/", params={"search": "two-factor"}, headers=member_headers).json()
    assert [item["description"] for item in found] == [
        "Max Member enabled two-factor authentication"
    ]

    stats = client.get("/activity/stats", headers=member_headers).json()
    assert stats["total"] == 3
    assert stats["by_entity"] == {"goal": 2, "security": 1}
    assert stats["by_action"] == {"created": 1, "updated": 1, "2fa_enabled": 1}


def test_dashboard_summary(client, member_headers, admin_headers) -> None:
    project = client.post(
        "/projects/", json={"title": "Apollo", "budget": 200}, headers=member_headers
    ).json()
    yesterday = (date.today() - timedelta(days=1)).isoformat()
    tasks = [
        {"title": "Done", "status": "completed"},
        {"title": "Late", "due_date": yesterday},
        {"title": "Open"},
        {"title": "Also open"},
    ]
    for task in tasks:
        client.post("/tasks/", json={"project_id": project["id"], **task}, headers=member_headers)
    client.post(
        "/expenses/",
        json={"project_id": project["id"], "amount": 250, "description": "Rocket"},
        headers=member_headers,
    )
    client.post("/projects/", json={"title": "Admin only"}, headers=admin_headers)

    summary = client.get("/dashboard/", headers=member_headers).json()

    assert summary["project_count"] == 1
    assert summary["task_count"] == 4
    assert summary["completed_task_count"] == 1
    assert summary["overdue_task_count"] == 1
    assert summary["total_spent"] == 250
    assert summary["total_budget"] == 200
    assert summary["completion_percentage"] == 25
    assert summary["budget_percentage"] == 125
    assert len(summary["recent_activities"]) == 5
    assert summary["recent_activities"][0]["description"] == (
        'Max Member added expense "Rocket" for $250'
    )

    admin_summary = client.get("/dashboard/", headers=admin_headers).json()
    assert admin_summary["project_count"] == 2
