"""Tests for projects, tasks, goals and expenses."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from coretrack.application.use_cases.activity import list_activities


def _create_project(client, headers, **overrides):
    payload = {"title": "Apollo", "budget": 1000}
    payload.update(overrides)
    response = client.post("/projects/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_project_crud_and_scoping(client, member_headers, admin_headers, headers_for, make_user) -> None:
    project = _create_project(client, member_headers, description="Moonshot")
    outsider_headers = headers_for(make_user("outsider@example.com"))

    assert client.get(f"/projects/{project['id']}", headers=outsider_headers).status_code == 403
    assert client.get("/projects/", headers=outsider_headers).json() == []
    assert len(client.get("/projects/", headers=admin_headers).json()) == 1

    updated = client.patch(
        f"/projects/{project['id']}",
        json={"title": "Apollo 2", "status": "on-hold"},
        headers=member_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["status"] == "on-hold"
    assert updated.json()["description"] == "Moonshot"

    filtered = client.get("/projects/", params={"status": "active"}, headers=member_headers)
    assert filtered.json() == []
    searched = client.get("/projects/", params={"search": "apollo"}, headers=member_headers)
    assert [item["title"] for item in searched.json()] == ["Apollo 2"]

    assert client.delete(f"/projects/{project['id']}", headers=member_headers).status_code == 204
    assert client.get(f"/projects/{project['id']}", headers=member_headers).status_code == 404


def test_project_validation(client, member_headers) -> None:
    assert client.post("/projects/", json={"title": ""}, headers=member_headers).status_code == 422
    assert client.post(
        "/projects/", json={"title": "Bad", "status": "archived"}, headers=member_headers
    ).status_code == 422
    assert client.get("/projects/999", headers=member_headers).status_code == 404


def test_project_update_activity_reports_rename(client, member_headers, db_session) -> None:
    project = _create_project(client, member_headers)
    client.patch(f"/projects/{project['id']}", json={"title": "Artemis"}, headers=member_headers)

    feed = client.get("/activity/", params={"entity_type": "project"}, headers=member_headers)
    assert feed.json()[0]["description"] == (
        'Max Member updated project "Artemis" - renamed from "Apollo" to "Artemis"'
    )


def test_task_assignment_notifies_the_assignee(client, member, member_headers, make_user, headers_for) -> None:
    assignee = make_user("assignee@example.com", full_name="Ann Assignee")
    assignee_headers = headers_for(assignee)
    project = _create_project(client, member_headers)

    response = client.post(
        "/tasks/",
        json={"project_id": project["id"], "title": "Write docs", "assigned_to": assignee.id},
        headers=member_headers,
    )
    assert response.status_code == 201
    task = response.json()

    inbox = client.get("/notifications/", headers=assignee_headers).json()
    assert [item["category"] for item in inbox] == ["task"]
    assert inbox[0]["metadata"]["task_id"] == task["id"]

    visible = client.get("/tasks/", headers=assignee_headers).json()
    assert [item["id"] for item in visible] == [task["id"]]
    assert client.get(f"/tasks/{task['id']}", headers=assignee_headers).status_code == 200


def test_task_status_transitions_are_recorded(client, member_headers, db_session) -> None:
    project = _create_project(client, member_headers)
    task = client.post(
        "/tasks/", json={"project_id": project["id"], "title": "Launch"}, headers=member_headers
    ).json()

    client.patch(f"/tasks/{task['id']}", json={"status": "in_progress"}, headers=member_headers)
    client.patch(f"/tasks/{task['id']}", json={"status": "completed"}, headers=member_headers)

    descriptions = [
        item["description"]
        for item in client.get(
            "/activity/", params={"entity_type": "task"}, headers=member_headers
        ).json()
    ]
    assert descriptions == [
        'Max Member completed task "Launch"',
        'Max Member moved task "Launch" from To Do to In Progress',
        'Max Member created task "Launch"',
    ]

    done = client.get("/tasks/", params={"status": "completed"}, headers=member_headers).json()
    assert [item["id"] for item in done] == [task["id"]]


def test_goal_progress_is_clamped_and_completion_notifies(client, member_headers, db_session) -> None:
    goal = client.post(
        "/goals/", json={"title": "Sign clients", "target_value": 10}, headers=member_headers
    ).json()

    response = client.post(
        f"/goals/{goal['id']}/progress", json={"mode": "set", "value": 4}, headers=member_headers
    )
    assert response.json()["current_value"] == 4
    assert response.json()["progress_percentage"] == 40

    response = client.post(
        f"/goals/{goal['id']}/progress",
        json={"mode": "increment", "value": 25},
        headers=member_headers,
    )
    assert response.json()["current_value"] == 10

    response = client.post(
        f"/goals/{goal['id']}/progress",
        json={"mode": "increment", "value": -50},
        headers=member_headers,
    )
    assert response.json()["current_value"] == 0

    [completed] = list_activities(db_session, entity_type="goal", action="completed")
    assert completed.entity_id == str(goal["id"])
    progress = list_activities(db_session, action="progress_updated")
    assert progress[-1].details["previous_value"] == 0
    assert progress[-1].details["new_progress_percentage"] == 40

    inbox = client.get("/notifications/", headers=member_headers).json()
    assert [(item["category"], item["type"]) for item in inbox] == [("goal", "success")]

    bad_mode = client.post(
        f"/goals/{goal['id']}/progress", json={"mode": "double", "value": 1}, headers=member_headers
    )
    assert bad_mode.status_code == 422


def test_lowering_goal_target_below_progress_completes_it(client, member_headers, db_session) -> None:
    goal = client.post(
        "/goals/",
        json={"title": "Ship features", "target_value": 100, "current_value": 60},
        headers=member_headers,
    ).json()

    response = client.patch(
        f"/goals/{goal['id']}", json={"target_value": 50}, headers=member_headers
    )

    assert response.status_code == 200
    assert response.json()["current_value"] == 50
    [completed] = list_activities(db_session, entity_type="goal", action="completed")
    assert completed.entity_id == str(goal["id"])
    inbox = client.get("/notifications/", headers=member_headers).json()
    assert [item["title"] for item in inbox] == ["Goal reached"]

    client.patch(f"/goals/{goal['id']}", json={"title": "Ship more"}, headers=member_headers)
    assert len(list_activities(db_session, entity_type="goal", action="completed")) == 1


def test_expense_budget_warnings(client, member_headers) -> None:
    project = _create_project(client, member_headers, budget=1000)

    first = client.post(
        "/expenses/",
        json={"project_id": project["id"], "amount": 600, "description": "Hosting"},
        headers=member_headers,
    )
    assert first.status_code == 201
    assert first.json()["budget"]["warning"] is None

    preview = client.post(
        "/expenses/budget-check",
        json={"project_id": project["id"], "amount": 500},
        headers=member_headers,
    )
    assert "over budget by $100" in preview.json()["warning"]
    assert preview.json()["display_percentage"] == 100.0

    second = client.post(
        "/expenses/",
        json={"project_id": project["id"], "amount": 500, "description": "Servers"},
        headers=member_headers,
    )
    body = second.json()
    assert body["budget"]["over_budget"] is True
    assert body["budget"]["percentage"] == pytest.approx(110.0)
    assert body["expense"]["description"] == "Servers"

    inbox = client.get("/notifications/", headers=member_headers).json()
    assert [(item["category"], item["type"]) for item in inbox] == [("expense", "warning")]

    detail = client.get(f"/projects/{project['id']}", headers=member_headers).json()
    assert detail["total_spent"] == 1100
    assert detail["remaining_budget"] == -100
    assert detail["budget_percentage"] == 110.0
    assert detail["budget_display_percentage"] == 100.0

    edited = client.patch(
        f"/expenses/{body['expense']['id']}", json={"amount": 100}, headers=member_headers
    )
    assert edited.json()["budget"]["total"] == 700
    assert edited.json()["budget"]["warning"] is None


def test_expense_filters(client, member_headers) -> None:
    project = _create_project(client, member_headers)
    today = date.today()
    for amount, day, text in ((10, today - timedelta(days=10), "Coffee"), (20, today, "Paper")):
        client.post(
            "/expenses/",
            json={
                "project_id": project["id"],
                "amount": amount,
                "description": text,
                "expense_date": day.isoformat(),
            },
            headers=member_headers,
        )

    recent = client.get(
        "/expenses/",
        params={"date_from": (today - timedelta(days=1)).isoformat()},
        headers=member_headers,
    ).json()
    searched = client.get("/expenses/", params={"search": "coff"}, headers=member_headers).json()

    assert [item["description"] for item in recent] == ["Paper"]
    assert [item["description"] for item in searched] == ["Coffee"]
