"""Tests for administrator user management and invitations."""

from __future__ import annotations

import importlib
import re

from coretrack.application.use_cases.activity import list_activities, record_activity
from coretrack.infrastructure.repositories import UserRepository

PASSWORD = "Str0ng!Pass"


def test_invitation_creates_no_user_until_accepted(client, admin_headers, outbox, db_session) -> None:
    response = client.post(
        "/users/invite",
        json={"email": "a@b.com", "role": "user", "full_name": "Invited Person"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["email_sent"] is True
    assert body["invitation"]["email"] == "a@b.com"
    assert UserRepository(db_session).get_by_email("a@b.com") is None

    [record] = list_activities(db_session, entity_type="user")
    assert (record.action, record.entity_type, record.entity_id) == ("invited", "user", "a@b.com")

    pending = client.get("/users/invitations", headers=admin_headers)
    assert [item["email"] for item in pending.json()] == ["a@b.com"]

    token = re.search(r"token=([A-Za-z0-9_\-]+)", outbox[0].html_content).group(1)
    accepted = client.post(
        "/users/invitations/accept", json={"token": token, "password": PASSWORD}
    )
    assert accepted.status_code == 201
    assert accepted.json()["full_name"] == "Invited Person"
    assert accepted.json()["email_verified"] is True

    again = client.post(
        "/users/invitations/accept", json={"token": token, "password": PASSWORD}
    )
    assert again.status_code == 404
    assert client.get("/users/invitations", headers=admin_headers).json() == []

    joined = list_activities(db_session, action="joined")
    assert len(joined) == 1


def test_invitation_email_failure_still_creates_invitation(client, admin_headers, monkeypatch) -> None:
    invite_module = importlib.import_module("coretrack.application.use_cases.users.invite_user")

    monkeypatch.setattr(invite_module, "send_invitation_email", lambda *args, **kwargs: False)

    response = client.post("/users/invite", json={"email": "c@d.com"}, headers=admin_headers)

    assert response.status_code == 201
    assert response.json()["email_sent"] is False


def test_inviting_an_existing_user_conflicts(client, admin_headers, member) -> None:
    response = client.post("/users/invite", json={"email": member.email}, headers=admin_headers)

    assert response.status_code == 409


def test_user_management_requires_admin(client, member_headers, member) -> None:
    assert client.get("/users/", headers=member_headers).status_code == 403
    assert client.post(
        "/users/invite", json={"email": "x@example.com"}, headers=member_headers
    ).status_code == 403
    assert client.get("/users/").status_code == 401


def test_role_changes(client, admin, admin_headers, member, db_session) -> None:
    own = client.put(f"/users/{admin.id}/role", json={"role": "user"}, headers=admin_headers)
    assert own.status_code == 403

    promoted = client.put(f"/users/{member.id}/role", json={"role": "admin"}, headers=admin_headers)
    assert promoted.status_code == 200
    assert promoted.json()["role"]["alias"] == "admin"

    [record] = list_activities(db_session, action="role_changed")
    assert record.details["previous_role"] == "user"
    assert record.details["new_role"] == "admin"

    inbox = client.get("/notifications/", headers={"Authorization": _bearer_for(client, member)})
    assert [item["title"] for item in inbox.json()] == ["Your role was updated"]


def test_update_and_delete_user(client, admin, admin_headers, member, db_session) -> None:
    updated = client.patch(
        f"/users/{member.id}", json={"full_name": "Renamed Member"}, headers=admin_headers
    )
    assert updated.status_code == 200
    assert updated.json()["full_name"] == "Renamed Member"

    assert client.delete(f"/users/{admin.id}", headers=admin_headers).status_code == 403
    assert client.delete(f"/users/{member.id}", headers=admin_headers).status_code == 204
    assert client.get(f"/users/{member.id}", headers=admin_headers).status_code == 404

    actions = [record.action for record in list_activities(db_session, entity_type="user")]
    assert actions == ["deleted", "updated"]


def test_activity_of_deleted_user_renders_as_someone(client, admin_headers, member, db_session) -> None:
    record_activity(db_session, member, "created", "project", 1, {"title": "Apollo"})
    client.delete(f"/users/{member.id}", headers=admin_headers)

    feed = client.get("/activity/", params={"entity_type": "project"}, headers=admin_headers)
    assert [item["description"] for item in feed.json()] == ['Someone created project "Apollo"']


def _bearer_for(client, user) -> str:
    response = client.post(
        "/auth/token", data={"username": user.email, "password": PASSWORD}
    )
    return f"Bearer {response.json()['access_token']}"
