"""Tests for sign up, sign in and token revocation."""

from __future__ import annotations

import re

from coretrack.infrastructure.repositories import ActivityRepository

PASSWORD = "Str0ng!Pass"
_TOKEN_PATTERN = re.compile(r"token=([A-Za-z0-9._\-]+)")


def _token_from(mail) -> str:
    match = _TOKEN_PATTERN.search(mail.html_content)
    assert match, mail.html_content
    return match.group(1)


def _login(client, email: str, password: str = PASSWORD):
    return client.post(
        "/auth/token",
        data={"username": email, "password": password},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )


def test_sign_up_then_login(client, outbox, db_session) -> None:
    response = client.post(
        "/auth/signup",
        json={"email": "new@example.com", "password": PASSWORD, "full_name": "New Person"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["role"]["alias"] == "user"
    assert body["email_verified"] is False
    assert [mail.recipient for mail in outbox] == ["new@example.com"]

    token_response = _login(client, "new@example.com")
    assert token_response.status_code == 200
    payload = token_response.json()
    assert payload["token_type"] == "bearer"
    assert payload["role"] == "user"

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {payload['access_token']}"})
    assert me.status_code == 200
    assert me.json()["last_login"] is not None
    assert me.headers["X-Refreshed-Token"]

    [record] = ActivityRepository(db_session).list()
    assert (record.entity_type, record.action) == ("auth", "signed_up")


def test_sign_up_rejects_weak_and_duplicate_accounts(client, member) -> None:
    weak = client.post("/auth/signup", json={"email": "weak@example.com", "password": "password"})
    duplicate = client.post(
        "/auth/signup", json={"email": member.email, "password": PASSWORD}
    )

    assert weak.status_code == 400
    assert "too weak" in weak.json()["detail"]
    assert duplicate.status_code == 409


def test_login_failures(client, member, admin, admin_headers) -> None:
    assert _login(client, member.email, "Wr0ng!Pass").status_code == 401
    assert _login(client, "ghost@example.com").status_code == 401

    deactivate = client.patch(
        f"/users/{member.id}", json={"is_active": False}, headers=admin_headers
    )
    assert deactivate.status_code == 200
    assert _login(client, member.email).status_code == 403


def test_email_verification_flow(client, outbox) -> None:
    client.post("/auth/signup", json={"email": "verify@example.com", "password": PASSWORD})
    token = _token_from(outbox[-1])

    verified = client.post("/auth/verify-email", json={"token": token})
    assert verified.status_code == 200
    assert verified.json()["email_verified"] is True

    resend = client.post("/auth/resend-verification", json={"email": "verify@example.com"})
    assert resend.status_code == 202
    assert len(outbox) == 1

    bad = client.post("/auth/verify-email", json={"token": "not-a-token"})
    assert bad.status_code == 400


def test_password_reset_flow(client, member, outbox, headers_for) -> None:
    old_headers = headers_for(member)

    unknown = client.post("/auth/forgot-password", json={"email": "ghost@example.com"})
    known = client.post("/auth/forgot-password", json={"email": member.email})
    assert unknown.status_code == known.status_code == 202
    assert unknown.json() == known.json()
    assert [mail.recipient for mail in outbox] == [member.email]

    token = _token_from(outbox[0])
    reset = client.post(
        "/auth/reset-password", json={"token": token, "new_password": "N3w!Password"}
    )
    assert reset.status_code == 200
    assert reset.json()["access_token"]

    reused = client.post(
        "/auth/reset-password", json={"token": token, "new_password": "An0ther!Pass"}
    )
    assert reused.status_code == 400
    assert client.get("/auth/me", headers=old_headers).status_code == 401
    assert _login(client, member.email, "N3w!Password").status_code == 200


def test_access_token_cannot_reset_passwords(client, member, headers_for) -> None:
    access_token = headers_for(member)["Authorization"].split()[1]

    response = client.post(
        "/auth/reset-password", json={"token": access_token, "new_password": "N3w!Password"}
    )

    assert response.status_code == 400


def test_sign_out_all_sessions_revokes_tokens(client, member, member_headers) -> None:
    response = client.post("/security/signout-all", headers=member_headers)

    assert response.status_code == 200
    assert client.get("/auth/me", headers=member_headers).status_code == 401
    fresh = _login(client, member.email).json()["access_token"]
    assert client.get("/auth/me", headers={"Authorization": f"Bearer {fresh}"}).status_code == 200


def test_validate_returns_a_refreshed_token(client, member_headers) -> None:
    response = client.get("/auth/token/validate", headers=member_headers)

    assert response.status_code == 200
    assert response.json()["access_token"] == response.headers["X-Refreshed-Token"]


def test_password_strength_endpoint(client) -> None:
    response = client.post("/auth/password-strength", json={"password": "Abcdefgh"})

    assert response.json() == {
        "score": 3,
        "label": "Good",
        "requirements": {"length": True, "uppercase": True, "lowercase": True, "special": False},
    }
