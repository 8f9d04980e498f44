"""Tests for the profile and account security endpoints."""

from __future__ import annotations

import pytest

from coretrack.application.use_cases.activity import list_activities
from coretrack.infrastructure import storage

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture()
def fake_storage(monkeypatch):
    calls = {"uploaded": [], "deleted": []}

    def upload_blob(blob_path, data, *, content_type=None):
        calls["uploaded"].append((blob_path, content_type))
        return f"https://account.blob.core.windows.net/{blob_path}"

    monkeypatch.setattr(storage, "upload_blob", upload_blob)
    monkeypatch.setattr(storage, "delete_blob", lambda blob_path: calls["deleted"].append(blob_path))
    return calls


def test_profile_update_normalizes_fields(client, member, member_headers, db_session) -> None:
    response = client.patch(
        "/profile/",
        json={"website": "example.com", "phone": "+1 (555) 123-4567", "bio": "Builder"},
        headers=member_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["website"] == "https://example.com"
    assert body["phone"] == "+1 (555) 123-4567"
    assert body["bio"] == "Builder"

    [record] = list_activities(db_session, entity_type="profile")
    assert sorted(record.details["changed_fields"]) == ["bio", "phone", "website"]


def test_short_phone_is_rejected(client, member_headers) -> None:
    response = client.patch("/profile/", json={"phone": "555-1234"}, headers=member_headers)

    assert response.status_code == 400
    assert "10 digits" in response.json()["detail"]


def test_avatar_upload_and_delete(client, member, member_headers, fake_storage) -> None:
    uploaded = client.post(
        "/profile/avatar",
        files={"file": ("me.PNG", PNG_BYTES, "image/png")},
        headers=member_headers,
    )

    assert uploaded.status_code == 200
    expected_path = f"avatars/{member.id}/avatar.png"
    assert uploaded.json()["avatar_url"].endswith(expected_path)
    assert fake_storage["uploaded"] == [(expected_path, "image/png")]

    removed = client.delete("/profile/avatar", headers=member_headers)
    assert removed.status_code == 200
    assert removed.json()["avatar_url"] is None
    assert fake_storage["deleted"] == [expected_path]


def test_avatar_rejects_other_file_types(client, member_headers, fake_storage) -> None:
    response = client.post(
        "/profile/avatar",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=member_headers,
    )

    assert response.status_code == 400
    assert fake_storage["uploaded"] == []


def test_avatar_upload_without_storage_configuration(client, member_headers) -> None:
    storage._get_blob_service_client.cache_clear()
    storage._get_container_client.cache_clear()

    response = client.post(
        "/profile/avatar",
        files={"file": ("me.png", PNG_BYTES, "image/png")},
        headers=member_headers,
    )

    assert response.status_code == 503


def test_change_password(client, member, member_headers) -> None:
    wrong = client.post(
        "/security/password",
        json={"current_password": "Wr0ng!Pass", "new_password": "N3w!Password"},
        headers=member_headers,
    )
    assert wrong.status_code == 400

    weak = client.post(
        "/security/password",
        json={"current_password": "Str0ng!Pass", "new_password": "weakpass"},
        headers=member_headers,
    )
    assert weak.status_code == 400

    changed = client.post(
        "/security/password",
        json={"current_password": "Str0ng!Pass", "new_password": "N3w!Password"},
        headers=member_headers,
    )
    assert changed.status_code == 200
    assert client.get("/security/", headers=member_headers).status_code == 401

    login = client.post(
        "/auth/token", data={"username": member.email, "password": "N3w!Password"}
    )
    assert login.status_code == 200


def test_two_factor_toggle_records_activity(client, member_headers) -> None:
    enabled = client.put("/security/2fa", json={"enabled": True}, headers=member_headers)
    assert enabled.status_code == 200
    assert enabled.json()["two_factor_enabled"] is True

    disabled = client.put("/security/2fa", json={"enabled": False}, headers=member_headers)
    assert disabled.json()["two_factor_enabled"] is False

    feed = client.get("/activity/", params={"entity_type": "security"}, headers=member_headers)
    assert [item["description"] for item in feed.json()] == [
        "Max Member disabled two-factor authentication",
        "Max Member enabled two-factor authentication",
    ]
