"""Tests for the notification inbox and the preference gate."""

from __future__ import annotations

import logging

import pytest

from coretrack.application.use_cases.notifications import (
    create_notification,
    delete_notification,
    get_notification_preferences,
    get_unread_count,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    send_notification,
    should_send_notification,
    update_notification_preferences,
)
from coretrack.domain.entities import NotificationPreferences
from coretrack.domain.exceptions import NotFoundError
from coretrack.infrastructure.models import NotificationPreferencesModel
from coretrack.infrastructure.repositories import ActivityRepository


def _notify(session, user, **overrides):
    values = {
        "user_id": user.id,
        "title": "Task assigned",
        "message": "You have a new task",
        "category": "task",
    }
    values.update(overrides)
    return create_notification(session, **values)


def test_mark_all_read_is_idempotent(db_session, member):
    _notify(db_session, member)
    _notify(db_session, member, title="Second")

    first = mark_all_notifications_read(db_session, user_id=member.id)
    second = mark_all_notifications_read(db_session, user_id=member.id)

    assert len(first) == 2
    assert all(item.read for item in first)
    assert second == []
    assert get_unread_count(db_session, user_id=member.id) == 0


def test_unread_count_follows_mark_read(db_session, member):
    before = get_unread_count(db_session, user_id=member.id)
    notification = _notify(db_session, member)
    assert get_unread_count(db_session, user_id=member.id) == before + 1

    mark_notification_read(db_session, notification_id=notification.id, user_id=member.id)
    assert get_unread_count(db_session, user_id=member.id) == before

    again = mark_notification_read(
        db_session, notification_id=notification.id, user_id=member.id
    )
    assert again.read is True
    assert get_unread_count(db_session, user_id=member.id) == before


def test_deleting_only_unread_notifications_changes_the_count(db_session, member):
    unread = _notify(db_session, member)
    read = _notify(db_session, member, title="Old news")
    mark_notification_read(db_session, notification_id=read.id, user_id=member.id)
    assert get_unread_count(db_session, user_id=member.id) == 1

    delete_notification(db_session, notification_id=read.id, user_id=member.id)
    assert get_unread_count(db_session, user_id=member.id) == 1

    delete_notification(db_session, notification_id=unread.id, user_id=member.id)
    assert get_unread_count(db_session, user_id=member.id) == 0


def test_notifications_are_private_to_their_owner(db_session, member, admin):
    notification = _notify(db_session, member)

    with pytest.raises(NotFoundError):
        mark_notification_read(db_session, notification_id=notification.id, user_id=admin.id)
    with pytest.raises(NotFoundError):
        delete_notification(db_session, notification_id=notification.id, user_id=admin.id)


def test_list_filters(db_session, member):
    _notify(db_session, member, title="Budget alert", category="expense", type="warning")
    task = _notify(db_session, member)
    mark_notification_read(db_session, notification_id=task.id, user_id=member.id)

    unread = list_notifications(db_session, user_id=member.id, status="unread")
    warnings = list_notifications(db_session, user_id=member.id, type="warning")
    found = list_notifications(db_session, user_id=member.id, search="budget")

    assert [item.title for item in unread] == ["Budget alert"]
    assert [item.category for item in warnings] == ["expense"]
    assert [item.title for item in found] == ["Budget alert"]
    with pytest.raises(ValueError):
        list_notifications(db_session, user_id=member.id, status="archived")


def test_invalid_category_is_rejected(db_session, member):
    with pytest.raises(ValueError):
        _notify(db_session, member, category="billing")


def test_preference_flags_map_categories_to_columns():
    preferences = NotificationPreferences(
        id=1, user_id=1, push_task_assignments=False, email_expense_alerts=False
    )

    assert preferences.flag_for("push", "task") is False
    assert preferences.flag_for("push", "project") is True
    assert preferences.flag_for("email", "expense_alerts") is False
    assert preferences.flag_for("email", "weekly_reports") is True
    assert preferences.flag_for("push", "weekly_reports") is False
    assert preferences.flag_for("sms", "task") is False


def test_gate_fails_closed_without_preferences(db_session, member):
    db_session.query(NotificationPreferencesModel).filter_by(user_id=member.id).delete()
    db_session.commit()

    assert get_notification_preferences(db_session, user_id=member.id) is None
    assert not should_send_notification(
        db_session, user_id=member.id, category="task", channel="push"
    )


def test_send_notification_respects_push_preference(db_session, member, caplog):
    update_notification_preferences(db_session, user=member, push_task_assignments=False)

    with caplog.at_level(logging.INFO):
        result = send_notification(
            db_session,
            user_id=member.id,
            title="Task assigned",
            message="You have a new task",
            category="task",
        )

    assert result.skipped is True
    assert result.notification is None
    assert get_unread_count(db_session, user_id=member.id) == 0
    assert "skipped by preferences" in caplog.text


def test_send_notification_mirrors_by_email(db_session, member, outbox):
    result = send_notification(
        db_session,
        user_id=member.id,
        title="Goal reached",
        message="Well done",
        category="goal",
        type="success",
        action_url="/goals",
    )

    assert result.notification is not None
    assert result.emailed is True
    assert [mail.recipient for mail in outbox] == [member.email]
    assert "/goals" in outbox[0].html_content


def test_email_preference_only_blocks_the_email(db_session, member, outbox):
    update_notification_preferences(db_session, user=member, email_goal_reminders=False)

    result = send_notification(
        db_session,
        user_id=member.id,
        title="Goal reached",
        message="Well done",
        category="goal",
    )

    assert result.notification is not None
    assert result.emailed is False
    assert outbox == []


def test_updating_preferences_records_activity(db_session, member):
    preferences = update_notification_preferences(
        db_session, user=member, digest_frequency="daily", quiet_hours_start="22:00"
    )

    assert preferences.digest_frequency == "daily"
    assert preferences.quiet_hours_start == "22:00"
    records = ActivityRepository(db_session).list(actor_id=member.id)
    assert [(record.entity_type, record.action) for record in records] == [
        ("notification", "preferences_updated")
    ]


@pytest.mark.parametrize(
    "changes",
    [{"digest_frequency": "hourly"}, {"quiet_hours_end": "25:00"}, {"timezone": " "}],
)
def test_invalid_preferences_are_rejected(db_session, member, changes):
    with pytest.raises(ValueError):
        update_notification_preferences(db_session, user=member, **changes)
