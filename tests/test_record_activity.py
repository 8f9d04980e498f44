"""Tests for the best-effort activity writer and feed queries."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal

from sqlalchemy.exc import OperationalError

from coretrack.application.use_cases.activity import (
    get_activity_stats,
    list_activities,
    record_activity,
)
from coretrack.infrastructure.repositories import ActivityRepository


def test_legacy_action_is_stored_in_canonical_form(db_session, member):
    record_activity(db_session, member, "create", "Project", 4, {"title": "Apollo"})

    [record] = ActivityRepository(db_session).list()
    assert (record.action, record.entity_type, record.entity_id) == ("created", "project", "4")
    assert record.actor is not None
    assert record.actor.full_name == member.full_name


def test_unsupported_pair_is_dropped(db_session, member, caplog):
    with caplog.at_level(logging.WARNING):
        record_activity(db_session, member, "archived", "project", 1)

    assert ActivityRepository(db_session).list() == []
    assert "Unsupported action" in caplog.text


def test_missing_actor_skips_the_write(db_session, member, caplog):
    with caplog.at_level(logging.WARNING):
        record_activity(db_session, None, "created", "project", 1)
        record_activity(db_session, replace(member, id=None), "created", "project", 1)

    assert ActivityRepository(db_session).list() == []
    assert "no authenticated actor" in caplog.text


def test_database_failure_is_logged_and_swallowed(db_session, member, monkeypatch, caplog):
    def failing_create(self, **kwargs):
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    monkeypatch.setattr(ActivityRepository, "create", failing_create)

    with caplog.at_level(logging.ERROR):
        record_activity(db_session, member, "created", "project", 1)

    assert "Failed to record activity" in caplog.text


def test_details_are_made_json_safe(db_session, member):
    record_activity(
        db_session,
        member,
        "created",
        "expense",
        9,
        {"amount": Decimal("12.50"), "expense_date": date(2024, 3, 1), "tags": ("a", "b")},
    )

    [record] = ActivityRepository(db_session).list()
    assert record.details == {"amount": 12.5, "expense_date": "2024-03-01", "tags": ["a", "b"]}


def test_feed_filters_and_search(db_session, member, admin):
    record_activity(db_session, member, "created", "project", 1, {"title": "Apollo"})
    record_activity(db_session, member, "created", "task", 2, {"title": "Launch"})
    record_activity(db_session, admin, "invited", "user", "new@example.com", {"email": "new@example.com"})

    mine = list_activities(db_session, actor_id=member.id)
    tasks = list_activities(db_session, entity_type="task")
    legacy = list_activities(db_session, action="invite")
    found = list_activities(db_session, search="apollo")

    assert len(mine) == 2
    assert [record.entity_id for record in tasks] == ["2"]
    assert [record.entity_id for record in legacy] == ["new@example.com"]
    assert [record.entity_id for record in found] == ["1"]


def test_stats_group_by_action_and_entity(db_session, member):
    record_activity(db_session, member, "created", "project", 1)
    record_activity(db_session, member, "updated", "project", 1)
    record_activity(db_session, member, "created", "task", 2)

    stats = get_activity_stats(db_session, actor_id=member.id)

    assert stats.total == 3
    assert stats.today == 3
    assert stats.this_week == 3
    assert stats.by_action == {"created": 2, "updated": 1}
    assert stats.by_entity == {"project": 2, "task": 1}
