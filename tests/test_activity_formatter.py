"""Unit tests for the activity sentence formatter and action vocabulary."""

from __future__ import annotations

import pytest

from coretrack.application.use_cases.activity import UNKNOWN_ACTOR, format_activity
from coretrack.domain.entities import (
    ENTITY_ACTIONS,
    ActivityActor,
    ActivityRecord,
    ensure_supported_activity,
    normalize_action,
)
from coretrack.utils import format_currency, past_tense


def _record(entity_type, action, details=None, *, actor=None, entity_id="1"):
    if actor is None:
        actor = ActivityActor(id=1, full_name="Grace Hopper", email="grace@example.com")
    return ActivityRecord(
        id=1,
        actor_id=actor.id if actor else None,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        details=details or {},
        actor=actor,
    )


@pytest.mark.parametrize(
    ("entity_type", "action"),
    sorted(
        (entity_type, action)
        for entity_type, actions in ENTITY_ACTIONS.items()
        for action in actions
    ),
)
def test_every_supported_kind_mentions_the_actor(entity_type, action):
    sentence = format_activity(_record(entity_type, action))

    assert sentence
    assert "Grace Hopper" in sentence


@pytest.mark.parametrize(
    ("actor", "expected"),
    [
        (ActivityActor(id=1, full_name="Grace Hopper", email="grace@example.com"), "Grace Hopper"),
        (ActivityActor(id=1, full_name="  ", email="grace@example.com"), "grace@example.com"),
        (ActivityActor(id=1, full_name=None, email=None), UNKNOWN_ACTOR),
    ],
)
def test_actor_name_precedence(actor, expected):
    sentence = format_activity(_record("project", "created", {"title": "Apollo"}, actor=actor))

    assert sentence == f'{expected} created project "Apollo"'


def test_deleted_actor_renders_as_someone():
    record = ActivityRecord(
        id=1, actor_id=None, action="created", entity_type="goal", entity_id="3"
    )

    assert format_activity(record) == 'Someone created goal "Untitled Goal"'


def test_project_update_reports_the_first_change():
    renamed = _record(
        "project",
        "updated",
        {"title": "Apollo 2", "previous_title": "Apollo", "status": "active", "previous_status": "active"},
    )
    budget = _record(
        "project", "updated", {"title": "Apollo", "budget": 1000, "previous_budget": 500}
    )

    assert format_activity(renamed) == (
        'Grace Hopper updated project "Apollo 2" - renamed from "Apollo" to "Apollo 2"'
    )
    assert format_activity(budget) == (
        'Grace Hopper updated project "Apollo" - budget updated to $1,000'
    )


def test_project_budget_removal():
    removed = _record(
        "project", "updated", {"title": "Apollo", "budget": None, "previous_budget": 500}
    )

    assert format_activity(removed) == 'Grace Hopper updated project "Apollo" - budget removed'


def test_task_status_changes():
    moved = _record(
        "task",
        "updated",
        {"title": "Write docs", "status_changed": True, "previous_status": "todo", "new_status": "in_progress"},
    )
    unknown_previous = _record(
        "task", "updated", {"title": "Write docs", "status_changed": True, "new_status": "in_progress"}
    )
    completed = _record("task", "updated", {"title": "Write docs", "new_status": "completed"})

    assert format_activity(moved) == 'Grace Hopper moved task "Write docs" from To Do to In Progress'
    assert format_activity(unknown_previous) == (
        'Grace Hopper changed task "Write docs" status to In Progress'
    )
    assert format_activity(completed) == 'Grace Hopper completed task "Write docs"'


def test_expense_and_goal_sentences():
    expense = _record("expense", "created", {"description": "Hosting", "amount": 12.5})
    progress = _record(
        "goal", "progress_updated", {"title": "Sign 10 clients", "new_progress_percentage": 40}
    )

    assert format_activity(expense) == 'Grace Hopper added expense "Hosting" for $12.50'
    assert format_activity(progress) == 'Grace Hopper updated progress on "Sign 10 clients" to 40%'


def test_user_sentences_use_the_email():
    invited = _record("user", "invited", {"email": "a@b.com"}, entity_id="a@b.com")
    role = _record(
        "user", "role_changed", {"email": "a@b.com", "old_role": "user", "new_role": "admin"}
    )

    assert format_activity(invited) == "Grace Hopper invited a@b.com to join"
    assert format_activity(role) == "Grace Hopper changed a@b.com's role from user to admin"


def test_profile_update_lists_changed_fields():
    record = _record("profile", "updated", {"changed_fields": ["full_name", "bio"]})

    assert format_activity(record) == "Grace Hopper updated their name, bio"


def test_unknown_kind_falls_back_to_past_tense():
    record = _record("workspace", "archive")

    assert format_activity(record) == "Grace Hopper archived workspace"


def test_legacy_spellings_are_normalized():
    assert normalize_action("create") == "created"
    assert normalize_action(" Invite ") == "invited"
    assert ensure_supported_activity("complete", "Task") == ("completed", "task")


def test_unsupported_pairs_are_rejected():
    with pytest.raises(ValueError):
        ensure_supported_activity("progress_updated", "project")
    with pytest.raises(ValueError):
        ensure_supported_activity("created", "invoice")


@pytest.mark.parametrize(
    ("value", "expected"),
    [(1000, "$1,000"), (12.5, "$12.50"), (1234567.891, "$1,234,567.89"), (None, "$0")],
)
def test_format_currency(value, expected):
    assert format_currency(value) == expected


@pytest.mark.parametrize(
    ("verb", "expected"),
    [("invite", "invited"), ("archive", "archived"), ("export", "exported"), ("updated", "updated")],
)
def test_past_tense(verb, expected):
    assert past_tense(verb) == expected
