"""Tests for the websocket connection manager and the publisher."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from coretrack.domain.entities import Notification
from coretrack.infrastructure.notifications import (
    NotificationConnectionManager,
    NotificationPublisher,
    serialize_notification,
)


class RecordingManager(NotificationConnectionManager):
    def __init__(self, *, connected: bool = True) -> None:
        super().__init__()
        self.connected = connected
        self.sent: list[tuple[int, dict]] = []

    def has_connections(self, user_id: int) -> bool:
        return self.connected

    async def send_to_user(self, user_id, message):
        self.sent.append((user_id, message))


class FakeSocket:
    def __init__(self, *, broken: bool = False) -> None:
        self.broken = broken
        self.accepted = False
        self.messages: list[dict] = []

    async def accept(self):
        self.accepted = True

    async def send_json(self, message):
        if self.broken:
            raise RuntimeError("socket closed")
        self.messages.append(message)


def _notification() -> Notification:
    return Notification(
        id=5,
        user_id=7,
        title="Budget warning",
        message="Project Apollo is over budget",
        category="expense",
        type="warning",
        metadata={"project_id": 3},
        created_at=datetime(2024, 5, 1, 9, 30),
    )


def test_serialize_notification_exposes_client_fields():
    payload = serialize_notification(_notification())

    assert payload["id"] == 5
    assert payload["category"] == "expense"
    assert payload["read"] is False
    assert payload["metadata"] == {"project_id": 3}
    assert payload["created_at"] == "2024-05-01T09:30:00"


def test_dispatch_on_running_loop_schedules_delivery():
    manager = RecordingManager()
    publisher = NotificationPublisher(manager)

    async def scenario():
        publisher.dispatch(_notification())
        await asyncio.sleep(0)
        await asyncio.sleep(0)

    asyncio.run(scenario())

    assert len(manager.sent) == 1
    user_id, message = manager.sent[0]
    assert user_id == 7
    assert message["type"] == "notification"
    assert message["data"]["title"] == "Budget warning"


def test_dispatch_without_connections_is_a_no_op():
    manager = RecordingManager(connected=False)

    NotificationPublisher(manager).dispatch(_notification())

    assert manager.sent == []


def test_dispatch_outside_any_loop_logs_a_warning(caplog):
    manager = RecordingManager()

    with caplog.at_level(logging.WARNING):
        NotificationPublisher(manager).dispatch(_notification())

    assert manager.sent == []
    assert "No event loop available" in caplog.text


def test_manager_drops_sockets_that_fail():
    manager = NotificationConnectionManager()
    healthy, broken = FakeSocket(), FakeSocket(broken=True)

    async def scenario():
        await manager.connect(1, healthy)
        await manager.connect(1, broken)
        await manager.send_to_user(1, {"type": "ping"})

    asyncio.run(scenario())

    assert healthy.messages == [{"type": "ping"}]
    assert manager.has_connections(1)
    manager.disconnect(1, healthy)
    assert not manager.has_connections(1)
