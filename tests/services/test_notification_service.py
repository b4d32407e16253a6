# tests/services/test_notification_service.py
import uuid

import pytest

from app.core.errors import ForbiddenError, NotFoundError
from app.services.notification_service import NotificationService


def test_notify_review_created(db_session, customer, provider):
    service = NotificationService(db_session)

    created = service.notify_review_created(customer.user.id, provider.user.id, 5, "Carol Plumber")

    assert {n.kind for n in created} == {"review_received", "review_posted"}
    received = service.list_for_user(provider.user.id)
    assert len(received) == 1
    assert received[0].subject == "New 5-star review"
    assert [n.kind for n in service.list_for_user(customer.user.id)] == ["review_posted"]


def test_queue_review_created(db_session, customer, provider, queued_notifications):
    service = NotificationService(db_session)

    assert service.queue_review_created(customer.user.id, provider.user.id, 4, "Leak repair") is True
    queued_notifications.assert_called_once_with(
        str(customer.user.id), str(provider.user.id), 4, "Leak repair"
    )


def test_queue_failure_is_swallowed(db_session, customer, provider, queued_notifications):
    queued_notifications.side_effect = OSError("connection refused")
    service = NotificationService(db_session)

    assert service.queue_review_created(customer.user.id, provider.user.id, 4, "Leak repair") is False


def test_mark_read(db_session, customer, provider):
    service = NotificationService(db_session)
    service.notify_review_created(customer.user.id, provider.user.id, 5, "Carol Plumber")
    notification = service.list_for_user(provider.user.id)[0]

    updated = service.mark_read(notification.id, provider.user.id)

    assert updated.is_read is True
    assert service.list_for_user(provider.user.id, unread_only=True) == []


def test_mark_read_errors(db_session, customer, provider):
    service = NotificationService(db_session)
    service.notify_review_created(customer.user.id, provider.user.id, 5, "Carol Plumber")
    notification = service.list_for_user(provider.user.id)[0]

    with pytest.raises(ForbiddenError):
        service.mark_read(notification.id, customer.user.id)
    with pytest.raises(NotFoundError):
        service.mark_read(uuid.uuid4(), provider.user.id)
