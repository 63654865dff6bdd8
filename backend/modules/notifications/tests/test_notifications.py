import pytest
from unittest.mock import AsyncMock, Mock

from core.error_handling import NotFoundError
from core.notification_adapter import (
    FanOutAdapter,
    LoggingAdapter,
    NotificationAdapter,
    NotificationMessage,
)
from modules.notifications.models import Notification
from modules.notifications.services import NotificationService
from tests.factories import UserFactory


@pytest.mark.asyncio
async def test_send_persists_and_delivers(db_session):
    user = UserFactory()
    adapter = Mock(spec=NotificationAdapter)
    adapter.send_to_user = AsyncMock(return_value=True)

    notification = await NotificationService(db_session, adapter=adapter).send_notification(
        user.id, "wallet_credit", "Money Added", "$5.00 added", {"amount": "5.00"}
    )

    assert notification.id is not None
    assert notification.is_read is False
    user_id, message = adapter.send_to_user.await_args.args
    assert user_id == user.id
    assert message.title == "Money Added"
    assert message.data == {"amount": "5.00"}
    assert message.notification_id == notification.id
    assert message.notification_type == "wallet_credit"


@pytest.mark.asyncio
async def test_undelivered_notification_is_kept(db_session):
    user = UserFactory()
    adapter = Mock(spec=NotificationAdapter)
    adapter.send_to_user = AsyncMock(return_value=False)
    adapter.get_adapter_name.return_value = "push"

    await NotificationService(db_session, adapter=adapter).send_notification(
        user.id, "order", "Update", "Your order moved"
    )

    assert db_session.query(Notification).count() == 1


def test_mark_read_other_users_notification(db_session):
    owner, other = UserFactory(), UserFactory()
    notification = Notification(
        user_id=owner.id, type="general", title="Hi", message="Hello"
    )
    db_session.add(notification)
    db_session.commit()

    with pytest.raises(NotFoundError):
        NotificationService(db_session).mark_read(other.id, notification.id)


def test_list_and_mark_read_routes(client, db_session, customer, auth_headers):
    for index in range(3):
        db_session.add(
            Notification(
                user_id=customer.id,
                type="general",
                title=f"Note {index}",
                message="Hello",
            )
        )
    db_session.commit()

    response = client.get("/notifications", params={"limit": 2}, headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["pagination"]["total"] == 3
    assert data["pagination"]["totalPages"] == 2
    assert [n["title"] for n in data["notifications"]] == ["Note 2", "Note 1"]

    notification_id = data["notifications"][0]["id"]
    response = client.put(f"/notifications/{notification_id}/read", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["isRead"] is True


def test_mark_read_missing(client, auth_headers):
    response = client.put("/notifications/999/read", headers=auth_headers)

    assert response.status_code == 404
    assert response.json()["detail"] == "Notification not found"


@pytest.mark.asyncio
async def test_fan_out_survives_failing_channel():
    broken = Mock(spec=NotificationAdapter)
    broken.send_to_user = AsyncMock(side_effect=ConnectionError("push down"))
    broken.get_adapter_name.return_value = "push"
    adapter = FanOutAdapter([broken, LoggingAdapter()])
    message = NotificationMessage(
        title="Cashback Received", message="$1.00", notification_type="wallet_cashback"
    )

    assert await adapter.send_to_user(1, message) is True
    assert adapter.get_adapter_name() == "push+logging"
    assert message.to_payload()["type"] == "wallet_cashback"


@pytest.mark.asyncio
async def test_fan_out_reports_no_delivery():
    silent = Mock(spec=NotificationAdapter)
    silent.send_to_user = AsyncMock(return_value=False)
    message = NotificationMessage(title="Hi", message="Hello", notification_type="general")

    assert await FanOutAdapter([silent]).send_to_user(1, message) is False
