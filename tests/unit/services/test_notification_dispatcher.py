import pytest
from unittest.mock import AsyncMock

from src.app.services.email_sender import EmailDeliveryError
from src.app.services.notification_dispatcher import NotificationDispatcher
from src.domain.entities import NotificationType
from tests.unit.factories import TENANT_ID, make_notification, make_tenant, make_user


@pytest.fixture
def sender():
    sender = AsyncMock()
    sender.send = AsyncMock()
    return sender


@pytest.fixture
def dispatcher(mock_uow, sender):
    mock_uow.users.get.return_value = make_user("user-1")
    mock_uow.tenants.get.return_value = make_tenant()
    return NotificationDispatcher(lambda: mock_uow, sender, max_attempts=3, base_delay=0)


@pytest.mark.asyncio
async def test_enqueued_notification_is_emailed(dispatcher, sender):
    dispatcher.enqueue(
        [make_notification(type=NotificationType.repair_request, context={"repair_request_id": "rr-1"})]
    )
    await dispatcher.drain()
    await dispatcher.close()

    sender.send.assert_awaited_once()
    email = sender.send.await_args.args[0]
    assert email.user_email == "resident@example.com"
    assert email.user_name == "Ada Lee"
    assert email.tenant_name == "Harbour View Strata"
    assert email.tenant_id == TENANT_ID
    assert email.notification_type == "repair_request"
    assert email.metadata == {"repair_request_id": "rr-1"}
    assert not dispatcher.dead_letters


@pytest.mark.asyncio
async def test_transient_failure_is_retried(dispatcher, sender):
    sender.send.side_effect = [EmailDeliveryError("503"), None]

    dispatcher.enqueue([make_notification()])
    await dispatcher.drain()
    await dispatcher.close()

    assert sender.send.await_count == 2
    assert not dispatcher.dead_letters


@pytest.mark.asyncio
async def test_exhausted_retries_go_to_dead_letters(dispatcher, sender):
    sender.send.side_effect = EmailDeliveryError("mail service down")

    dispatcher.enqueue([make_notification()])
    await dispatcher.drain()
    await dispatcher.close()

    assert sender.send.await_count == 3
    assert len(dispatcher.dead_letters) == 1
    letter = dispatcher.dead_letters[0]
    assert letter.attempts == 3
    assert "mail service down" in letter.error
    assert letter.notification_id == "n-1"
    assert letter.email.notification_id == "n-1"


@pytest.mark.asyncio
async def test_redeliver_clears_dead_letters_on_success(dispatcher, sender):
    sender.send.side_effect = EmailDeliveryError("down")
    dispatcher.enqueue([make_notification()])
    await dispatcher.drain()
    await dispatcher.close()
    assert len(dispatcher.dead_letters) == 1

    sender.send.side_effect = None
    still_failing = await dispatcher.redeliver()

    assert still_failing == []
    assert not dispatcher.dead_letters


@pytest.mark.asyncio
async def test_user_without_record_is_skipped(dispatcher, mock_uow, sender):
    mock_uow.users.get.return_value = None

    dispatcher.enqueue([make_notification(user_id="ghost")])
    await dispatcher.drain()
    await dispatcher.close()

    sender.send.assert_not_awaited()
    assert not dispatcher.dead_letters


@pytest.mark.asyncio
async def test_lookup_failure_does_not_stop_the_worker(dispatcher, mock_uow, sender):
    mock_uow.users.get.side_effect = [RuntimeError("boom"), make_user("user-2", email="b@example.com")]

    dispatcher.enqueue([make_notification(id="n-1"), make_notification(id="n-2", user_id="user-2")])
    await dispatcher.drain()
    await dispatcher.close()

    sender.send.assert_awaited_once()
    assert sender.send.await_args.args[0].user_email == "b@example.com"
    assert [letter.notification_id for letter in dispatcher.dead_letters] == ["n-1"]
    letter = dispatcher.dead_letters[0]
    assert letter.email is None
    assert "boom" in letter.error


@pytest.mark.asyncio
async def test_redeliver_rebuilds_email_after_lookup_failure(dispatcher, mock_uow, sender):
    mock_uow.users.get.side_effect = RuntimeError("boom")
    dispatcher.enqueue([make_notification(id="n-1")])
    await dispatcher.drain()
    await dispatcher.close()
    sender.send.assert_not_awaited()

    mock_uow.users.get.side_effect = None
    still_failing = await dispatcher.redeliver()

    assert still_failing == []
    assert not dispatcher.dead_letters
    sender.send.assert_awaited_once()
    email = sender.send.await_args.args[0]
    assert email.notification_id == "n-1"
    assert email.user_email == "resident@example.com"


@pytest.mark.asyncio
async def test_repeated_failure_keeps_one_letter_per_notification(dispatcher, sender):
    sender.send.side_effect = EmailDeliveryError("down")
    dispatcher.enqueue([make_notification(id="n-1")])
    await dispatcher.drain()
    await dispatcher.close()

    still_failing = await dispatcher.redeliver()

    assert [letter.notification_id for letter in still_failing] == ["n-1"]
    assert len(dispatcher.dead_letters) == 1


@pytest.mark.asyncio
async def test_close_releases_the_email_sender(dispatcher, sender):
    dispatcher.enqueue([make_notification()])
    await dispatcher.drain()

    await dispatcher.close()

    sender.close.assert_awaited_once()


def test_enqueue_without_running_loop_does_not_raise(mock_uow, sender):
    dispatcher = NotificationDispatcher(lambda: mock_uow, sender)

    dispatcher.enqueue([make_notification()])

    sender.send.assert_not_awaited()
