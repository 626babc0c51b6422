import pytest

from src.app.use_cases.notifications import (
    CreateNotificationCommand,
    CreateNotificationUseCase,
    DismissNotificationUseCase,
    ListNotificationsUseCase,
    MarkNotificationReadUseCase,
)
from src.domain.entities import NotificationType
from tests.unit.factories import TENANT_ID, make_access, make_notification, make_tenant, make_user, patcher


@pytest.mark.asyncio
async def test_create_notification_is_dispatched_after_commit(mock_uow, mock_dispatcher):
    mock_uow.tenants.get.return_value = make_tenant()
    mock_uow.users.get.return_value = make_user()
    mock_uow.user_tenant_access.list_by_tenant.return_value = [make_access("user-1")]
    command = CreateNotificationCommand(
        tenant_id=TENANT_ID,
        user_id="user-1",
        type=NotificationType.meeting,
        title="AGM",
        message="Annual general meeting on the 12th",
    )

    result = await CreateNotificationUseCase(mock_uow, mock_dispatcher).execute(command)

    assert result.is_ok()
    assert result.value.user_id == "user-1"
    mock_uow.commit.assert_awaited_once()
    queued = mock_dispatcher.enqueue.call_args.args[0]
    assert [n.id for n in queued] == [result.value.id]


@pytest.mark.asyncio
async def test_create_notification_for_unknown_user(mock_uow, mock_dispatcher):
    mock_uow.tenants.get.return_value = make_tenant()
    command = CreateNotificationCommand(tenant_id=TENANT_ID, user_id="ghost", title="Hi", message="x")

    result = await CreateNotificationUseCase(mock_uow, mock_dispatcher).execute(command)

    assert result.error.code == "USER_NOT_FOUND"
    mock_dispatcher.enqueue.assert_not_called()


@pytest.mark.asyncio
async def test_create_notification_for_user_outside_the_tenant(mock_uow, mock_dispatcher):
    mock_uow.tenants.get.return_value = make_tenant()
    mock_uow.users.get.return_value = make_user()
    command = CreateNotificationCommand(tenant_id=TENANT_ID, user_id="user-1", title="Hi", message="x")

    result = await CreateNotificationUseCase(mock_uow, mock_dispatcher).execute(command)

    assert result.error.code == "FORBIDDEN"
    mock_uow.user_tenant_access.list_by_tenant.assert_awaited_once_with(
        TENANT_ID, filters={"user_id": "user-1"}, limit=1
    )
    mock_uow.notifications.create.assert_not_awaited()
    mock_dispatcher.enqueue.assert_not_called()


@pytest.mark.asyncio
async def test_list_for_tenant_excludes_dismissed_and_caps_limit(mock_uow):
    await ListNotificationsUseCase(mock_uow).execute("user-1", tenant_id=TENANT_ID, limit=500)

    mock_uow.notifications.list_by_tenant.assert_awaited_once_with(
        TENANT_ID, filters={"user_id": "user-1", "dismissed": False}, limit=20
    )


@pytest.mark.asyncio
async def test_list_across_tenants(mock_uow):
    mock_uow.notifications.list_where.return_value = [make_notification(id=f"n-{i}") for i in range(25)]

    result = await ListNotificationsUseCase(mock_uow).execute("user-1")

    assert len(result.value) == 20
    mock_uow.notifications.list_where.assert_awaited_once_with({"user_id": "user-1", "dismissed": False})


@pytest.mark.asyncio
async def test_mark_read(mock_uow):
    notification = make_notification()
    mock_uow.notifications.get.return_value = notification
    mock_uow.notifications.update.side_effect = patcher(notification)

    result = await MarkNotificationReadUseCase(mock_uow).execute("user-1", notification.id)

    assert result.value.is_read is True
    assert result.value.read_at is not None
    assert mock_uow.notifications.update.await_args.kwargs["expected_version"] == 1


@pytest.mark.asyncio
async def test_only_recipient_marks_read(mock_uow):
    mock_uow.notifications.get.return_value = make_notification(user_id="someone-else")

    result = await MarkNotificationReadUseCase(mock_uow).execute("user-1", "n-1")

    assert result.error.code == "FORBIDDEN"
    mock_uow.notifications.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_dismiss_records_dismissal(mock_uow):
    notification = make_notification(type=NotificationType.announcement)
    mock_uow.notifications.get.return_value = notification
    mock_uow.notifications.update.side_effect = patcher(notification)

    result = await DismissNotificationUseCase(mock_uow).execute("user-1", notification.id)

    assert result.value.dismissed is True
    dismissal = mock_uow.dismissed_notifications.create.await_args.args[0]
    assert dismissal.notification_id == notification.id
    assert dismissal.tenant_id == TENANT_ID
    assert dismissal.notification_type == "announcement"
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_dismiss_missing_notification(mock_uow):
    result = await DismissNotificationUseCase(mock_uow).execute("user-1", "nope")

    assert result.error.code == "NOT_FOUND"
