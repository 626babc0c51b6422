import pytest

from src.app.use_cases.repairs import ConvertRepairRequestUseCase
from src.domain.entities import (
    AccessRole,
    NotificationType,
    ProjectPriority,
    ProjectStatus,
    RepairRequestSeverity,
    RepairRequestStatus,
)
from tests.unit.factories import TENANT_ID, history_appender, make_access, make_repair_request


@pytest.fixture
def approved_request():
    return make_repair_request(
        status=RepairRequestStatus.approved,
        severity=RepairRequestSeverity.emergency,
    )


def _use_case(mock_uow, mock_dispatcher, request):
    mock_uow.repair_requests.get.return_value = request
    mock_uow.repair_requests.append_history.side_effect = history_appender(request)
    mock_uow.user_tenant_access.list_by_tenant.return_value = [
        make_access("chair-1", AccessRole.chairperson),
        make_access("treasurer-1", AccessRole.treasurer),
        make_access("resident-1", AccessRole.resident),
    ]
    return ConvertRepairRequestUseCase(mock_uow, mock_dispatcher)


@pytest.mark.asyncio
async def test_convert_creates_project_and_marks_request(mock_uow, mock_dispatcher, approved_request):
    use_case = _use_case(mock_uow, mock_dispatcher, approved_request)

    result = await use_case.execute(TENANT_ID, approved_request.id, "chair-1")

    assert result.is_ok()
    project = mock_uow.maintenance_projects.create.await_args.args[0]
    assert project.tenant_id == TENANT_ID
    assert project.title == approved_request.title
    assert project.category == "other"
    assert project.priority == ProjectPriority.urgent
    assert project.estimated_cost == 450.0
    assert project.source_repair_request_id == approved_request.id
    assert project.status == ProjectStatus.planned
    assert [h.status for h in project.status_history] == ["planned"]

    call = mock_uow.repair_requests.append_history.await_args
    assert call.args[1].status == RepairRequestStatus.converted.value
    assert call.kwargs["patch"]["converted_project_id"] == result.value.project_id
    assert call.kwargs["patch"]["converted_by"] == "chair-1"
    assert call.kwargs["expected_version"] == approved_request.version

    assert result.value.priority == ProjectPriority.urgent
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_convert_notifies_every_admin(mock_uow, mock_dispatcher, approved_request):
    use_case = _use_case(mock_uow, mock_dispatcher, approved_request)

    result = await use_case.execute(TENANT_ID, approved_request.id, "chair-1")

    recipients = [call.args[0].user_id for call in mock_uow.notifications.create.await_args_list]
    assert recipients == ["chair-1", "treasurer-1"]
    assert all(
        call.args[0].type == NotificationType.maintenance
        for call in mock_uow.notifications.create.await_args_list
    )
    assert result.value.admins_notified == 2
    mock_dispatcher.enqueue.assert_called_once()


@pytest.mark.asyncio
async def test_second_conversion_is_rejected(mock_uow, mock_dispatcher):
    converted = make_repair_request(
        status=RepairRequestStatus.converted, converted_project_id="mp-9"
    )
    use_case = _use_case(mock_uow, mock_dispatcher, converted)

    result = await use_case.execute(TENANT_ID, converted.id, "chair-1")

    assert result.error.code == "ALREADY_CONVERTED"
    assert result.error.details == {"project_id": "mp-9"}
    mock_uow.maintenance_projects.create.assert_not_awaited()
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_only_approved_requests_convert(mock_uow, mock_dispatcher):
    request = make_repair_request(status=RepairRequestStatus.suggested)
    use_case = _use_case(mock_uow, mock_dispatcher, request)

    result = await use_case.execute(TENANT_ID, request.id, "chair-1")

    assert result.error.code == "INVALID_STATUS"
    mock_uow.maintenance_projects.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_missing_request(mock_uow, mock_dispatcher):
    use_case = ConvertRepairRequestUseCase(mock_uow, mock_dispatcher)

    result = await use_case.execute(TENANT_ID, "missing", "chair-1")

    assert result.error.code == "NOT_FOUND"
