import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.unit_of_work import RECORD_KINDS
from src.domain.base import generate_id

REPOSITORY_METHODS = (
    "create",
    "get",
    "list_by_tenant",
    "list_where",
    "list_ids_by_tenant",
    "update",
    "append_history",
    "delete",
)


def _created(entity):
    return entity.model_copy(update={"id": entity.id or generate_id(), "version": 1})


def make_repository():
    repo = MagicMock()
    for name in REPOSITORY_METHODS:
        setattr(repo, name, AsyncMock())
    repo.create.side_effect = _created
    repo.get.return_value = None
    repo.list_by_tenant.return_value = []
    repo.list_where.return_value = []
    repo.list_ids_by_tenant.return_value = []
    return repo


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with one repository per record kind"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.delete_batch = AsyncMock()
    for collection in RECORD_KINDS:
        setattr(uow, collection, make_repository())
    uow.repository_for = MagicMock(side_effect=lambda collection: getattr(uow, collection))
    return uow


@pytest.fixture
def mock_dispatcher():
    dispatcher = MagicMock()
    dispatcher.enqueue = MagicMock()
    return dispatcher
