from collections import defaultdict
from typing import Callable, Dict, List, Optional, Sequence

from sqlalchemy import delete
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.document_repository import DocumentRepository, translate_store_errors
from src.app.services.unit_of_work import RECORD_KINDS, DocumentRef, UnitOfWork
from src.domain.entities import StoredDocument


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    SQLAlchemy implementation of UnitOfWork pattern

    Either wraps a request-scoped session, or opens (and closes) its own from
    ``session_factory`` when used outside a request, e.g. by background workers.
    """

    def __init__(
        self,
        session: Optional[AsyncSession] = None,
        session_factory: Optional[Callable[[], AsyncSession]] = None,
    ):
        if session is None and session_factory is None:
            raise ValueError("Either session or session_factory is required")
        self.session = session
        self._session_factory = session_factory
        self._owns_session = session is None

    async def __aenter__(self):
        if self._owns_session:
            self.session = self._session_factory()
        # Initialize one repository per record kind with the session
        for collection, model in RECORD_KINDS.items():
            setattr(self, collection, DocumentRepository(self.session, model))
        return self

    async def __aexit__(self, *args):
        await self.rollback()
        if self._owns_session:
            await self.session.close()

    @translate_store_errors
    async def delete_batch(self, refs: Sequence[DocumentRef]) -> int:
        by_collection: Dict[str, List[str]] = defaultdict(list)
        for ref in refs:
            by_collection[ref.collection].append(ref.id)

        deleted = 0
        for collection, ids in by_collection.items():
            stmt = delete(StoredDocument).where(
                StoredDocument.collection == collection,
                StoredDocument.id.in_(ids),
            )
            result = await self.session.execute(stmt)
            deleted += result.rowcount
        return deleted

    @translate_store_errors
    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
