from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.unit_of_work import get_current_session


class SessionScopedRepo:
    """
    Base for SQLAlchemy repositories.

    Inside a unit of work, every call joins the transaction's session and
    leaves commit/rollback to the unit of work. Outside one, each call runs in
    its own short-lived session that commits when the call succeeds.
    """

    def __init__(self, *, session_factory: Callable[[], AsyncSession]) -> None:
        self.session_factory = session_factory

    @property
    def in_transaction(self) -> bool:
        return get_current_session() is not None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        session = get_current_session()
        if session is not None:
            # Session owned by the unit of work
            yield session
            return

        async with self.session_factory() as session:
            async with session.begin():
                yield session
