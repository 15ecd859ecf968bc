"""
SQLAlchemy Unit of Work

Architecture:
- UoW owns the session lifecycle and commit/rollback
- The active session is published through a ContextVar; repositories called
  inside the transaction (same task) join it instead of opening their own
- One UoW instance can be shared by concurrent requests: each task sees only
  its own session
"""

from contextvars import ContextVar
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.service.concert_booking.app.interface.i_unit_of_work import IUnitOfWork


_current_session: ContextVar[Optional[AsyncSession]] = ContextVar(
    'uow_current_session', default=None
)


def get_current_session() -> Optional[AsyncSession]:
    """Session of the unit of work active in this task, if any"""
    return _current_session.get()


class SqlAlchemyUnitOfWork(IUnitOfWork):
    """
    Usage in use case:
        async def _reserve() -> Booking:
            concert = await self.concert_repo.find_by_id(concert_id=concert_id)
            ...
        booking = await uow.execute(_reserve)
    """

    def __init__(self, *, session_factory: Callable[[], AsyncSession]) -> None:
        self.session_factory = session_factory

    async def begin(self) -> None:
        if _current_session.get() is not None:
            raise RuntimeError('A unit of work is already active in this context')
        _current_session.set(self.session_factory())

    async def _commit(self) -> None:
        session = self._require_session()
        try:
            await session.commit()
        finally:
            await self._close()

    async def rollback(self) -> None:
        session = _current_session.get()
        if session is None:
            return
        try:
            await session.rollback()
        finally:
            await self._close()

    def _require_session(self) -> AsyncSession:
        session = _current_session.get()
        if session is None:
            raise RuntimeError('No active unit of work; call begin() first')
        return session

    async def _close(self) -> None:
        session = _current_session.get()
        _current_session.set(None)
        if session is not None:
            await session.close()
