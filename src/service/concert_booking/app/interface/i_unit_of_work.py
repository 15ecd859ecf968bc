"""
Unit of Work port

All repository writes made between `begin()` and `commit()` land together or
not at all. Use cases normally go through `execute`:

    result = await uow.execute(body)

which commits when `body` returns and rolls back (then re-raises) when it
raises. The async context manager form is the explicit alternative:

    async with uow:
        ...
        await uow.commit()
"""

from __future__ import annotations

import abc
from typing import Awaitable, Callable, TypeVar


_T = TypeVar('_T')


class IUnitOfWork(abc.ABC):
    async def __aenter__(self) -> IUnitOfWork:
        await self.begin()
        return self

    async def __aexit__(self, *args) -> None:
        # No-op after a successful commit
        await self.rollback()

    async def execute(self, body: Callable[[], Awaitable[_T]]) -> _T:
        async with self:
            result = await body()
            await self.commit()
            return result

    async def commit(self) -> None:
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def begin(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError
