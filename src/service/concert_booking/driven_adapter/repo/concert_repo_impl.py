from typing import List, Optional

from sqlalchemy import select

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.concert_booking.app.interface.i_concert_repo import IConcertRepo
from src.service.concert_booking.domain.entity.concert_entity import Concert
from src.service.concert_booking.driven_adapter.model.concert_model import ConcertModel
from src.service.concert_booking.driven_adapter.repo.session_scope import SessionScopedRepo


class ConcertRepoImpl(SessionScopedRepo, IConcertRepo):
    @staticmethod
    def _to_entity(db_concert: ConcertModel) -> Concert:
        return Concert(
            id=db_concert.id,
            name=db_concert.name,
            description=db_concert.description,
            total_seats=db_concert.total_seats,
            reserved_seats=db_concert.reserved_seats,
            created_at=db_concert.created_at,
            updated_at=db_concert.updated_at,
            deleted_at=db_concert.deleted_at,
        )

    @Logger.io
    async def find_by_id(self, *, concert_id: str) -> Optional[Concert]:
        stmt = select(ConcertModel).where(
            ConcertModel.id == concert_id, ConcertModel.deleted_at.is_(None)
        )
        if self.in_transaction:
            # Serialize seat-count changes on this concert until commit
            stmt = stmt.with_for_update()

        async with self._get_session() as session:
            db_concert = (await session.execute(stmt)).scalar_one_or_none()
            return self._to_entity(db_concert) if db_concert else None

    @Logger.io
    async def lock_by_id(self, *, concert_id: str) -> Optional[Concert]:
        stmt = select(ConcertModel).where(ConcertModel.id == concert_id).with_for_update()
        async with self._get_session() as session:
            db_concert = (await session.execute(stmt)).scalar_one_or_none()
            return self._to_entity(db_concert) if db_concert else None

    @Logger.io
    async def find_all(self) -> List[Concert]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ConcertModel)
                .where(ConcertModel.deleted_at.is_(None))
                .order_by(ConcertModel.created_at.desc())
            )
            return [self._to_entity(db_concert) for db_concert in result.scalars().all()]

    @Logger.io
    async def create(self, *, concert: Concert) -> Concert:
        async with self._get_session() as session:
            db_concert = ConcertModel(
                id=concert.id,
                name=concert.name,
                description=concert.description,
                total_seats=concert.total_seats,
                reserved_seats=concert.reserved_seats,
                created_at=concert.created_at,
                updated_at=concert.updated_at,
                deleted_at=concert.deleted_at,
            )
            session.add(db_concert)
            await session.flush()
            return self._to_entity(db_concert)

    @Logger.io
    async def update(self, *, concert: Concert) -> Concert:
        async with self._get_session() as session:
            db_concert = await session.get(ConcertModel, concert.id)
            if db_concert is None:
                raise NotFoundError('Concert not found')

            db_concert.reserved_seats = concert.reserved_seats
            db_concert.updated_at = concert.updated_at
            db_concert.deleted_at = concert.deleted_at
            await session.flush()
            return self._to_entity(db_concert)

    @Logger.io
    async def delete(self, *, concert_id: str) -> None:
        async with self._get_session() as session:
            result = await session.execute(
                select(ConcertModel).where(ConcertModel.id == concert_id).with_for_update()
            )
            db_concert = result.scalar_one_or_none()
            if db_concert is None:
                raise NotFoundError('Concert not found')

            deleted = self._to_entity(db_concert).soft_delete()
            db_concert.deleted_at = deleted.deleted_at
            db_concert.updated_at = deleted.updated_at
            await session.flush()
