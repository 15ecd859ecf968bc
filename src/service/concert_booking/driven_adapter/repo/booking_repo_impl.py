from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import Select, select, update
from sqlalchemy.exc import IntegrityError

from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.concert_booking.app.interface.i_booking_repo import IBookingRepo
from src.service.concert_booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.concert_booking.driven_adapter.model.booking_model import BookingModel
from src.service.concert_booking.driven_adapter.model.concert_model import ConcertModel
from src.service.concert_booking.driven_adapter.model.user_model import UserModel
from src.service.concert_booking.driven_adapter.repo.session_scope import SessionScopedRepo


class BookingRepoImpl(SessionScopedRepo, IBookingRepo):
    @staticmethod
    def _to_entity(db_booking: BookingModel) -> Booking:
        return Booking(
            id=db_booking.id,
            concert_id=db_booking.concert_id,
            user_id=db_booking.user_id,
            status=BookingStatus(db_booking.status),
            created_at=db_booking.created_at,
            updated_at=db_booking.updated_at,
        )

    @Logger.io
    async def find_by_id(self, *, booking_id: str) -> Optional[Booking]:
        async with self._get_session() as session:
            db_booking = await session.get(BookingModel, booking_id)
            return self._to_entity(db_booking) if db_booking else None

    @Logger.io
    async def find_by_concert_and_user(self, *, concert_id: str, user_id: str) -> Optional[Booking]:
        stmt = select(BookingModel).where(
            BookingModel.concert_id == concert_id, BookingModel.user_id == user_id
        )
        if self.in_transaction:
            stmt = stmt.with_for_update()

        async with self._get_session() as session:
            db_booking = (await session.execute(stmt)).scalar_one_or_none()
            return self._to_entity(db_booking) if db_booking else None

    @Logger.io
    async def find_by_concert_id(self, *, concert_id: str) -> List[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel)
                .where(BookingModel.concert_id == concert_id)
                .order_by(BookingModel.created_at.desc())
            )
            return [self._to_entity(db_booking) for db_booking in result.scalars().all()]

    @Logger.io
    async def find_by_user_id(self, *, user_id: str) -> List[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel)
                .where(BookingModel.user_id == user_id)
                .order_by(BookingModel.created_at.desc())
            )
            return [self._to_entity(db_booking) for db_booking in result.scalars().all()]

    @Logger.io
    async def find_all(self) -> List[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel).order_by(BookingModel.created_at.desc())
            )
            return [self._to_entity(db_booking) for db_booking in result.scalars().all()]

    @staticmethod
    def _details_query() -> Select[Any]:
        # Deleted concerts keep their row, so the concert join never drops a booking
        return (
            select(BookingModel, ConcertModel.name, UserModel.username)
            .join(ConcertModel, ConcertModel.id == BookingModel.concert_id)
            .outerjoin(UserModel, UserModel.id == BookingModel.user_id)
            .order_by(BookingModel.created_at.desc())
        )

    @staticmethod
    def _to_details(
        db_booking: BookingModel, concert_name: str, username: Optional[str]
    ) -> Dict[str, Any]:
        return {
            'id': db_booking.id,
            'concert_id': db_booking.concert_id,
            'concert_name': concert_name,
            'user_id': db_booking.user_id,
            'username': username,
            'status': db_booking.status,
            'created_at': db_booking.created_at,
            'updated_at': db_booking.updated_at,
        }

    @Logger.io
    async def find_by_user_id_with_details(self, *, user_id: str) -> List[Dict[str, Any]]:
        async with self._get_session() as session:
            result = await session.execute(
                self._details_query().where(BookingModel.user_id == user_id)
            )
            return [self._to_details(*row) for row in result.all()]

    @Logger.io
    async def find_all_with_details(self) -> List[Dict[str, Any]]:
        async with self._get_session() as session:
            result = await session.execute(self._details_query())
            return [self._to_details(*row) for row in result.all()]

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        async with self._get_session() as session:
            db_booking = BookingModel(
                id=booking.id,
                concert_id=booking.concert_id,
                user_id=booking.user_id,
                status=booking.status.value,
                created_at=booking.created_at,
                updated_at=booking.updated_at,
            )
            session.add(db_booking)
            try:
                await session.flush()
            except IntegrityError as e:
                # Lost a race against another reservation by the same user
                raise ConflictError('User already has a reservation for this concert') from e
            return self._to_entity(db_booking)

    @Logger.io
    async def update(self, *, booking: Booking) -> Booking:
        async with self._get_session() as session:
            db_booking = await session.get(BookingModel, booking.id)
            if db_booking is None:
                raise NotFoundError('Booking not found')

            db_booking.status = booking.status.value
            db_booking.updated_at = booking.updated_at
            await session.flush()
            return self._to_entity(db_booking)

    @Logger.io
    async def cancel_all_by_concert_id(self, *, concert_id: str) -> int:
        async with self._get_session() as session:
            result = await session.execute(
                update(BookingModel)
                .where(
                    BookingModel.concert_id == concert_id,
                    BookingModel.status == BookingStatus.RESERVED.value,
                )
                .values(status=BookingStatus.CANCELED.value, updated_at=datetime.now(timezone.utc))
                .execution_options(synchronize_session=False)
            )
            canceled = result.rowcount or 0
            Logger.base.info(f'🧹 [BOOKING] Canceled {canceled} bookings of concert {concert_id}')
            return canceled
