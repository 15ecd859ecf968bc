"""
Concert service façade

Adds the read-through cache in front of concert queries and routes mutations
to the use cases. Cached values are `Concert.to_dict()` payloads; a payload
that cannot be decoded is treated as a miss.
"""

from typing import Any, List, Optional

from opentelemetry import trace

from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.concert_booking.app.cache_key import (
    ALL_CONCERTS_KEY,
    ALL_CONCERTS_PATTERN,
    concert_key,
    concert_pattern,
)
from src.service.concert_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.concert_booking.app.command.create_concert_use_case import CreateConcertUseCase
from src.service.concert_booking.app.command.reserve_seat_use_case import ReserveSeatUseCase
from src.service.concert_booking.app.interface.i_booking_repo import IBookingRepo
from src.service.concert_booking.app.interface.i_cache import ICache
from src.service.concert_booking.app.interface.i_concert_repo import IConcertRepo
from src.service.concert_booking.app.interface.i_unit_of_work import IUnitOfWork
from src.service.concert_booking.domain.entity.booking_entity import Booking
from src.service.concert_booking.domain.entity.concert_entity import Concert


DEFAULT_CACHE_TTL_SECONDS = 300


class ConcertService:
    def __init__(
        self,
        *,
        concert_repo: IConcertRepo,
        booking_repo: IBookingRepo,
        unit_of_work: IUnitOfWork,
        cache: ICache,
        create_concert_use_case: CreateConcertUseCase,
        reserve_seat_use_case: ReserveSeatUseCase,
        cancel_booking_use_case: CancelBookingUseCase,
        cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
    ) -> None:
        self.concert_repo = concert_repo
        self.booking_repo = booking_repo
        self.unit_of_work = unit_of_work
        self.cache = cache
        self.create_concert_use_case = create_concert_use_case
        self.reserve_seat_use_case = reserve_seat_use_case
        self.cancel_booking_use_case = cancel_booking_use_case
        self.cache_ttl_seconds = cache_ttl_seconds
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def get_all_concerts(self) -> List[Concert]:
        with self.tracer.start_as_current_span('service.get_all_concerts') as span:
            cached = await self.cache.get(ALL_CONCERTS_KEY)
            if cached is not None and (concerts := self._decode_list(cached)) is not None:
                metrics.record_cache_lookup(key_type='list', hit=True)
                span.set_attribute('cache.hit', True)
                return concerts

            metrics.record_cache_lookup(key_type='list', hit=False)
            span.set_attribute('cache.hit', False)

            concerts = await self.concert_repo.find_all()
            await self.cache.set(
                ALL_CONCERTS_KEY,
                [concert.to_dict() for concert in concerts],
                self.cache_ttl_seconds,
            )
            return concerts

    @Logger.io
    async def get_concert_by_id(self, concert_id: str) -> Optional[Concert]:
        """Concert by id, or None when it does not exist or is soft-deleted"""
        with self.tracer.start_as_current_span(
            'service.get_concert_by_id', attributes={'concert.id': concert_id}
        ) as span:
            key = concert_key(concert_id)
            cached = await self.cache.get(key)
            if cached is not None and (concert := self._decode_one(cached)) is not None:
                metrics.record_cache_lookup(key_type='item', hit=True)
                span.set_attribute('cache.hit', True)
                return concert

            metrics.record_cache_lookup(key_type='item', hit=False)
            span.set_attribute('cache.hit', False)

            concert = await self.concert_repo.find_by_id(concert_id=concert_id)
            if concert is not None:
                await self.cache.set(key, concert.to_dict(), self.cache_ttl_seconds)
            return concert

    async def create_concert(
        self, *, name: str, total_seats: int, description: Optional[str] = None
    ) -> Concert:
        return await self.create_concert_use_case.execute(
            name=name, total_seats=total_seats, description=description
        )

    async def reserve_seat(self, *, concert_id: str, user_id: str) -> Booking:
        return await self.reserve_seat_use_case.execute(concert_id=concert_id, user_id=user_id)

    async def cancel_reservation(self, *, concert_id: str, user_id: str) -> Booking:
        return await self.cancel_booking_use_case.execute(concert_id=concert_id, user_id=user_id)

    @Logger.io
    async def delete_concert(self, concert_id: str) -> None:
        """
        Cancel every RESERVED booking of the concert, then soft-delete it.

        The concert row is locked first and held until commit, so a reservation
        either commits before the bulk cancel sees it or finds the concert gone.
        A deleted concert never keeps a RESERVED booking.

        Raises:
            NotFoundError: The concert does not exist
            DomainError: The concert is already deleted
        """
        with self.tracer.start_as_current_span(
            'service.delete_concert', attributes={'concert.id': concert_id}
        ) as span:

            async def _delete() -> int:
                if await self.concert_repo.lock_by_id(concert_id=concert_id) is None:
                    raise NotFoundError('Concert not found')
                canceled = await self.booking_repo.cancel_all_by_concert_id(concert_id=concert_id)
                await self.concert_repo.delete(concert_id=concert_id)
                return canceled

            canceled_count = await self.unit_of_work.execute(_delete)
            span.set_attribute('booking.canceled_count', canceled_count)
            metrics.record_concert_deleted(canceled_bookings=canceled_count)

            await self.cache.invalidate_pattern(concert_pattern(concert_id))
            await self.cache.invalidate_pattern(ALL_CONCERTS_PATTERN)

            Logger.base.info(
                f'🗑️ [DELETE_CONCERT] Deleted concert {concert_id}, '
                f'canceled {canceled_count} bookings'
            )

    @staticmethod
    def _decode_one(payload: Any) -> Optional[Concert]:
        try:
            return Concert.from_dict(payload)
        except (KeyError, TypeError, ValueError, DomainError) as e:
            Logger.base.warning(f'⚠️ [CACHE] Ignoring undecodable concert payload: {e}')
            return None

    @classmethod
    def _decode_list(cls, payload: Any) -> Optional[List[Concert]]:
        if not isinstance(payload, list):
            Logger.base.warning('⚠️ [CACHE] Ignoring concert list payload that is not a list')
            return None
        concerts = []
        for item in payload:
            if (concert := cls._decode_one(item)) is None:
                return None
            concerts.append(concert)
        return concerts
