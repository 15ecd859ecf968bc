from functools import partial
import time

from opentelemetry import trace

from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics, outcome_of
from src.service.concert_booking.app.cache_key import ALL_CONCERTS_PATTERN, concert_pattern
from src.service.concert_booking.app.interface.i_booking_repo import IBookingRepo
from src.service.concert_booking.app.interface.i_cache import ICache
from src.service.concert_booking.app.interface.i_concert_repo import IConcertRepo
from src.service.concert_booking.app.interface.i_unit_of_work import IUnitOfWork
from src.service.concert_booking.domain.entity.booking_entity import Booking


class ReserveSeatUseCase:
    """
    Reserve one seat of a concert for a user.

    Flow (single transaction):
    1. Reject if the user already holds a RESERVED booking for the concert
    2. Load the concert (row locked) and reject if it cannot take another seat
    3. Increment reserved seats
    4. Reactivate the user's CANCELED booking, or create a new one
    After commit, invalidate the concert's cache entries and the concert list.

    The duplicate-reservation check runs before the capacity check, so a user
    holding a seat of a full concert gets "already has a reservation".
    """

    def __init__(
        self,
        *,
        concert_repo: IConcertRepo,
        booking_repo: IBookingRepo,
        unit_of_work: IUnitOfWork,
        cache: ICache,
    ) -> None:
        self.concert_repo = concert_repo
        self.booking_repo = booking_repo
        self.unit_of_work = unit_of_work
        self.cache = cache
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def execute(self, *, concert_id: str, user_id: str) -> Booking:
        start_time = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.reserve_seat',
            attributes={'concert.id': concert_id, 'user.id': user_id},
        ) as span:
            try:
                booking = await self.unit_of_work.execute(
                    partial(self._reserve, concert_id=concert_id, user_id=user_id)
                )
            except Exception as e:
                metrics.record_seat_reservation(
                    result=outcome_of(e), duration=time.perf_counter() - start_time
                )
                raise

            metrics.record_seat_reservation(
                result='success', duration=time.perf_counter() - start_time
            )
            span.set_attribute('booking.id', booking.id)

            await self.cache.invalidate_pattern(concert_pattern(concert_id))
            await self.cache.invalidate_pattern(ALL_CONCERTS_PATTERN)

            Logger.base.info(
                f'🎫 [RESERVE] User {user_id} holds booking {booking.id} for concert {concert_id}'
            )
            return booking

    async def _reserve(self, *, concert_id: str, user_id: str) -> Booking:
        existing = await self.booking_repo.find_by_concert_and_user(
            concert_id=concert_id, user_id=user_id
        )
        if existing is not None and existing.is_reserved:
            raise ConflictError('User already has a reservation for this concert')

        concert = await self.concert_repo.find_by_id(concert_id=concert_id)
        if concert is None:
            raise NotFoundError('Concert not found')
        if not concert.can_reserve():
            raise ConflictError('Concert is fully booked')

        await self.concert_repo.update(concert=concert.reserve_seat())

        if existing is not None:
            Logger.base.info(f'♻️ [RESERVE] Reactivating canceled booking {existing.id}')
            return await self.booking_repo.update(booking=existing.reactivate())

        return await self.booking_repo.create(
            booking=Booking.create(concert_id=concert_id, user_id=user_id)
        )
