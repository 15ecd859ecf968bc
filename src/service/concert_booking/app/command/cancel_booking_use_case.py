from functools import partial

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


class CancelBookingUseCase:
    """
    Cancel a user's booking for a concert and free its seat.

    The booking row is kept (status CANCELED) so a later reservation by the
    same user reactivates it.
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
        with self.tracer.start_as_current_span(
            'use_case.cancel_booking',
            attributes={'concert.id': concert_id, 'user.id': user_id},
        ):
            try:
                booking = await self.unit_of_work.execute(
                    partial(self._cancel, concert_id=concert_id, user_id=user_id)
                )
            except Exception as e:
                metrics.record_booking_cancellation(result=outcome_of(e))
                raise

            metrics.record_booking_cancellation(result='success')

            await self.cache.invalidate_pattern(concert_pattern(concert_id))
            await self.cache.invalidate_pattern(ALL_CONCERTS_PATTERN)

            Logger.base.info(
                f'🔓 [CANCEL] User {user_id} canceled booking {booking.id} for concert {concert_id}'
            )
            return booking

    async def _cancel(self, *, concert_id: str, user_id: str) -> Booking:
        booking = await self.booking_repo.find_by_concert_and_user(
            concert_id=concert_id, user_id=user_id
        )
        if booking is None:
            raise NotFoundError('Booking not found')
        if not booking.is_reserved:
            raise ConflictError('Booking already canceled')

        concert = await self.concert_repo.find_by_id(concert_id=concert_id)
        if concert is None:
            raise NotFoundError('Concert not found')

        canceled_booking = booking.cancel()
        released_concert = concert.cancel_reservation()

        canceled_booking = await self.booking_repo.update(booking=canceled_booking)
        await self.concert_repo.update(concert=released_concert)
        return canceled_booking
