from typing import Optional

from opentelemetry import trace

from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.concert_booking.app.cache_key import ALL_CONCERTS_PATTERN
from src.service.concert_booking.app.interface.i_cache import ICache
from src.service.concert_booking.app.interface.i_concert_repo import IConcertRepo
from src.service.concert_booking.domain.entity.concert_entity import Concert


class CreateConcertUseCase:
    def __init__(self, *, concert_repo: IConcertRepo, cache: ICache) -> None:
        self.concert_repo = concert_repo
        self.cache = cache
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def execute(
        self, *, name: str, total_seats: int, description: Optional[str] = None
    ) -> Concert:
        """
        Create a concert with no seats reserved.

        Raises:
            ValidationError: Blank name or non-positive seat count
        """
        with self.tracer.start_as_current_span(
            'use_case.create_concert',
            attributes={'concert.total_seats': total_seats},
        ) as span:
            name = (name or '').strip()
            if not name:
                raise ValidationError('Concert name is required')
            if total_seats <= 0:
                raise ValidationError('Total seats must be greater than 0')

            description = description.strip() if description else None
            concert = await self.concert_repo.create(
                concert=Concert.create(
                    name=name, description=description or None, total_seats=total_seats
                )
            )
            span.set_attribute('concert.id', concert.id)

            await self.cache.invalidate_pattern(ALL_CONCERTS_PATTERN)

            Logger.base.info(
                f'🎤 [CREATE_CONCERT] Created concert {concert.id} "{concert.name}" '
                f'with {concert.total_seats} seats'
            )
            return concert
