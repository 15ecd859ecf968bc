from datetime import datetime, timezone
from enum import StrEnum

import attrs
import uuid_utils

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger


class BookingStatus(StrEnum):
    RESERVED = 'RESERVED'
    CANCELED = 'CANCELED'


@attrs.frozen
class Booking:
    """
    One seat held by one user for one concert.

    The (concert_id, user_id) row is reused across cancel/re-reserve cycles,
    so `id` and `created_at` survive reactivation.
    """

    id: str
    concert_id: str
    user_id: str
    status: BookingStatus
    created_at: datetime
    updated_at: datetime

    @classmethod
    @Logger.io
    def create(cls, *, concert_id: str, user_id: str) -> 'Booking':
        now = datetime.now(timezone.utc)
        return cls(
            id=str(uuid_utils.uuid7()),
            concert_id=concert_id,
            user_id=user_id,
            status=BookingStatus.RESERVED,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_reserved(self) -> bool:
        return self.status == BookingStatus.RESERVED

    @Logger.io
    def cancel(self) -> 'Booking':
        if self.status == BookingStatus.CANCELED:
            raise DomainError('Booking already canceled')

        return attrs.evolve(
            self, status=BookingStatus.CANCELED, updated_at=datetime.now(timezone.utc)
        )

    @Logger.io
    def reactivate(self) -> 'Booking':
        if self.status == BookingStatus.RESERVED:
            raise DomainError('Booking already reserved')

        return attrs.evolve(
            self, status=BookingStatus.RESERVED, updated_at=datetime.now(timezone.utc)
        )
