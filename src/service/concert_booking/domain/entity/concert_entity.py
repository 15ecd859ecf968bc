from datetime import datetime, timezone
from typing import Any, Optional

import attrs
import uuid_utils

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


@attrs.frozen
class Concert:
    """
    Concert with a fixed seat capacity.

    Instances never change in place: every transition returns a new Concert
    with a bumped `updated_at`. `total_seats` is fixed at creation.
    """

    id: str
    name: str
    total_seats: int
    reserved_seats: int
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    deleted_at: Optional[datetime] = None

    def __attrs_post_init__(self) -> None:
        if not 0 <= self.reserved_seats <= self.total_seats:
            raise DomainError(
                f'Reserved seats must be between 0 and {self.total_seats}, '
                f'got {self.reserved_seats}'
            )

    @classmethod
    @Logger.io
    def create(cls, *, name: str, description: Optional[str], total_seats: int) -> 'Concert':
        now = datetime.now(timezone.utc)
        return cls(
            id=str(uuid_utils.uuid7()),
            name=name,
            description=description,
            total_seats=total_seats,
            reserved_seats=0,
            created_at=now,
            updated_at=now,
        )

    @property
    def available_seats(self) -> int:
        return self.total_seats - self.reserved_seats

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def can_reserve(self) -> bool:
        return not self.is_deleted and self.reserved_seats < self.total_seats

    @Logger.io
    def reserve_seat(self) -> 'Concert':
        if not self.can_reserve():
            raise DomainError('No available seats')

        return attrs.evolve(
            self, reserved_seats=self.reserved_seats + 1, updated_at=datetime.now(timezone.utc)
        )

    @Logger.io
    def cancel_reservation(self) -> 'Concert':
        if self.reserved_seats <= 0:
            raise DomainError('No reserved seats to cancel')

        return attrs.evolve(
            self, reserved_seats=self.reserved_seats - 1, updated_at=datetime.now(timezone.utc)
        )

    @Logger.io
    def soft_delete(self) -> 'Concert':
        if self.is_deleted:
            raise DomainError('Concert already deleted')

        now = datetime.now(timezone.utc)
        return attrs.evolve(self, deleted_at=now, updated_at=now)

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe representation used by the read-through cache"""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'total_seats': self.total_seats,
            'reserved_seats': self.reserved_seats,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
            'deleted_at': self.deleted_at.isoformat() if self.deleted_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Concert':
        return cls(
            id=data['id'],
            name=data['name'],
            description=data.get('description'),
            total_seats=data['total_seats'],
            reserved_seats=data['reserved_seats'],
            created_at=datetime.fromisoformat(data['created_at']),
            updated_at=datetime.fromisoformat(data['updated_at']),
            deleted_at=_parse_datetime(data.get('deleted_at')),
        )
