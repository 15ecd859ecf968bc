from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.concert_booking.domain.entity.concert_entity import Concert


class IConcertRepo(ABC):
    """
    Concert persistence port.

    Reads exclude soft-deleted concerts. Inside a unit of work, `find_by_id`
    locks the row until the transaction ends.
    """

    @abstractmethod
    async def find_by_id(self, *, concert_id: str) -> Optional[Concert]:
        pass

    @abstractmethod
    async def lock_by_id(self, *, concert_id: str) -> Optional[Concert]:
        """
        Lock the concert row until the unit of work ends and return it, deleted or not.

        Used before bulk changes to the concert's bookings, so no reservation can
        commit in between.
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[Concert]:
        """Non-deleted concerts, newest first"""
        pass

    @abstractmethod
    async def create(self, *, concert: Concert) -> Concert:
        pass

    @abstractmethod
    async def update(self, *, concert: Concert) -> Concert:
        pass

    @abstractmethod
    async def delete(self, *, concert_id: str) -> None:
        """
        Soft-delete a concert by setting `deleted_at`.

        Raises:
            NotFoundError: The concert does not exist
            DomainError: The concert is already deleted
        """
        pass
