from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from src.service.concert_booking.domain.entity.booking_entity import Booking


class IBookingRepo(ABC):
    @abstractmethod
    async def find_by_id(self, *, booking_id: str) -> Optional[Booking]:
        pass

    @abstractmethod
    async def find_by_concert_and_user(self, *, concert_id: str, user_id: str) -> Optional[Booking]:
        """Locks the row when called inside a unit of work"""
        pass

    @abstractmethod
    async def find_by_concert_id(self, *, concert_id: str) -> List[Booking]:
        pass

    @abstractmethod
    async def find_by_user_id(self, *, user_id: str) -> List[Booking]:
        """Newest first"""
        pass

    @abstractmethod
    async def find_all(self) -> List[Booking]:
        """Newest first"""
        pass

    @abstractmethod
    async def find_by_user_id_with_details(self, *, user_id: str) -> List[Dict[str, Any]]:
        """Like `find_by_user_id`, each row also carrying `concert_name` and `username`"""
        pass

    @abstractmethod
    async def find_all_with_details(self) -> List[Dict[str, Any]]:
        """Like `find_all`, each row also carrying `concert_name` and `username`"""
        pass

    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """
        Raises:
            ConflictError: A booking already exists for (concert_id, user_id)
        """
        pass

    @abstractmethod
    async def update(self, *, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def cancel_all_by_concert_id(self, *, concert_id: str) -> int:
        """
        Move every RESERVED booking of a concert to CANCELED in one statement.

        Bypasses `Booking.cancel()`; CANCELED rows are left untouched.

        Returns:
            Number of bookings canceled
        """
        pass
