from typing import Any, Dict, List, Optional

from src.platform.logging.loguru_io import Logger
from src.service.concert_booking.app.interface.i_booking_repo import IBookingRepo
from src.service.concert_booking.domain.entity.booking_entity import Booking


class BookingService:
    """Read-side queries over bookings"""

    def __init__(self, *, booking_repo: IBookingRepo) -> None:
        self.booking_repo = booking_repo

    @Logger.io
    async def get_user_bookings(self, user_id: str) -> List[Booking]:
        return await self.booking_repo.find_by_user_id(user_id=user_id)

    @Logger.io
    async def get_user_bookings_with_details(self, user_id: str) -> List[Dict[str, Any]]:
        Logger.base.info(f'📋 [LIST_BOOKINGS] Loading bookings for user {user_id}')
        return await self.booking_repo.find_by_user_id_with_details(user_id=user_id)

    @Logger.io
    async def get_all_bookings_with_details(self) -> List[Dict[str, Any]]:
        Logger.base.info('📋 [LIST_BOOKINGS] Loading all bookings')
        return await self.booking_repo.find_all_with_details()

    @Logger.io
    async def get_user_booking_for_concert(
        self, *, concert_id: str, user_id: str
    ) -> Optional[Booking]:
        return await self.booking_repo.find_by_concert_and_user(
            concert_id=concert_id, user_id=user_id
        )
