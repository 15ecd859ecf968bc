from typing import Any, Dict, List

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.concert_booking.app.service.booking_service import BookingService
from src.service.concert_booking.domain.entity.user_entity import User
from src.service.concert_booking.driving_adapter.http_controller.auth.role_auth import (
    require_admin,
    require_user,
)
from src.service.concert_booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingWithDetailsResponse,
)


router = APIRouter()


@router.get('/me', response_model=List[BookingWithDetailsResponse])
@Logger.io
@inject
async def list_my_bookings(
    current_user: User = Depends(require_user),
    booking_service: BookingService = Depends(Provide[Container.booking_service]),
) -> List[Dict[str, Any]]:
    return await booking_service.get_user_bookings_with_details(current_user.id)


@router.get('', response_model=List[BookingWithDetailsResponse])
@Logger.io
@inject
async def list_all_bookings(
    current_user: User = Depends(require_admin),
    booking_service: BookingService = Depends(Provide[Container.booking_service]),
) -> List[Dict[str, Any]]:
    return await booking_service.get_all_bookings_with_details()
