from typing import List

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.concert_booking.app.service.booking_service import BookingService
from src.service.concert_booking.app.service.concert_service import ConcertService
from src.service.concert_booking.domain.entity.user_entity import User
from src.service.concert_booking.driving_adapter.http_controller.auth.role_auth import (
    RoleAuthStrategy,
    require_admin,
    require_admin_or_user,
    require_user,
)
from src.service.concert_booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingResponse,
)
from src.service.concert_booking.driving_adapter.http_controller.schema.concert_schema import (
    ConcertCreateRequest,
    ConcertResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get('', response_model=List[ConcertResponse])
@Logger.io
@inject
async def list_concerts(
    current_user: User = Depends(require_admin_or_user),
    concert_service: ConcertService = Depends(Provide[Container.concert_service]),
    booking_service: BookingService = Depends(Provide[Container.booking_service]),
) -> List[ConcertResponse]:
    """List concerts; USER callers also see whether they hold a seat in each."""
    concerts = await concert_service.get_all_concerts()
    if not RoleAuthStrategy.is_user(current_user):
        return [ConcertResponse.from_entity(concert) for concert in concerts]

    bookings = await booking_service.get_user_bookings(current_user.id)
    reserved = {booking.concert_id: booking.id for booking in bookings if booking.is_reserved}
    return [
        ConcertResponse.from_entity(
            concert,
            is_reserved=concert.id in reserved,
            booking_id=reserved.get(concert.id),
        )
        for concert in concerts
    ]


@router.get('/{concert_id}', response_model=ConcertResponse)
@Logger.io
@inject
async def get_concert(
    concert_id: str,
    current_user: User = Depends(require_admin_or_user),
    concert_service: ConcertService = Depends(Provide[Container.concert_service]),
    booking_service: BookingService = Depends(Provide[Container.booking_service]),
) -> ConcertResponse:
    concert = await concert_service.get_concert_by_id(concert_id)
    if concert is None:
        raise NotFoundError('Concert not found')

    if not RoleAuthStrategy.is_user(current_user):
        return ConcertResponse.from_entity(concert)

    booking = await booking_service.get_user_booking_for_concert(
        concert_id=concert_id, user_id=current_user.id
    )
    is_reserved = booking is not None and booking.is_reserved
    return ConcertResponse.from_entity(
        concert, is_reserved=is_reserved, booking_id=booking.id if is_reserved else None
    )


@router.post('', response_model=ConcertResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
@inject
async def create_concert(
    request: ConcertCreateRequest,
    current_user: User = Depends(require_admin),
    concert_service: ConcertService = Depends(Provide[Container.concert_service]),
) -> ConcertResponse:
    concert = await concert_service.create_concert(
        name=request.name,
        description=request.description,
        total_seats=request.total_seats,
    )
    return ConcertResponse.from_entity(concert)


@router.delete('/{concert_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
@inject
async def delete_concert(
    concert_id: str,
    current_user: User = Depends(require_admin),
    concert_service: ConcertService = Depends(Provide[Container.concert_service]),
) -> None:
    await concert_service.delete_concert(concert_id)


@router.post(
    '/{concert_id}/reserve', response_model=BookingResponse, status_code=status.HTTP_201_CREATED
)
@Logger.io
@inject
async def reserve_seat(
    concert_id: str,
    current_user: User = Depends(require_user),
    concert_service: ConcertService = Depends(Provide[Container.concert_service]),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.reserve_seat') as span:
        span.set_attribute('concert.id', concert_id)
        span.set_attribute('user.id', current_user.id)

        booking = await concert_service.reserve_seat(
            concert_id=concert_id, user_id=current_user.id
        )
        return BookingResponse.from_entity(booking)


@router.post('/{concert_id}/cancel', response_model=BookingResponse)
@Logger.io
@inject
async def cancel_reservation(
    concert_id: str,
    current_user: User = Depends(require_user),
    concert_service: ConcertService = Depends(Provide[Container.concert_service]),
) -> BookingResponse:
    booking = await concert_service.cancel_reservation(
        concert_id=concert_id, user_id=current_user.id
    )
    return BookingResponse.from_entity(booking)
