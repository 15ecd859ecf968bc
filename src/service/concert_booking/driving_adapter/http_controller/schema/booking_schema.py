from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from src.service.concert_booking.domain.entity.booking_entity import Booking


class BookingResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'id': '01936b1f-0a11-7c52-8e0b-3d7a6f4c2e10',
                'concert_id': '01936b1e-7c3a-7d2f-9a41-5f3c2b1a0e9d',
                'user_id': '01936b1d-55e0-7a8b-b1c2-6d9e8f7a6b5c',
                'status': 'RESERVED',
                'created_at': '2025-01-10T10:35:00Z',
                'updated_at': '2025-01-10T10:35:00Z',
            }
        }
    )

    id: str
    concert_id: str
    user_id: str
    status: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, booking: Booking) -> 'BookingResponse':
        return cls(
            id=booking.id,
            concert_id=booking.concert_id,
            user_id=booking.user_id,
            status=booking.status.value,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


class BookingWithDetailsResponse(BookingResponse):
    """Booking listing row with the concert and booker names joined in"""

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'id': '01936b1f-0a11-7c52-8e0b-3d7a6f4c2e10',
                'concert_id': '01936b1e-7c3a-7d2f-9a41-5f3c2b1a0e9d',
                'concert_name': 'Taylor Swift Concert',
                'user_id': '01936b1d-55e0-7a8b-b1c2-6d9e8f7a6b5c',
                'username': 'somchai',
                'status': 'RESERVED',
                'created_at': '2025-01-10T10:35:00Z',
                'updated_at': '2025-01-10T10:35:00Z',
            }
        }
    )

    concert_name: str
    username: Optional[str] = None
