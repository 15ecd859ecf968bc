from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from src.service.concert_booking.domain.entity.concert_entity import Concert


class ConcertCreateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'name': 'Taylor Swift Concert',
                'description': 'The Eras Tour',
                'total_seats': 3000,
            }
        }
    )

    name: str
    description: Optional[str] = None
    total_seats: int


class ConcertResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'id': '01936b1e-7c3a-7d2f-9a41-5f3c2b1a0e9d',
                'name': 'Taylor Swift Concert',
                'description': 'The Eras Tour',
                'total_seats': 3000,
                'reserved_seats': 120,
                'available_seats': 2880,
                'created_at': '2025-01-10T10:30:00Z',
                'updated_at': '2025-01-10T10:30:00Z',
                'is_reserved': True,
                'booking_id': '01936b1f-0a11-7c52-8e0b-3d7a6f4c2e10',
            }
        }
    )

    id: str
    name: str
    description: Optional[str] = None
    total_seats: int
    reserved_seats: int
    available_seats: int
    created_at: datetime
    updated_at: datetime
    # Only filled for USER callers
    is_reserved: Optional[bool] = None
    booking_id: Optional[str] = None

    @classmethod
    def from_entity(
        cls,
        concert: Concert,
        *,
        is_reserved: Optional[bool] = None,
        booking_id: Optional[str] = None,
    ) -> 'ConcertResponse':
        return cls(
            id=concert.id,
            name=concert.name,
            description=concert.description,
            total_seats=concert.total_seats,
            reserved_seats=concert.reserved_seats,
            available_seats=concert.available_seats,
            created_at=concert.created_at,
            updated_at=concert.updated_at,
            is_reserved=is_reserved,
            booking_id=booking_id,
        )
