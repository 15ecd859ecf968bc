"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.concert_booking.driven_adapter.model.booking_model import BookingModel
from src.service.concert_booking.driven_adapter.model.concert_model import ConcertModel
from src.service.concert_booking.driven_adapter.model.user_model import UserModel

__all__ = [
    'BookingModel',
    'ConcertModel',
    'UserModel',
]
