"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.concert_booking.driving_adapter.http_controller import (
    booking_controller,
    concert_controller,
)
from src.service.concert_booking.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    concert_controller,
    booking_controller,
    role_auth,
]
