"""
API test fixtures

The app is built with a no-op lifespan (no database, no Redis) and the DI
container's services are overridden with ones backed by FakeDatabase.
"""

from collections.abc import AsyncIterator, Generator
from contextlib import asynccontextmanager

from dependency_injector import providers
from fastapi import FastAPI
from fastapi.testclient import TestClient
import pytest

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.service.concert_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.concert_booking.app.command.create_concert_use_case import CreateConcertUseCase
from src.service.concert_booking.app.command.reserve_seat_use_case import ReserveSeatUseCase
from src.service.concert_booking.app.service.booking_service import BookingService
from src.service.concert_booking.app.service.concert_service import ConcertService
from src.service.concert_booking.domain.entity.user_entity import User, UserRole
from src.service.concert_booking.driven_adapter.cache.in_memory_cache_impl import (
    InMemoryCacheImpl,
)
from test.service.concert_booking.fakes import (
    FakeBookingRepo,
    FakeConcertRepo,
    FakeDatabase,
    FakeUnitOfWork,
    FakeUserRepo,
)


@asynccontextmanager
async def _noop_lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield


@pytest.fixture
def client(fake_db: FakeDatabase) -> Generator[TestClient, None, None]:
    concert_repo = FakeConcertRepo(fake_db)
    booking_repo = FakeBookingRepo(fake_db)
    unit_of_work = FakeUnitOfWork(fake_db)
    cache = InMemoryCacheImpl()
    concert_service = ConcertService(
        concert_repo=concert_repo,
        booking_repo=booking_repo,
        unit_of_work=unit_of_work,
        cache=cache,
        create_concert_use_case=CreateConcertUseCase(concert_repo=concert_repo, cache=cache),
        reserve_seat_use_case=ReserveSeatUseCase(
            concert_repo=concert_repo,
            booking_repo=booking_repo,
            unit_of_work=unit_of_work,
            cache=cache,
        ),
        cancel_booking_use_case=CancelBookingUseCase(
            concert_repo=concert_repo,
            booking_repo=booking_repo,
            unit_of_work=unit_of_work,
            cache=cache,
        ),
    )

    container.wire(modules=WIRE_MODULES)
    container.concert_service.override(providers.Object(concert_service))
    container.booking_service.override(
        providers.Object(BookingService(booking_repo=booking_repo))
    )
    container.user_repo.override(providers.Object(FakeUserRepo(fake_db)))

    app = create_app(lifespan=_noop_lifespan, title_suffix=' (Test)')
    yield TestClient(app)

    container.concert_service.reset_override()
    container.booking_service.reset_override()
    container.user_repo.reset_override()
    container.unwire()


@pytest.fixture
def admin(fake_db: FakeDatabase) -> User:
    return fake_db.add_user(username='admin', role=UserRole.ADMIN)


@pytest.fixture
def user(fake_db: FakeDatabase) -> User:
    return fake_db.add_user(username='user', role=UserRole.USER)


@pytest.fixture
def other_user(fake_db: FakeDatabase) -> User:
    return fake_db.add_user(username='other', role=UserRole.USER)
