"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings, settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.concert_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.concert_booking.app.command.create_concert_use_case import CreateConcertUseCase
from src.service.concert_booking.app.command.reserve_seat_use_case import ReserveSeatUseCase
from src.service.concert_booking.app.service.booking_service import BookingService
from src.service.concert_booking.app.service.concert_service import ConcertService
from src.service.concert_booking.driven_adapter.cache.in_memory_cache_impl import (
    InMemoryCacheImpl,
)
from src.service.concert_booking.driven_adapter.cache.redis_cache_impl import RedisCacheImpl
from src.service.concert_booking.driven_adapter.repo.booking_repo_impl import BookingRepoImpl
from src.service.concert_booking.driven_adapter.repo.concert_repo_impl import ConcertRepoImpl
from src.service.concert_booking.driven_adapter.repo.user_repo_impl import UserRepoImpl


def _cache_backend() -> str:
    return settings.CACHE_BACKEND


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (event-loop-aware engine behind Database.new_session)
    database = providers.Singleton(Database)

    # Repositories (stateless - join the active unit of work or open their own session)
    concert_repo = providers.Singleton(
        ConcertRepoImpl, session_factory=database.provided.new_session
    )
    booking_repo = providers.Singleton(
        BookingRepoImpl, session_factory=database.provided.new_session
    )
    user_repo = providers.Singleton(UserRepoImpl, session_factory=database.provided.new_session)

    # Unit of work (per-task session, safe to share)
    unit_of_work = providers.Singleton(
        SqlAlchemyUnitOfWork, session_factory=database.provided.new_session
    )

    # Read-through cache, selected by CACHE_BACKEND
    cache = providers.Selector(
        _cache_backend,
        redis=providers.Singleton(RedisCacheImpl),
        memory=providers.Singleton(InMemoryCacheImpl),
    )

    # Use cases
    create_concert_use_case = providers.Singleton(
        CreateConcertUseCase, concert_repo=concert_repo, cache=cache
    )
    reserve_seat_use_case = providers.Singleton(
        ReserveSeatUseCase,
        concert_repo=concert_repo,
        booking_repo=booking_repo,
        unit_of_work=unit_of_work,
        cache=cache,
    )
    cancel_booking_use_case = providers.Singleton(
        CancelBookingUseCase,
        concert_repo=concert_repo,
        booking_repo=booking_repo,
        unit_of_work=unit_of_work,
        cache=cache,
    )

    # Services
    concert_service = providers.Singleton(
        ConcertService,
        concert_repo=concert_repo,
        booking_repo=booking_repo,
        unit_of_work=unit_of_work,
        cache=cache,
        create_concert_use_case=create_concert_use_case,
        reserve_seat_use_case=reserve_seat_use_case,
        cancel_booking_use_case=cancel_booking_use_case,
        cache_ttl_seconds=config_service.provided.CACHE_TTL_SECONDS,
    )
    booking_service = providers.Singleton(BookingService, booking_repo=booking_repo)


container = Container()


def cleanup() -> None:
    container.reset_singletons()
