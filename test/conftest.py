"""
Test Configuration and Fixtures

This module provides:
- Environment setup before any application module reads settings
- In-memory collaborators for unit tests (test/service/concert_booking/fakes.py)
- SQLite engine and repositories for integration tests

Architecture:
- Unit tests (test/**/unit/): In-memory fakes, no database or Redis
- Integration tests (test/**/integration/): Real SQLAlchemy on aiosqlite
- API tests (test/**/api/): FastAPI TestClient with DI overrides
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and the loguru sinks are configured at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    os.environ['CACHE_BACKEND'] = 'memory'
    os.environ['REDIS_KEY_PREFIX'] = 'test_'
    os.environ.setdefault('DEPLOY_ENV', 'test')

    # Create test log directory
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from src.platform.database.orm_db_setting import create_db_and_tables  # noqa: E402
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork  # noqa: E402
from src.service.concert_booking.driven_adapter.repo.booking_repo_impl import (  # noqa: E402
    BookingRepoImpl,
)
from src.service.concert_booking.driven_adapter.repo.concert_repo_impl import (  # noqa: E402
    ConcertRepoImpl,
)
from src.service.concert_booking.driven_adapter.repo.user_repo_impl import (  # noqa: E402
    UserRepoImpl,
)
from test.service.concert_booking.fakes import FakeDatabase  # noqa: E402


# =============================================================================
# Unit test fixtures
# =============================================================================
@pytest.fixture
def fake_db() -> FakeDatabase:
    """Shared in-memory store behind the fake repositories and unit of work"""
    return FakeDatabase()


# =============================================================================
# Integration test fixtures (SQLite in memory)
# =============================================================================
@pytest.fixture
async def sqlite_engine() -> AsyncGenerator[AsyncEngine, None]:
    # StaticPool keeps the single in-memory database alive across sessions
    engine = create_async_engine(
        'sqlite+aiosqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    await create_db_and_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(sqlite_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(sqlite_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def concert_repo(session_maker: async_sessionmaker[AsyncSession]) -> ConcertRepoImpl:
    return ConcertRepoImpl(session_factory=session_maker)


@pytest.fixture
def booking_repo(session_maker: async_sessionmaker[AsyncSession]) -> BookingRepoImpl:
    return BookingRepoImpl(session_factory=session_maker)


@pytest.fixture
def user_repo(session_maker: async_sessionmaker[AsyncSession]) -> UserRepoImpl:
    return UserRepoImpl(session_factory=session_maker)


@pytest.fixture
def unit_of_work(session_maker: async_sessionmaker[AsyncSession]) -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory=session_maker)
