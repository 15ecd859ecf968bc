"""
Unit tests for CancelBookingUseCase
"""

from unittest.mock import AsyncMock, call

import pytest

from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.service.concert_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.concert_booking.app.interface.i_cache import ICache
from src.service.concert_booking.domain.entity.booking_entity import BookingStatus
from test.service.concert_booking.fakes import (
    FakeBookingRepo,
    FakeConcertRepo,
    FakeDatabase,
    FakeUnitOfWork,
)


@pytest.fixture
def cache() -> AsyncMock:
    return AsyncMock(spec=ICache)


@pytest.fixture
def use_case(fake_db: FakeDatabase, cache: AsyncMock) -> CancelBookingUseCase:
    return CancelBookingUseCase(
        concert_repo=FakeConcertRepo(fake_db),
        booking_repo=FakeBookingRepo(fake_db),
        unit_of_work=FakeUnitOfWork(fake_db),
        cache=cache,
    )


@pytest.mark.unit
class TestCancelBookingUseCase:
    async def test_cancel_frees_the_seat(
        self, use_case: CancelBookingUseCase, fake_db: FakeDatabase, cache: AsyncMock
    ) -> None:
        """
        Given: A user holding a seat of a concert with 3 reserved seats
        When: The user cancels
        Then: The booking is CANCELED, 2 seats stay reserved, both caches are invalidated
        """
        # Arrange
        concert = fake_db.add_concert(total_seats=5, reserved_seats=3)
        booking = fake_db.add_booking(concert_id=concert.id, user_id='u-1')

        # Act
        canceled = await use_case.execute(concert_id=concert.id, user_id='u-1')

        # Assert
        assert canceled.id == booking.id
        assert canceled.status == BookingStatus.CANCELED
        assert canceled.created_at == booking.created_at
        assert fake_db.bookings[booking.id].status == BookingStatus.CANCELED
        assert fake_db.concerts[concert.id].reserved_seats == 2
        assert cache.invalidate_pattern.await_args_list == [
            call(f'concert:{concert.id}*'),
            call('concerts:*'),
        ]

    async def test_missing_booking_is_not_found(
        self, use_case: CancelBookingUseCase, fake_db: FakeDatabase, cache: AsyncMock
    ) -> None:
        concert = fake_db.add_concert(reserved_seats=1)

        with pytest.raises(NotFoundError, match='Booking not found'):
            await use_case.execute(concert_id=concert.id, user_id='u-1')

        cache.invalidate_pattern.assert_not_awaited()

    async def test_already_canceled_booking_is_a_conflict(
        self, use_case: CancelBookingUseCase, fake_db: FakeDatabase
    ) -> None:
        # Arrange
        concert = fake_db.add_concert(reserved_seats=1)
        fake_db.add_booking(concert_id=concert.id, user_id='u-1', status=BookingStatus.CANCELED)

        # Act & Assert
        with pytest.raises(ConflictError, match='Booking already canceled'):
            await use_case.execute(concert_id=concert.id, user_id='u-1')

        assert fake_db.concerts[concert.id].reserved_seats == 1

    async def test_booking_of_deleted_concert_reports_concert_not_found(
        self, use_case: CancelBookingUseCase, fake_db: FakeDatabase
    ) -> None:
        """
        Given: A RESERVED booking whose concert is soft-deleted
        When: The user cancels
        Then: "Concert not found" and the booking stays RESERVED
        """
        # Arrange
        concert = fake_db.add_concert(reserved_seats=1, deleted=True)
        booking = fake_db.add_booking(concert_id=concert.id, user_id='u-1')

        # Act & Assert
        with pytest.raises(NotFoundError, match='Concert not found'):
            await use_case.execute(concert_id=concert.id, user_id='u-1')

        assert fake_db.bookings[booking.id].status == BookingStatus.RESERVED

    async def test_failed_concert_write_rolls_back_booking_cancel(
        self, fake_db: FakeDatabase, cache: AsyncMock
    ) -> None:
        # Arrange
        concert = fake_db.add_concert(reserved_seats=1)
        booking = fake_db.add_booking(concert_id=concert.id, user_id='u-1')
        concert_repo = FakeConcertRepo(fake_db)
        concert_repo.update = AsyncMock(side_effect=RuntimeError('deadlock detected'))  # type: ignore[method-assign]
        use_case = CancelBookingUseCase(
            concert_repo=concert_repo,
            booking_repo=FakeBookingRepo(fake_db),
            unit_of_work=FakeUnitOfWork(fake_db),
            cache=cache,
        )

        # Act
        with pytest.raises(RuntimeError, match='deadlock detected'):
            await use_case.execute(concert_id=concert.id, user_id='u-1')

        # Assert
        assert fake_db.bookings[booking.id].status == BookingStatus.RESERVED
        assert fake_db.concerts[concert.id].reserved_seats == 1
        cache.invalidate_pattern.assert_not_awaited()
