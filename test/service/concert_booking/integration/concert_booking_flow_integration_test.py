"""
End-to-end booking flow through ConcertService on SQLite

Real repositories and unit of work, in-process cache.
"""

import pytest

from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.exception.exceptions import ConflictError
from src.service.concert_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.concert_booking.app.command.create_concert_use_case import CreateConcertUseCase
from src.service.concert_booking.app.command.reserve_seat_use_case import ReserveSeatUseCase
from src.service.concert_booking.app.service.concert_service import ConcertService
from src.service.concert_booking.domain.entity.booking_entity import BookingStatus
from src.service.concert_booking.driven_adapter.cache.in_memory_cache_impl import (
    InMemoryCacheImpl,
)
from src.service.concert_booking.driven_adapter.repo.booking_repo_impl import BookingRepoImpl
from src.service.concert_booking.driven_adapter.repo.concert_repo_impl import ConcertRepoImpl


@pytest.fixture
def service(
    concert_repo: ConcertRepoImpl,
    booking_repo: BookingRepoImpl,
    unit_of_work: SqlAlchemyUnitOfWork,
) -> ConcertService:
    cache = InMemoryCacheImpl()
    return ConcertService(
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


@pytest.mark.integration
class TestConcertBookingFlow:
    async def test_reserve_cancel_reserve_and_delete(
        self, service: ConcertService, booking_repo: BookingRepoImpl
    ) -> None:
        """
        Given: A concert with 2 seats
        When: Users reserve, cancel, re-reserve and the concert is deleted
        Then: Seat counts and booking states follow every step
        """
        # Arrange
        concert = await service.create_concert(name='ลำไย ไหทองคำ', total_seats=2)
        assert [c.id for c in await service.get_all_concerts()] == [concert.id]

        # Act & Assert - fill the concert
        first = await service.reserve_seat(concert_id=concert.id, user_id='u-1')
        await service.reserve_seat(concert_id=concert.id, user_id='u-2')
        detail = await service.get_concert_by_id(concert.id)
        assert detail is not None
        assert detail.available_seats == 0

        with pytest.raises(ConflictError, match='Concert is fully booked'):
            await service.reserve_seat(concert_id=concert.id, user_id='u-3')

        # Act & Assert - cancel and re-reserve reuse the row
        await service.cancel_reservation(concert_id=concert.id, user_id='u-1')
        again = await service.reserve_seat(concert_id=concert.id, user_id='u-1')
        assert again.id == first.id
        detail = await service.get_concert_by_id(concert.id)
        assert detail is not None
        assert detail.reserved_seats == 2

        # Act & Assert - delete cancels every booking
        await service.delete_concert(concert.id)
        assert await service.get_concert_by_id(concert.id) is None
        assert await service.get_all_concerts() == []
        bookings = await booking_repo.find_by_concert_id(concert_id=concert.id)
        assert {b.status for b in bookings} == {BookingStatus.CANCELED}
