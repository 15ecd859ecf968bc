from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import ValidationError
from src.service.concert_booking.app.command.create_concert_use_case import CreateConcertUseCase
from src.service.concert_booking.app.interface.i_cache import ICache
from test.service.concert_booking.fakes import FakeConcertRepo, FakeDatabase


@pytest.fixture
def cache() -> AsyncMock:
    return AsyncMock(spec=ICache)


@pytest.fixture
def use_case(fake_db: FakeDatabase, cache: AsyncMock) -> CreateConcertUseCase:
    return CreateConcertUseCase(concert_repo=FakeConcertRepo(fake_db), cache=cache)


@pytest.mark.unit
class TestCreateConcertUseCase:
    async def test_create_persists_trimmed_concert_and_invalidates_list(
        self, use_case: CreateConcertUseCase, fake_db: FakeDatabase, cache: AsyncMock
    ) -> None:
        # Act
        concert = await use_case.execute(
            name='  Taylor Swift Concert  ', description='The Eras Tour', total_seats=3000
        )

        # Assert
        assert concert.name == 'Taylor Swift Concert'
        assert concert.description == 'The Eras Tour'
        assert concert.total_seats == 3000
        assert concert.reserved_seats == 0
        assert fake_db.concerts[concert.id] == concert
        cache.invalidate_pattern.assert_awaited_once_with('concerts:*')

    async def test_blank_description_is_stored_as_none(
        self, use_case: CreateConcertUseCase
    ) -> None:
        concert = await use_case.execute(name='ลำไย ไหทองคำ', description='   ', total_seats=1000)

        assert concert.description is None

    @pytest.mark.parametrize('name', ['', '   ', '\t\n'])
    async def test_blank_name_is_rejected(
        self, use_case: CreateConcertUseCase, fake_db: FakeDatabase, cache: AsyncMock, name: str
    ) -> None:
        with pytest.raises(ValidationError, match='Concert name is required'):
            await use_case.execute(name=name, total_seats=10)

        assert fake_db.concerts == {}
        cache.invalidate_pattern.assert_not_awaited()

    @pytest.mark.parametrize('total_seats', [0, -5])
    async def test_non_positive_seats_are_rejected(
        self, use_case: CreateConcertUseCase, total_seats: int
    ) -> None:
        with pytest.raises(ValidationError, match='Total seats must be greater than 0'):
            await use_case.execute(name='หมอลำซิ่ง', total_seats=total_seats)

    async def test_name_is_checked_before_seats(self, use_case: CreateConcertUseCase) -> None:
        with pytest.raises(ValidationError, match='Concert name is required'):
            await use_case.execute(name=' ', total_seats=0)
