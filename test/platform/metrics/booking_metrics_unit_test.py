import pytest

from src.platform.exception.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from src.platform.metrics.booking_metrics import metrics, outcome_of


@pytest.mark.unit
class TestOutcomeOf:
    @pytest.mark.parametrize(
        ('error', 'outcome'),
        [
            (ConflictError('Concert is fully booked'), 'conflict'),
            (NotFoundError('Concert not found'), 'not_found'),
            (ValidationError('Concert name is required'), 'rejected'),
            (DomainError('No available seats'), 'rejected'),
            (RuntimeError('connection reset'), 'error'),
        ],
    )
    def test_outcome_labels(self, error: Exception, outcome: str) -> None:
        assert outcome_of(error) == outcome


@pytest.mark.unit
class TestBookingMetrics:
    def test_record_seat_reservation_increments_labelled_counter(self) -> None:
        counter = metrics.seat_reservation_requests.labels(result='success')
        before = counter._value.get()

        metrics.record_seat_reservation(result='success', duration=0.01)

        assert counter._value.get() == before + 1

    def test_record_concert_deleted_counts_canceled_bookings(self) -> None:
        before_deleted = metrics.concerts_deleted._value.get()
        before_canceled = metrics.bulk_canceled_bookings._value.get()

        metrics.record_concert_deleted(canceled_bookings=3)

        assert metrics.concerts_deleted._value.get() == before_deleted + 1
        assert metrics.bulk_canceled_bookings._value.get() == before_canceled + 3

    def test_record_cache_lookup(self) -> None:
        hits = metrics.cache_lookups.labels(key_type='item', result='hit')
        before = hits._value.get()

        metrics.record_cache_lookup(key_type='item', hit=True)

        assert hits._value.get() == before + 1
