from prometheus_client import Counter, Histogram

from src.platform.exception.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)


class BookingMetrics:
    """
    Concert Booking Core Metrics Collector

    Tracks reservation/cancellation outcomes and read-through cache effectiveness
    """

    def __init__(self):
        # ========== Booking Business Metrics ==========
        self.seat_reservation_requests = Counter(
            'seat_reservation_requests_total',
            'Total seat reservation requests',
            ['result'],  # result: success/conflict/not_found/error
        )

        self.seat_reservation_duration = Histogram(
            'seat_reservation_duration_seconds',
            'Seat reservation processing time',
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        self.booking_cancellations = Counter(
            'booking_cancellations_total',
            'Total booking cancellation requests',
            ['result'],
        )

        self.concerts_deleted = Counter(
            'concerts_deleted_total',
            'Concerts soft-deleted, with the bookings canceled alongside them',
        )

        self.bulk_canceled_bookings = Counter(
            'bulk_canceled_bookings_total',
            'Bookings canceled because their concert was deleted',
        )

        # ========== Cache Metrics ==========
        self.cache_lookups = Counter(
            'concert_cache_lookups_total',
            'Read-through cache lookups',
            ['key_type', 'result'],  # key_type: list/item, result: hit/miss
        )

    # ========== Helper Methods ==========

    def record_seat_reservation(self, *, result: str, duration: float):
        self.seat_reservation_requests.labels(result=result).inc()
        self.seat_reservation_duration.observe(duration)

    def record_booking_cancellation(self, *, result: str):
        self.booking_cancellations.labels(result=result).inc()

    def record_concert_deleted(self, *, canceled_bookings: int):
        self.concerts_deleted.inc()
        self.bulk_canceled_bookings.inc(canceled_bookings)

    def record_cache_lookup(self, *, key_type: str, hit: bool):
        self.cache_lookups.labels(key_type=key_type, result='hit' if hit else 'miss').inc()


def outcome_of(error: Exception) -> str:
    """Metric label for a failed booking operation"""
    if isinstance(error, ConflictError):
        return 'conflict'
    if isinstance(error, NotFoundError):
        return 'not_found'
    if isinstance(error, (ValidationError, DomainError)):
        return 'rejected'
    return 'error'


# Global metrics instance
metrics = BookingMetrics()
