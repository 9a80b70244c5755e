from contextlib import contextmanager
import time
from typing import Iterator

from prometheus_client import Counter, Gauge, Histogram

from src.platform.exception.exceptions import CustomBaseError


class ReservationMetrics:
    """
    Course Reservation Core Metrics Collector

    Tracks reservation outcomes per use case and the seat ledger's conditional updates
    """

    def __init__(self):
        # ========== Reservation Business Metrics ==========
        self.reservation_requests = Counter(
            'reservation_requests_total',
            'Total reservation use case invocations',
            ['operation', 'result'],  # result: success or the error code
        )

        self.reservation_duration = Histogram(
            'reservation_operation_duration_seconds',
            'Reservation use case processing time',
            ['operation'],
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
        )

        # ========== Seat Ledger Metrics ==========
        self.seat_operations = Counter(
            'seat_ledger_operations_total',
            'Seat ledger conditional updates',
            ['operation', 'result'],  # operation: reserve/release, result: applied/rejected
        )

        self.course_available_seats = Gauge(
            'course_available_seats',
            'Available seats after the last committed seat change',
            ['course_id'],
        )

    # ========== Helper Methods ==========

    def record_reservation(self, *, operation: str, result: str, duration: float):
        self.reservation_requests.labels(operation=operation, result=result).inc()
        self.reservation_duration.labels(operation=operation).observe(duration)

    def record_seat_operation(self, *, operation: str, applied: bool):
        self.seat_operations.labels(
            operation=operation, result='applied' if applied else 'rejected'
        ).inc()

    def update_available_seats(self, *, course_id: int, available_seats: int):
        self.course_available_seats.labels(course_id=str(course_id)).set(available_seats)

    @contextmanager
    def track_reservation(self, operation: str) -> Iterator[None]:
        """Record one use case invocation, labelled with the error code when it raises"""
        start = time.perf_counter()
        result = 'success'
        try:
            yield
        except CustomBaseError as e:
            result = e.code
            raise
        except Exception:
            result = 'error'
            raise
        finally:
            self.record_reservation(
                operation=operation, result=result, duration=time.perf_counter() - start
            )


# Global metrics instance
metrics = ReservationMetrics()
