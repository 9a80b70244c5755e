"""Course Booking Domain Enums"""

from src.service.course_booking.domain.enum.course_status import CourseModality, CourseStatus
from src.service.course_booking.domain.enum.reservation_status import (
    ACTIVE_RESERVATION_STATUSES,
    PaymentMethod,
    ReservationStatus,
)

__all__ = [
    'ACTIVE_RESERVATION_STATUSES',
    'CourseModality',
    'CourseStatus',
    'PaymentMethod',
    'ReservationStatus',
]
