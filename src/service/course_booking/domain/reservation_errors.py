"""
Typed failures of the seat ledger and the reservation lifecycle.

All of them are expected business outcomes: `Logger.io` logs them without a traceback
and the exception handlers render `{'detail': message, 'code': code}`.
"""

from src.platform.exception.exceptions import ConflictError, DomainError


class CourseNotAvailableError(DomainError):
    code = 'COURSE_NOT_AVAILABLE'

    def __init__(self, message: str = 'Course is not available for reservation') -> None:
        super().__init__(message, 400)


class DuplicateReservationError(ConflictError):
    code = 'DUPLICATE_RESERVATION'

    def __init__(self, message: str = 'You already have a reservation for this course') -> None:
        super().__init__(message)


class CapacityExhaustedError(ConflictError):
    code = 'CAPACITY_EXHAUSTED'

    def __init__(self, message: str = 'No seats available for this course') -> None:
        super().__init__(message)


class CapacityOverflowError(ConflictError):
    code = 'CAPACITY_OVERFLOW'

    def __init__(self, message: str = 'Cannot release a seat, course is already at capacity') -> None:
        super().__init__(message)


class InvalidTransitionError(ConflictError):
    code = 'INVALID_TRANSITION'


class CancellationNotAllowedError(DomainError):
    code = 'CANCELLATION_NOT_ALLOWED'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class InvalidRatingError(DomainError):
    code = 'INVALID_RATING'

    def __init__(self, message: str = 'Rating must be between 1 and 5') -> None:
        super().__init__(message, 400)
