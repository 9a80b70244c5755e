"""
Reservation lifecycle state machine

    (none) ──reserve──> pending ──confirm──> confirmed ──complete──> completed ──rate──> completed
                           │                     │
                           └──────cancel─────────┴──> cancelled

`apply_transition` is the single place that decides whether a (state, transition) pair is legal.
It never raises and never mutates: callers get a `TransitionResult` and either persist
`result.target` or turn the failure into its typed error with `result.unwrap()`.
"""

from datetime import datetime, timedelta
from enum import StrEnum
from typing import TYPE_CHECKING, Optional

import attrs

from src.service.course_booking.domain.enum.reservation_status import ReservationStatus
from src.service.course_booking.domain.reservation_errors import (
    CancellationNotAllowedError,
    CapacityExhaustedError,
    CourseNotAvailableError,
    DuplicateReservationError,
    InvalidRatingError,
    InvalidTransitionError,
)


if TYPE_CHECKING:
    from src.service.course_booking.domain.entity.course_entity import CourseEntity


MIN_RATING = 1
MAX_RATING = 5
DEFAULT_CANCELLATION_CUTOFF = timedelta(days=2)


class ReservationTransition(StrEnum):
    CONFIRM = 'confirm'
    COMPLETE = 'complete'
    CANCEL = 'cancel'
    RATE = 'rate'


class TransitionError(StrEnum):
    INVALID_TRANSITION = 'invalid_transition'
    CANCELLATION_NOT_ALLOWED = 'cancellation_not_allowed'
    INVALID_RATING = 'invalid_rating'
    COURSE_NOT_AVAILABLE = 'course_not_available'
    CAPACITY_EXHAUSTED = 'capacity_exhausted'
    DUPLICATE_RESERVATION = 'duplicate_reservation'


_ERROR_TYPES = {
    TransitionError.INVALID_TRANSITION: InvalidTransitionError,
    TransitionError.CANCELLATION_NOT_ALLOWED: CancellationNotAllowedError,
    TransitionError.INVALID_RATING: InvalidRatingError,
    TransitionError.COURSE_NOT_AVAILABLE: CourseNotAvailableError,
    TransitionError.CAPACITY_EXHAUSTED: CapacityExhaustedError,
    TransitionError.DUPLICATE_RESERVATION: DuplicateReservationError,
}

# transition -> (allowed source states, target state)
_TRANSITIONS: dict[ReservationTransition, tuple[frozenset[ReservationStatus], ReservationStatus]] = {
    ReservationTransition.CONFIRM: (
        frozenset({ReservationStatus.PENDING}),
        ReservationStatus.CONFIRMED,
    ),
    ReservationTransition.COMPLETE: (
        frozenset({ReservationStatus.CONFIRMED}),
        ReservationStatus.COMPLETED,
    ),
    ReservationTransition.CANCEL: (
        frozenset({ReservationStatus.PENDING, ReservationStatus.CONFIRMED}),
        ReservationStatus.CANCELLED,
    ),
    ReservationTransition.RATE: (
        frozenset({ReservationStatus.COMPLETED}),
        ReservationStatus.COMPLETED,
    ),
}


@attrs.frozen
class TransitionResult:
    ok: bool
    target: Optional[ReservationStatus] = None
    error: Optional[TransitionError] = None
    reason: str = ''

    @classmethod
    def success(cls, target: ReservationStatus) -> 'TransitionResult':
        return cls(ok=True, target=target)

    @classmethod
    def failure(cls, error: TransitionError, reason: str) -> 'TransitionResult':
        return cls(ok=False, error=error, reason=reason)

    def unwrap(self) -> ReservationStatus:
        """Return the target state, or raise the typed error for this failure"""
        if self.ok:
            assert self.target is not None
            return self.target
        assert self.error is not None
        raise _ERROR_TYPES[self.error](self.reason)


def allowed_sources(transition: ReservationTransition) -> frozenset[ReservationStatus]:
    return _TRANSITIONS[transition][0]


def cancellation_deadline(
    course_start_date: datetime, *, cutoff: timedelta = DEFAULT_CANCELLATION_CUTOFF
) -> datetime:
    return course_start_date - cutoff


def apply_transition(
    current: ReservationStatus,
    transition: ReservationTransition,
    *,
    now: Optional[datetime] = None,
    course_start_date: Optional[datetime] = None,
    cutoff: timedelta = DEFAULT_CANCELLATION_CUTOFF,
    rating: Optional[int] = None,
    already_rated: bool = False,
) -> TransitionResult:
    sources, target = _TRANSITIONS[transition]

    if transition is ReservationTransition.RATE:
        if rating is None or not MIN_RATING <= rating <= MAX_RATING:
            return TransitionResult.failure(
                TransitionError.INVALID_RATING,
                f'Rating must be between {MIN_RATING} and {MAX_RATING}',
            )

    if current not in sources:
        return TransitionResult.failure(
            TransitionError.INVALID_TRANSITION,
            f'Cannot {transition} a {current} reservation',
        )

    if transition is ReservationTransition.CANCEL:
        if now is None or course_start_date is None:
            raise ValueError('cancel needs both now and course_start_date')
        deadline = cancellation_deadline(course_start_date, cutoff=cutoff)
        if now >= deadline:
            return TransitionResult.failure(
                TransitionError.CANCELLATION_NOT_ALLOWED,
                f'Reservations can only be cancelled until {cutoff.days} days before the course starts',
            )

    if transition is ReservationTransition.RATE and already_rated:
        return TransitionResult.failure(
            TransitionError.INVALID_TRANSITION,
            'Reservation has already been rated',
        )

    return TransitionResult.success(target)


def evaluate_new_reservation(
    course: 'CourseEntity', *, has_active_reservation: bool, now: datetime
) -> TransitionResult:
    """Guard for the (none) -> pending transition"""
    if not course.is_open_for_reservation(now=now):
        return TransitionResult.failure(
            TransitionError.COURSE_NOT_AVAILABLE,
            'Course is not available for reservation',
        )

    if course.available_seats <= 0:
        return TransitionResult.failure(
            TransitionError.CAPACITY_EXHAUSTED,
            'No seats available for this course',
        )

    if has_active_reservation:
        return TransitionResult.failure(
            TransitionError.DUPLICATE_RESERVATION,
            'You already have an active reservation for this course',
        )

    return TransitionResult.success(ReservationStatus.PENDING)
