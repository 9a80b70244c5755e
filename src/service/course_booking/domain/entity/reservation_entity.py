from datetime import datetime, timedelta
from decimal import Decimal
import math
from typing import Optional

import attrs
import uuid_utils
from uuid_utils import UUID

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.course_booking.domain.entity.course_entity import CourseEntity, to_money
from src.service.course_booking.domain.enum.reservation_status import (
    ACTIVE_RESERVATION_STATUSES,
    PaymentMethod,
    ReservationStatus,
)
from src.service.course_booking.domain.reservation_lifecycle import (
    DEFAULT_CANCELLATION_CUTOFF,
    ReservationTransition,
    apply_transition,
    evaluate_new_reservation,
)


def _validate_max_length(max_len: int):
    def validator(instance: object, attribute: attrs.Attribute, value: Optional[str]) -> None:
        if value is not None and len(value) > max_len:
            raise DomainError(f'{attribute.name} cannot exceed {max_len} characters')

    return validator


@attrs.define
class ReservationEntity:
    id: UUID
    user_id: int
    course_id: int
    reserved_at: datetime
    status: ReservationStatus = ReservationStatus.PENDING
    payment_method: PaymentMethod = PaymentMethod.FREE
    amount_paid: Decimal = attrs.field(default=Decimal('0'), converter=to_money)
    notes: Optional[str] = attrs.field(default=None, validator=_validate_max_length(1000))
    payment_reference: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = attrs.field(
        default=None, validator=_validate_max_length(500)
    )
    attended: bool = False
    rating: Optional[int] = None
    comment: Optional[str] = attrs.field(default=None, validator=_validate_max_length(500))
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        user_id: int,
        course: CourseEntity,
        now: datetime,
        has_active_reservation: bool = False,
        payment_method: PaymentMethod = PaymentMethod.FREE,
        notes: Optional[str] = None,
    ) -> 'ReservationEntity':
        """
        Open a pending reservation for `course`

        Raises:
            CourseNotAvailableError: course is not active or has already started
            CapacityExhaustedError: no seats left
            DuplicateReservationError: user already holds an active reservation for the course
        """
        status = evaluate_new_reservation(
            course, has_active_reservation=has_active_reservation, now=now
        ).unwrap()
        assert course.id is not None

        return cls(
            id=uuid_utils.uuid7(),
            user_id=user_id,
            course_id=course.id,
            reserved_at=now,
            status=status,
            payment_method=payment_method,
            amount_paid=course.price,
            notes=notes.strip() if notes else None,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_RESERVATION_STATUSES

    @property
    def is_rated(self) -> bool:
        return self.rating is not None

    def can_cancel(
        self,
        *,
        now: datetime,
        course_start_date: datetime,
        cutoff: timedelta = DEFAULT_CANCELLATION_CUTOFF,
    ) -> bool:
        return apply_transition(
            self.status,
            ReservationTransition.CANCEL,
            now=now,
            course_start_date=course_start_date,
            cutoff=cutoff,
        ).ok

    @staticmethod
    def days_until(course_start_date: datetime, *, now: datetime) -> int:
        """Days until the course starts, rounded up"""
        return math.ceil((course_start_date - now).total_seconds() / 86400)

    @Logger.io
    def confirm(self, *, now: datetime) -> 'ReservationEntity':
        status = apply_transition(self.status, ReservationTransition.CONFIRM).unwrap()
        return attrs.evolve(self, status=status, updated_at=now)

    @Logger.io
    def complete(self, *, now: datetime) -> 'ReservationEntity':
        status = apply_transition(self.status, ReservationTransition.COMPLETE).unwrap()
        return attrs.evolve(self, status=status, updated_at=now)

    @Logger.io
    def cancel(
        self,
        *,
        now: datetime,
        course_start_date: datetime,
        reason: Optional[str] = None,
        cutoff: timedelta = DEFAULT_CANCELLATION_CUTOFF,
    ) -> 'ReservationEntity':
        """
        Raises:
            InvalidTransitionError: reservation is not pending or confirmed
            CancellationNotAllowedError: the course starts within the cancellation cutoff
        """
        status = apply_transition(
            self.status,
            ReservationTransition.CANCEL,
            now=now,
            course_start_date=course_start_date,
            cutoff=cutoff,
        ).unwrap()
        return attrs.evolve(
            self,
            status=status,
            cancelled_at=now,
            cancellation_reason=reason.strip() if reason else None,
            updated_at=now,
        )

    @Logger.io
    def rate(
        self, *, rating: int, comment: Optional[str] = None, now: datetime
    ) -> 'ReservationEntity':
        """
        Raises:
            InvalidRatingError: rating outside 1-5
            InvalidTransitionError: reservation not completed, or already rated
        """
        apply_transition(
            self.status,
            ReservationTransition.RATE,
            rating=rating,
            already_rated=self.is_rated,
        ).unwrap()
        return attrs.evolve(
            self,
            rating=rating,
            comment=comment.strip() if comment else None,
            updated_at=now,
        )
