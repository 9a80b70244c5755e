from datetime import datetime, timedelta
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from src.platform.config.core_setting import settings
from src.platform.types.utc_datetime import utc_now
from src.platform.types.uuid7_utils_types import UtilsUUID7
from src.service.course_booking.app.dto.reservation_detail import ReservationDetail
from src.service.course_booking.domain.entity.reservation_entity import ReservationEntity
from src.service.course_booking.domain.enum.course_status import CourseModality
from src.service.course_booking.domain.enum.reservation_status import (
    PaymentMethod,
    ReservationStatus,
)
from src.service.course_booking.domain.reservation_lifecycle import MAX_RATING


class ReservationCreateRequest(BaseModel):
    course_id: int
    payment_method: PaymentMethod = PaymentMethod.FREE
    notes: Optional[str] = Field(default=None, max_length=1000)

    class Config:
        json_schema_extra = {
            'example': {'course_id': 1, 'payment_method': 'card', 'notes': 'Vegetarian lunch'}
        }


class ReservationCancelRequest(BaseModel):
    reason: Optional[str] = Field(default=None, max_length=500)


class ReservationRateRequest(BaseModel):
    # Range is checked by the lifecycle, out-of-range values surface as INVALID_RATING
    rating: int
    comment: Optional[str] = Field(default=None, max_length=500)

    class Config:
        json_schema_extra = {
            'example': {'rating': MAX_RATING, 'comment': 'Great course'},
        }


class ReservationResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'user_id': 2,
                'course_id': 1,
                'status': 'pending',
                'reserved_at': '2026-01-10T10:30:00Z',
                'payment_method': 'card',
                'amount_paid': '1500.00',
            }
        },
    }

    id: UtilsUUID7
    user_id: int
    course_id: int
    status: ReservationStatus
    reserved_at: datetime
    payment_method: PaymentMethod
    amount_paid: Decimal
    notes: Optional[str] = None
    payment_reference: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    attended: bool = False
    rating: Optional[int] = None
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, reservation: ReservationEntity) -> 'ReservationResponse':
        return cls(
            id=reservation.id,
            user_id=reservation.user_id,
            course_id=reservation.course_id,
            status=reservation.status,
            reserved_at=reservation.reserved_at,
            payment_method=reservation.payment_method,
            amount_paid=reservation.amount_paid,
            notes=reservation.notes,
            payment_reference=reservation.payment_reference,
            cancelled_at=reservation.cancelled_at,
            cancellation_reason=reservation.cancellation_reason,
            attended=reservation.attended,
            rating=reservation.rating,
            comment=reservation.comment,
            created_at=reservation.created_at,
            updated_at=reservation.updated_at,
        )


class CourseSummaryResponse(BaseModel):
    id: int
    title: str
    start_date: datetime
    end_date: datetime
    instructor: str
    modality: CourseModality


class UserSummaryResponse(BaseModel):
    id: int
    name: str
    email: str


class ReservationDetailResponse(ReservationResponse):
    course: CourseSummaryResponse
    user: Optional[UserSummaryResponse] = None
    is_active: bool
    can_cancel: bool
    days_until_course: int

    @classmethod
    def from_detail(
        cls,
        detail: ReservationDetail,
        *,
        now: Optional[datetime] = None,
        cutoff: Optional[timedelta] = None,
    ) -> 'ReservationDetailResponse':
        now = now or utc_now()
        if cutoff is None:
            cutoff = timedelta(days=settings.CANCELLATION_CUTOFF_DAYS)
        reservation = detail.reservation
        base = ReservationResponse.from_entity(reservation).model_dump()
        return cls(
            **base,
            is_active=reservation.is_active,
            can_cancel=reservation.can_cancel(
                now=now, course_start_date=detail.course.start_date, cutoff=cutoff
            ),
            days_until_course=ReservationEntity.days_until(detail.course.start_date, now=now),
            course=CourseSummaryResponse(
                id=detail.course.id,
                title=detail.course.title,
                start_date=detail.course.start_date,
                end_date=detail.course.end_date,
                instructor=detail.course.instructor,
                modality=detail.course.modality,
            ),
            user=UserSummaryResponse(
                id=detail.user.id, name=detail.user.name, email=detail.user.email
            )
            if detail.user
            else None,
        )


class ReservationListResponse(BaseModel):
    items: List[ReservationDetailResponse]
    total: int
    page: int
    limit: int
    pages: int
