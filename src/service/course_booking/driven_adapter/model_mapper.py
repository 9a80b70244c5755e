"""ORM row <-> domain entity conversion shared by the repositories"""

from uuid_utils import UUID

from src.platform.types.uuid7_utils_types import to_std_uuid
from src.service.course_booking.domain.entity.course_entity import CourseEntity
from src.service.course_booking.domain.entity.reservation_entity import ReservationEntity
from src.service.course_booking.domain.entity.user_entity import UserEntity, UserRole
from src.service.course_booking.domain.enum.course_status import CourseModality, CourseStatus
from src.service.course_booking.domain.enum.reservation_status import (
    PaymentMethod,
    ReservationStatus,
)
from src.service.course_booking.driven_adapter.model.course_model import CourseModel
from src.service.course_booking.driven_adapter.model.reservation_model import ReservationModel
from src.service.course_booking.driven_adapter.model.user_model import UserModel


def course_to_entity(model: CourseModel) -> CourseEntity:
    return CourseEntity(
        id=model.id,
        title=model.title,
        description=model.description,
        max_seats=model.max_seats,
        available_seats=model.available_seats,
        start_date=model.start_date,
        end_date=model.end_date,
        status=CourseStatus(model.status),
        price=model.price,
        modality=CourseModality(model.modality),
        category=model.category,
        instructor=model.instructor,
        location=model.location,
        requirements=list(model.requirements or []),
        materials=list(model.materials or []),
        image_url=model.image_url,
        created_by=model.created_by,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def course_to_model(course: CourseEntity) -> CourseModel:
    return CourseModel(
        title=course.title,
        description=course.description,
        max_seats=course.max_seats,
        available_seats=course.available_seats,
        start_date=course.start_date,
        end_date=course.end_date,
        status=course.status.value,
        price=course.price,
        modality=course.modality.value,
        category=course.category,
        instructor=course.instructor,
        location=course.location,
        requirements=list(course.requirements),
        materials=list(course.materials),
        image_url=course.image_url,
        created_by=course.created_by,
    )


def reservation_to_entity(model: ReservationModel) -> ReservationEntity:
    return ReservationEntity(
        id=UUID(str(model.id)),  # Convert stdlib uuid.UUID to uuid_utils.UUID
        user_id=model.user_id,
        course_id=model.course_id,
        reserved_at=model.reserved_at,
        status=ReservationStatus(model.status),
        payment_method=PaymentMethod(model.payment_method),
        amount_paid=model.amount_paid,
        notes=model.notes,
        payment_reference=model.payment_reference,
        cancelled_at=model.cancelled_at,
        cancellation_reason=model.cancellation_reason,
        attended=model.attended,
        rating=model.rating,
        comment=model.comment,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def reservation_to_model(reservation: ReservationEntity) -> ReservationModel:
    return ReservationModel(
        id=to_std_uuid(reservation.id),
        user_id=reservation.user_id,
        course_id=reservation.course_id,
        reserved_at=reservation.reserved_at,
        status=reservation.status.value,
        payment_method=reservation.payment_method.value,
        amount_paid=reservation.amount_paid,
        notes=reservation.notes,
        payment_reference=reservation.payment_reference,
        attended=reservation.attended,
    )


def user_to_entity(model: UserModel) -> UserEntity:
    return UserEntity(
        id=model.id,
        email=model.email,
        name=model.name,
        role=UserRole(model.role),
        is_active=model.is_active,
        created_at=model.created_at,
    )
