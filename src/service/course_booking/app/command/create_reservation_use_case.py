from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.platform.types.utc_datetime import utc_now
from src.service.course_booking.domain.entity.reservation_entity import ReservationEntity
from src.service.course_booking.domain.entity.user_entity import UserEntity
from src.service.course_booking.domain.enum.reservation_status import PaymentMethod


class CreateReservationUseCase:
    """
    Reserve one seat of a course for a user

    Flow (one transaction):
    1. Resolve the token principal to its user row, provisioned from the claims on first sight
    2. Load the course, fail fast on the lifecycle guard
    3. Claim a seat through the seat ledger (conditional UPDATE)
    4. Insert the pending reservation, the UNIQUE(user_id, course_id) index rejects duplicates
    5. Commit - any failure after step 3 rolls the seat back with the transaction
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.uow])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(
        self,
        *,
        actor: UserEntity,
        course_id: int,
        payment_method: PaymentMethod = PaymentMethod.FREE,
        notes: Optional[str] = None,
    ) -> ReservationEntity:
        assert actor.id is not None
        user_id = actor.id
        with (
            metrics.track_reservation('create'),
            self.tracer.start_as_current_span(
                'use_case.create_reservation',
                attributes={'user.id': user_id, 'course.id': course_id},
            ),
        ):
            now = utc_now()
            async with self.uow:
                user = await self.uow.user_command_repo.get_or_create(user=actor)
                user.validate_active()

                course = await self.uow.course_query_repo.get_by_id(course_id=course_id)
                if not course:
                    raise NotFoundError('Course not found')

                has_active = await self.uow.reservation_query_repo.has_active_reservation(
                    user_id=user_id, course_id=course_id
                )
                reservation = ReservationEntity.create(
                    user_id=user_id,
                    course=course,
                    now=now,
                    has_active_reservation=has_active,
                    payment_method=payment_method,
                    notes=notes,
                )

                remaining = await self.uow.seat_ledger.reserve_seat(course_id=course_id, now=now)
                reservation = await self.uow.reservation_command_repo.create(
                    reservation=reservation
                )
                await self.uow.commit()

            metrics.record_seat_operation(operation='reserve', applied=True)
            metrics.update_available_seats(course_id=course_id, available_seats=remaining)
            Logger.base.info(
                f'🎟️ [CREATE_RESERVATION] {reservation.id} user={user_id} '
                f'course={course_id} seats_left={remaining}'
            )
            return reservation
