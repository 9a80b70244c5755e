from datetime import timedelta
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.platform.types.utc_datetime import utc_now
from src.service.course_booking.domain.entity.reservation_entity import ReservationEntity
from src.service.course_booking.domain.entity.user_entity import UserEntity
from src.service.course_booking.domain.reservation_errors import InvalidTransitionError


class CancelReservationUseCase:
    """
    Cancel a pending or confirmed reservation and give its seat back

    The status change is a compare-and-swap on the status read at the start, so
    of two concurrent cancels exactly one releases the seat.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, settings: Settings) -> None:
        self.uow = uow
        self.cutoff = timedelta(days=settings.CANCELLATION_CUTOFF_DAYS)
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.uow]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(uow=uow, settings=settings)

    @Logger.io
    async def execute(
        self, *, reservation_id: UUID, actor: UserEntity, reason: Optional[str] = None
    ) -> ReservationEntity:
        with (
            metrics.track_reservation('cancel'),
            self.tracer.start_as_current_span(
                'use_case.cancel_reservation',
                attributes={'reservation.id': str(reservation_id)},
            ),
        ):
            now = utc_now()
            async with self.uow:
                reservation = await self.uow.reservation_query_repo.get_by_id(
                    reservation_id=reservation_id
                )
                if not reservation:
                    raise NotFoundError('Reservation not found')

                assert actor.id is not None
                if not actor.can_access(owner_id=reservation.user_id):
                    raise ForbiddenError('Not allowed to cancel this reservation')

                course = await self.uow.course_query_repo.get_by_id(
                    course_id=reservation.course_id
                )
                if not course:
                    raise NotFoundError('Course not found')

                cancelled = reservation.cancel(
                    now=now,
                    course_start_date=course.start_date,
                    reason=reason,
                    cutoff=self.cutoff,
                )

                applied = await self.uow.reservation_command_repo.save_transition(
                    reservation=cancelled, expected_status=reservation.status
                )
                if not applied:
                    raise InvalidTransitionError('Reservation was modified concurrently')

                remaining = await self.uow.seat_ledger.release_seat(course_id=course.id)
                await self.uow.commit()

            metrics.record_seat_operation(operation='release', applied=True)
            metrics.update_available_seats(course_id=course.id, available_seats=remaining)

            Logger.base.info(
                f'🚫 [CANCEL_RESERVATION] {reservation_id} by={actor.id} seats_left={remaining}'
            )
            return cancelled
