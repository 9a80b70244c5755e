from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.platform.types.utc_datetime import utc_now
from src.service.course_booking.domain.entity.reservation_entity import ReservationEntity
from src.service.course_booking.domain.entity.user_entity import UserEntity
from src.service.course_booking.domain.reservation_errors import InvalidTransitionError


class CompleteReservationUseCase:
    """Admin marks a confirmed reservation as attended-through, which unlocks rating"""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.uow])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, reservation_id: UUID, actor: UserEntity) -> ReservationEntity:
        actor.validate_admin()

        with (
            metrics.track_reservation('complete'),
            self.tracer.start_as_current_span(
                'use_case.complete_reservation',
                attributes={'reservation.id': str(reservation_id)},
            ),
        ):
            async with self.uow:
                reservation = await self.uow.reservation_query_repo.get_by_id(
                    reservation_id=reservation_id
                )
                if not reservation:
                    raise NotFoundError('Reservation not found')

                completed = reservation.complete(now=utc_now())
                applied = await self.uow.reservation_command_repo.save_transition(
                    reservation=completed, expected_status=reservation.status
                )
                if not applied:
                    raise InvalidTransitionError('Reservation was modified concurrently')
                await self.uow.commit()

            Logger.base.info(f'🎓 [COMPLETE_RESERVATION] {reservation_id} by={actor.id}')
            return completed
