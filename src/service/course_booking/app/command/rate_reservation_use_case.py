from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.platform.types.utc_datetime import utc_now
from src.service.course_booking.domain.entity.reservation_entity import ReservationEntity
from src.service.course_booking.domain.reservation_errors import InvalidTransitionError


class RateReservationUseCase:
    """Owner-only, once per completed reservation"""

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
        reservation_id: UUID,
        user_id: int,
        rating: int,
        comment: Optional[str] = None,
    ) -> ReservationEntity:
        with (
            metrics.track_reservation('rate'),
            self.tracer.start_as_current_span(
                'use_case.rate_reservation',
                attributes={'reservation.id': str(reservation_id), 'rating': rating},
            ),
        ):
            async with self.uow:
                reservation = await self.uow.reservation_query_repo.get_by_id(
                    reservation_id=reservation_id
                )
                if not reservation:
                    raise NotFoundError('Reservation not found')
                if reservation.user_id != user_id:
                    raise ForbiddenError('Only the attendee can rate this reservation')

                rated = reservation.rate(rating=rating, comment=comment, now=utc_now())

                applied = await self.uow.reservation_command_repo.save_transition(
                    reservation=rated,
                    expected_status=reservation.status,
                    require_unrated=True,
                )
                if not applied:
                    raise InvalidTransitionError('Reservation has already been rated')
                await self.uow.commit()

            Logger.base.info(f'⭐ [RATE_RESERVATION] {reservation_id} rating={rating}')
            return rated
