from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.course_booking.app.dto.reservation_detail import ReservationDetail
from src.service.course_booking.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.course_booking.domain.entity.user_entity import UserEntity


class GetReservationUseCase:
    def __init__(self, *, reservation_query_repo: IReservationQueryRepo) -> None:
        self.reservation_query_repo = reservation_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
    ) -> Self:
        return cls(reservation_query_repo=reservation_query_repo)

    @Logger.io
    async def get_reservation(
        self, *, reservation_id: UUID, actor: UserEntity
    ) -> ReservationDetail:
        detail = await self.reservation_query_repo.get_detail(reservation_id=reservation_id)
        if not detail:
            raise NotFoundError('Reservation not found')

        if not actor.can_access(owner_id=detail.reservation.user_id):
            raise ForbiddenError('Not allowed to view this reservation')

        return detail
