from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.course_booking.app.dto.page import Page
from src.service.course_booking.app.dto.reservation_detail import ReservationDetail
from src.service.course_booking.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.course_booking.domain.entity.user_entity import UserEntity
from src.service.course_booking.domain.enum.reservation_status import ReservationStatus


class ListReservationsUseCase:
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
    async def list_mine(
        self,
        *,
        user_id: int,
        status: Optional[ReservationStatus] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Page[ReservationDetail]:
        return await self.reservation_query_repo.list_by_user(
            user_id=user_id, status=status, page=page, limit=limit
        )

    @Logger.io
    async def list_all(
        self,
        *,
        actor: UserEntity,
        status: Optional[ReservationStatus] = None,
        course_id: Optional[int] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Page[ReservationDetail]:
        actor.validate_admin()
        return await self.reservation_query_repo.list_all(
            status=status, course_id=course_id, page=page, limit=limit
        )
