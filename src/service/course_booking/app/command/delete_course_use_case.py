from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.course_booking.domain.entity.user_entity import UserEntity


class DeleteCourseUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.uow])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, course_id: int, actor: UserEntity) -> None:
        actor.validate_admin()

        async with self.uow:
            course = await self.uow.course_query_repo.get_by_id(course_id=course_id)
            if not course:
                raise NotFoundError('Course not found')

            reservations = await self.uow.reservation_query_repo.count_by_course(
                course_id=course_id
            )
            if reservations > 0:
                raise ConflictError(
                    f'Course has {reservations} reservations and cannot be deleted'
                )

            await self.uow.course_command_repo.delete(course_id=course_id)
            await self.uow.commit()

        Logger.base.info(f'🗑️ [DELETE_COURSE] {course_id} by={actor.id}')
