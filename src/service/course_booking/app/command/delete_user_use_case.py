from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.course_booking.domain.entity.user_entity import UserEntity


class DeleteUserUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.uow])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, user_id: int, actor: UserEntity) -> None:
        """
        Raises:
            NotFoundError: no such user
            DomainError: admins cannot delete their own account
            ConflictError: the user still owns courses or reservations
        """
        actor.validate_admin()

        async with self.uow:
            user = await self.uow.user_query_repo.get_by_id(user_id=user_id)
            if not user:
                raise NotFoundError('User not found')
            if user.id == actor.id:
                raise DomainError('You cannot delete your own account')

            await self.uow.user_command_repo.delete(user_id=user_id)
            await self.uow.commit()

        Logger.base.info(f'🗑️ [DELETE_USER] {user_id} by={actor.id}')
