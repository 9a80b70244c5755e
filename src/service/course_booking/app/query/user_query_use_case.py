"""
User Query Use Cases (Use Case Layer)
"""

from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.course_booking.app.dto.page import Page
from src.service.course_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.course_booking.domain.entity.user_entity import UserEntity, UserRole


class UserQueryUseCase:
    def __init__(self, *, user_query_repo: IUserQueryRepo) -> None:
        self.user_query_repo = user_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
    ) -> Self:
        return cls(user_query_repo=user_query_repo)

    @Logger.io
    async def get_profile(self, *, actor: UserEntity) -> UserEntity:
        """Stored account, or the token claims for a principal that was never provisioned"""
        assert actor.id is not None
        stored = await self.user_query_repo.get_by_id(user_id=actor.id)
        return stored or actor

    @Logger.io
    async def get_user(self, *, actor: UserEntity, user_id: int) -> UserEntity:
        actor.validate_admin()
        user = await self.user_query_repo.get_by_id(user_id=user_id)
        if not user:
            raise NotFoundError('User not found')
        return user

    @Logger.io
    async def list_users(
        self,
        *,
        actor: UserEntity,
        role: Optional[UserRole] = None,
        is_active: Optional[bool] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Page[UserEntity]:
        actor.validate_admin()
        return await self.user_query_repo.list_users(
            role=role, is_active=is_active, page=page, limit=limit
        )
