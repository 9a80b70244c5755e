from typing import Optional

from sqlalchemy import func, select

from src.platform.logging.loguru_io import Logger
from src.service.course_booking.app.dto.page import Page
from src.service.course_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.course_booking.domain.entity.user_entity import UserEntity, UserRole
from src.service.course_booking.driven_adapter.model.user_model import UserModel
from src.service.course_booking.driven_adapter.model_mapper import user_to_entity
from src.service.course_booking.driven_adapter.repo.session_scoped_repo import SessionScopedRepo


class UserQueryRepoImpl(SessionScopedRepo, IUserQueryRepo):
    @Logger.io
    async def get_by_id(self, *, user_id: int) -> Optional[UserEntity]:
        async with self._get_session() as session:
            result = await session.execute(
                select(UserModel)
                .where(UserModel.id == user_id)
                .execution_options(populate_existing=True)
            )
            user_model = result.scalar_one_or_none()
            return user_to_entity(user_model) if user_model else None

    @Logger.io
    async def get_by_email(self, *, email: str) -> Optional[UserEntity]:
        async with self._get_session() as session:
            result = await session.execute(select(UserModel).where(UserModel.email == email))
            user_model = result.scalar_one_or_none()
            return user_to_entity(user_model) if user_model else None

    @Logger.io
    async def list_users(
        self,
        *,
        role: Optional[UserRole],
        is_active: Optional[bool],
        page: int,
        limit: int,
    ) -> Page[UserEntity]:
        conditions = []
        if role is not None:
            conditions.append(UserModel.role == role.value)
        if is_active is not None:
            conditions.append(UserModel.is_active == is_active)

        async with self._get_session() as session:
            total = await session.scalar(
                select(func.count()).select_from(UserModel).where(*conditions)
            )
            result = await session.execute(
                select(UserModel)
                .where(*conditions)
                .order_by(UserModel.created_at.desc(), UserModel.id.desc())
                .offset((page - 1) * limit)
                .limit(limit)
            )
            users = [user_to_entity(row) for row in result.scalars().all()]

        return Page(items=users, total=total or 0, page=page, limit=limit)
