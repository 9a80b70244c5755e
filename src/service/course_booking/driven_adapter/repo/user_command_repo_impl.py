from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError

from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.course_booking.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.course_booking.domain.entity.user_entity import UserEntity
from src.service.course_booking.driven_adapter.model.user_model import UserModel
from src.service.course_booking.driven_adapter.model_mapper import user_to_entity
from src.service.course_booking.driven_adapter.repo.integrity_errors import (
    is_foreign_key_violation,
    is_unique_violation,
)
from src.service.course_booking.driven_adapter.repo.session_scoped_repo import SessionScopedRepo


# PostgreSQL names the unique index, SQLite reports the column
_EMAIL_VIOLATION_MARKERS = ('ix_user_email', 'user.email')


class UserCommandRepoImpl(SessionScopedRepo, IUserCommandRepo):
    @Logger.io
    async def create(self, *, user: UserEntity) -> UserEntity:
        async with self._get_session() as session:
            user_model = UserModel(
                email=user.email,
                name=user.name,
                role=user.role.value,
                is_active=user.is_active,
            )

            session.add(user_model)
            if self.session is None:
                await session.commit()
                await session.refresh(user_model)
            else:
                await session.flush()

            return user_to_entity(user_model)

    @Logger.io
    async def get_or_create(self, *, user: UserEntity) -> UserEntity:
        assert user.id is not None
        async with self._get_session() as session:
            existing = await session.get(UserModel, user.id)
            if existing is not None:
                return user_to_entity(existing)

            user_model = UserModel(
                id=user.id,
                email=user.email,
                name=user.name,
                role=user.role.value,
                is_active=user.is_active,
            )
            try:
                # Savepoint: a concurrent first request for the same principal may win the insert
                async with session.begin_nested():
                    session.add(user_model)
            except IntegrityError as e:
                existing = await session.get(UserModel, user.id)
                if existing is not None:
                    return user_to_entity(existing)
                if is_unique_violation(e, _EMAIL_VIOLATION_MARKERS):
                    raise ConflictError(f'Email {user.email} belongs to another account') from e
                raise

            if self.session is None:
                await session.commit()

            Logger.base.info(f'👤 [PROVISION_USER] id={user.id} email={user.email}')
            return user_to_entity(user_model)

    @Logger.io
    async def update(self, *, user: UserEntity) -> UserEntity:
        assert user.id is not None
        async with self._get_session() as session:
            try:
                result = await session.execute(
                    update(UserModel)
                    .where(UserModel.id == user.id)
                    .values(
                        email=user.email,
                        name=user.name,
                        role=user.role.value,
                        is_active=user.is_active,
                    )
                    .returning(UserModel)
                )
                user_model = result.scalar_one_or_none()
            except IntegrityError as e:
                if is_unique_violation(e, _EMAIL_VIOLATION_MARKERS):
                    raise ConflictError(f'Email {user.email} is already in use') from e
                raise

            if not user_model:
                raise NotFoundError('User not found')
            if self.session is None:
                await session.commit()

            return user_to_entity(user_model)

    @Logger.io
    async def delete(self, *, user_id: int) -> bool:
        async with self._get_session() as session:
            try:
                result = await session.execute(delete(UserModel).where(UserModel.id == user_id))
            except IntegrityError as e:
                if is_foreign_key_violation(e):
                    raise ConflictError('User still owns courses or reservations') from e
                raise

            if self.session is None:
                await session.commit()
            return (result.rowcount or 0) > 0
