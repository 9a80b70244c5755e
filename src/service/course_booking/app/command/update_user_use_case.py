from typing import Any, Optional, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.course_booking.domain.entity.user_entity import UserEntity


ADMIN_EDITABLE_FIELDS = frozenset({'name', 'email', 'role', 'is_active'})


class UpdateUserUseCase:
    """
    Account edits: a user's own profile, and the admin console

    Email stays unique: checked up front for a clear message, the unique index
    catches a concurrent change that slipped past the check.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.uow])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def update_profile(
        self, *, actor: UserEntity, name: Optional[str] = None, email: Optional[str] = None
    ) -> UserEntity:
        changes = {k: v for k, v in (('name', name), ('email', email)) if v is not None}

        with self.tracer.start_as_current_span(
            'use_case.update_profile', attributes={'user.id': actor.id or 0}
        ):
            async with self.uow:
                user = await self.uow.user_command_repo.get_or_create(user=actor)
                if changes:
                    user = await self._apply(user, changes)
                await self.uow.commit()

        Logger.base.info(f'👤 [UPDATE_PROFILE] id={user.id} fields={sorted(changes)}')
        return user

    @Logger.io
    async def update_user(
        self, *, actor: UserEntity, user_id: int, changes: dict[str, Any]
    ) -> UserEntity:
        actor.validate_admin()

        unknown = set(changes) - ADMIN_EDITABLE_FIELDS
        if unknown:
            raise DomainError(f'Cannot update fields: {", ".join(sorted(unknown))}')
        changes = {k: v for k, v in changes.items() if v is not None}

        with self.tracer.start_as_current_span(
            'use_case.update_user', attributes={'user.id': user_id}
        ):
            async with self.uow:
                user = await self._load(user_id)
                if changes:
                    user = await self._apply(user, changes)
                await self.uow.commit()

        Logger.base.info(f'👤 [UPDATE_USER] id={user_id} by={actor.id} fields={sorted(changes)}')
        return user

    @Logger.io
    async def toggle_status(self, *, actor: UserEntity, user_id: int) -> UserEntity:
        actor.validate_admin()

        async with self.uow:
            user = await self._load(user_id)
            user = await self.uow.user_command_repo.update(
                user=attrs.evolve(user, is_active=not user.is_active)
            )
            await self.uow.commit()

        Logger.base.info(f'👤 [TOGGLE_USER] id={user_id} by={actor.id} active={user.is_active}')
        return user

    async def _load(self, user_id: int) -> UserEntity:
        user = await self.uow.user_query_repo.get_by_id(user_id=user_id)
        if not user:
            raise NotFoundError('User not found')
        return user

    async def _apply(self, user: UserEntity, changes: dict[str, Any]) -> UserEntity:
        email = changes.get('email')
        if email is not None and email != user.email:
            owner = await self.uow.user_query_repo.get_by_email(email=email)
            if owner and owner.id != user.id:
                raise ConflictError(f'Email {email} is already in use')

        return await self.uow.user_command_repo.update(user=attrs.evolve(user, **changes))
