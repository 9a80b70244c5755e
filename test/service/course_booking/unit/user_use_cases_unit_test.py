"""
Unit tests for the user management use cases

Test Focus:
1. Profile: own account only, provisioned from the token on first edit
2. Admin console: admin only, 404 on unknown ids, email uniqueness
3. Delete: never the caller's own account
"""

from unittest.mock import AsyncMock

import attrs
import pytest

from src.platform.exception.exceptions import (
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
)
from src.service.course_booking.app.command.delete_user_use_case import DeleteUserUseCase
from src.service.course_booking.app.command.update_user_use_case import UpdateUserUseCase
from src.service.course_booking.app.dto.page import Page
from src.service.course_booking.app.query.user_query_use_case import UserQueryUseCase
from src.service.course_booking.domain.entity.user_entity import UserRole


def _echo_update(user):
    return user


@pytest.mark.unit
class TestUserQuery:
    async def test_profile_prefers_the_stored_row(self, owner):
        stored = attrs.evolve(owner, name='Stored Name')
        repo = AsyncMock()
        repo.get_by_id = AsyncMock(return_value=stored)

        profile = await UserQueryUseCase(user_query_repo=repo).get_profile(actor=owner)

        assert profile.name == 'Stored Name'
        repo.get_by_id.assert_awaited_once_with(user_id=2)

    async def test_profile_of_a_principal_without_a_row(self, owner):
        repo = AsyncMock()
        repo.get_by_id = AsyncMock(return_value=None)

        profile = await UserQueryUseCase(user_query_repo=repo).get_profile(actor=owner)

        assert profile == owner

    async def test_admin_lists_users_with_filters(self, admin, owner):
        repo = AsyncMock()
        repo.list_users = AsyncMock(return_value=Page(items=[owner], total=1, page=1, limit=20))

        page = await UserQueryUseCase(user_query_repo=repo).list_users(
            actor=admin, role=UserRole.USER, is_active=True
        )

        assert page.items == [owner]
        repo.list_users.assert_awaited_once_with(
            role=UserRole.USER, is_active=True, page=1, limit=20
        )

    async def test_user_cannot_list_users(self, owner):
        with pytest.raises(ForbiddenError):
            await UserQueryUseCase(user_query_repo=AsyncMock()).list_users(actor=owner)

    async def test_unknown_user(self, admin):
        repo = AsyncMock()
        repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await UserQueryUseCase(user_query_repo=repo).get_user(actor=admin, user_id=404)


@pytest.mark.unit
class TestUpdateProfile:
    async def test_rename_and_change_email(self, mock_uow, owner):
        mock_uow.user_query_repo.get_by_email = AsyncMock(return_value=None)
        mock_uow.user_command_repo.update = AsyncMock(side_effect=_echo_update)

        updated = await UpdateUserUseCase(uow=mock_uow).update_profile(
            actor=owner, name='New Name', email='new@test.com'
        )

        assert (updated.name, updated.email) == ('New Name', 'new@test.com')
        assert updated.role == owner.role
        mock_uow.user_command_repo.get_or_create.assert_awaited_once_with(user=owner)
        mock_uow.commit.assert_awaited_once()

    async def test_email_owned_by_someone_else(self, mock_uow, owner, stranger):
        mock_uow.user_query_repo.get_by_email = AsyncMock(return_value=stranger)

        with pytest.raises(ConflictError):
            await UpdateUserUseCase(uow=mock_uow).update_profile(
                actor=owner, email=stranger.email
            )

        mock_uow.user_command_repo.update.assert_not_awaited()
        mock_uow.commit.assert_not_awaited()

    async def test_nothing_to_change(self, mock_uow, owner):
        updated = await UpdateUserUseCase(uow=mock_uow).update_profile(actor=owner)

        assert updated == owner
        mock_uow.user_command_repo.update.assert_not_awaited()


@pytest.mark.unit
class TestAdminUserEdits:
    async def test_admin_promotes_and_deactivates(self, mock_uow, admin, owner):
        mock_uow.user_query_repo.get_by_id = AsyncMock(return_value=owner)
        mock_uow.user_command_repo.update = AsyncMock(side_effect=_echo_update)

        updated = await UpdateUserUseCase(uow=mock_uow).update_user(
            actor=admin, user_id=2, changes={'role': UserRole.ADMIN, 'is_active': False}
        )

        assert updated.role == UserRole.ADMIN
        assert updated.is_active is False
        mock_uow.commit.assert_awaited_once()

    async def test_unknown_field(self, mock_uow, admin):
        with pytest.raises(DomainError):
            await UpdateUserUseCase(uow=mock_uow).update_user(
                actor=admin, user_id=2, changes={'id': 7}
            )

    async def test_user_cannot_edit_other_accounts(self, mock_uow, owner):
        with pytest.raises(ForbiddenError):
            await UpdateUserUseCase(uow=mock_uow).update_user(
                actor=owner, user_id=3, changes={'name': 'Hijack'}
            )

    async def test_edit_unknown_user(self, mock_uow, admin):
        mock_uow.user_query_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await UpdateUserUseCase(uow=mock_uow).update_user(
                actor=admin, user_id=404, changes={'name': 'Nobody'}
            )

    async def test_toggle_status_flips_is_active(self, mock_uow, admin, owner):
        mock_uow.user_query_repo.get_by_id = AsyncMock(return_value=owner)
        mock_uow.user_command_repo.update = AsyncMock(side_effect=_echo_update)
        use_case = UpdateUserUseCase(uow=mock_uow)

        toggled = await use_case.toggle_status(actor=admin, user_id=2)

        assert toggled.is_active is False
        mock_uow.commit.assert_awaited_once()


@pytest.mark.unit
class TestDeleteUser:
    async def test_admin_deletes_user(self, mock_uow, admin, owner):
        mock_uow.user_query_repo.get_by_id = AsyncMock(return_value=owner)

        await DeleteUserUseCase(uow=mock_uow).execute(user_id=2, actor=admin)

        mock_uow.user_command_repo.delete.assert_awaited_once_with(user_id=2)
        mock_uow.commit.assert_awaited_once()

    async def test_admin_cannot_delete_own_account(self, mock_uow, admin):
        mock_uow.user_query_repo.get_by_id = AsyncMock(return_value=admin)

        with pytest.raises(DomainError):
            await DeleteUserUseCase(uow=mock_uow).execute(user_id=1, actor=admin)

        mock_uow.user_command_repo.delete.assert_not_awaited()

    async def test_delete_unknown_user(self, mock_uow, admin):
        mock_uow.user_query_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await DeleteUserUseCase(uow=mock_uow).execute(user_id=404, actor=admin)

    async def test_user_with_reservations_conflicts(self, mock_uow, admin, owner):
        mock_uow.user_query_repo.get_by_id = AsyncMock(return_value=owner)
        mock_uow.user_command_repo.delete = AsyncMock(
            side_effect=ConflictError('User still owns courses or reservations')
        )

        with pytest.raises(ConflictError):
            await DeleteUserUseCase(uow=mock_uow).execute(user_id=2, actor=admin)

        mock_uow.commit.assert_not_awaited()
