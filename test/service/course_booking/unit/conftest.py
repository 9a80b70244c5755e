from unittest.mock import AsyncMock, MagicMock

import pytest

from src.service.course_booking.domain.entity.user_entity import UserEntity, UserRole


@pytest.fixture
def mock_uow() -> MagicMock:
    """Unit of Work double: every repo is an AsyncMock, `async with` yields the same object"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=None)
    uow.commit = AsyncMock()
    uow.course_command_repo = AsyncMock()
    uow.course_query_repo = AsyncMock()
    uow.reservation_command_repo = AsyncMock()
    uow.reservation_query_repo = AsyncMock()
    uow.seat_ledger = AsyncMock()
    uow.user_command_repo = AsyncMock()
    uow.user_command_repo.get_or_create = AsyncMock(side_effect=lambda user: user)
    uow.user_query_repo = AsyncMock()
    return uow


@pytest.fixture
def owner() -> UserEntity:
    return UserEntity(id=2, email='owner@test.com', name='Owner', role=UserRole.USER)


@pytest.fixture
def stranger() -> UserEntity:
    return UserEntity(id=3, email='stranger@test.com', name='Stranger', role=UserRole.USER)


@pytest.fixture
def admin() -> UserEntity:
    return UserEntity(id=1, email='admin@test.com', name='Admin', role=UserRole.ADMIN)
