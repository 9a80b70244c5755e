from typing import Any, Awaitable, Callable

import pytest

from src.service.course_booking.domain.entity.course_entity import CourseEntity
from src.service.course_booking.domain.entity.user_entity import UserEntity, UserRole
from test.shared.utils import build_course, create_course_in_db, create_user_in_db


@pytest.fixture
async def seeded_admin(clean_database: None) -> UserEntity:
    return await create_user_in_db('ledger-admin@test.com', 'Ledger Admin', UserRole.ADMIN)


@pytest.fixture
def seed_course(seeded_admin: UserEntity) -> Callable[..., Awaitable[CourseEntity]]:
    async def _seed(**kwargs: Any) -> CourseEntity:
        assert seeded_admin.id is not None
        return await create_course_in_db(build_course(created_by=seeded_admin.id, **kwargs))

    return _seed


@pytest.fixture
def seed_users(clean_database: None) -> Callable[[int], Awaitable[list[UserEntity]]]:
    async def _seed(count: int) -> list[UserEntity]:
        return [
            await create_user_in_db(f'student{i}@test.com', f'Student {i}') for i in range(count)
        ]

    return _seed
