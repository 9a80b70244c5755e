#!/usr/bin/env python3
"""
Create Admin Script
Create (or reuse) an admin account and print a bearer token for it

Usage:
    python script/create_admin.py admin@example.com "Course Admin"
"""

import asyncio
import sys

from src.platform.database.orm_db_setting import Database, create_db_and_tables, dispose_engine
from src.service.course_booking.domain.entity.user_entity import UserEntity, UserRole
from src.service.course_booking.driven_adapter.repo.user_command_repo_impl import (
    UserCommandRepoImpl,
)
from src.service.course_booking.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.course_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


DEFAULT_EMAIL = 'admin@example.com'
DEFAULT_NAME = 'Course Admin'


async def create_admin(email: str, name: str) -> UserEntity:
    user_repo = UserCommandRepoImpl(session_factory=Database().session)
    user_query_repo = UserQueryRepoImpl(session_factory=Database().session)

    existing = await user_query_repo.get_by_email(email=email)
    if existing:
        print(f'   ℹ️  Admin already exists: ID={existing.id}, Email={existing.email}')
        return existing

    admin = await user_repo.create(
        user=UserEntity(email=email, name=name, role=UserRole.ADMIN, is_active=True)
    )
    print(f'   ✅ Created admin: ID={admin.id}, Email={admin.email}')
    return admin


async def main() -> None:
    email = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_EMAIL
    name = sys.argv[2] if len(sys.argv) > 2 else DEFAULT_NAME

    try:
        await create_db_and_tables()
        admin = await create_admin(email, name)
        print(f'   🔑 Bearer token: {JwtAuth().create_jwt_token(admin)}')
    finally:
        await dispose_engine()


if __name__ == '__main__':
    asyncio.run(main())
