#!/usr/bin/env python3
"""
Database Seed Script
Populate demo data into the database

Features:
1. Create Users - 1 admin + 2 attendees
2. Create Courses - a handful of active courses starting in the next weeks
3. Print bearer tokens for every seeded user
"""

import asyncio
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal

from src.platform.config.di import container
from src.platform.database.orm_db_setting import Database, create_db_and_tables, dispose_engine
from src.platform.types.utc_datetime import utc_now
from src.service.course_booking.app.command.create_course_use_case import CreateCourseUseCase
from src.service.course_booking.domain.entity.user_entity import UserEntity, UserRole
from src.service.course_booking.domain.enum.course_status import CourseModality, CourseStatus
from src.service.course_booking.driven_adapter.repo.user_command_repo_impl import (
    UserCommandRepoImpl,
)
from src.service.course_booking.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.course_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


@dataclass
class UserConfig:
    """User seed configuration"""

    email: str
    name: str
    role: UserRole


@dataclass
class CourseConfig:
    title: str
    description: str
    category: str
    instructor: str
    max_seats: int
    starts_in_days: int
    length_days: int
    price: Decimal
    modality: CourseModality


TEST_USERS = [
    UserConfig(email='admin@example.com', name='Course Admin', role=UserRole.ADMIN),
    UserConfig(email='ana@example.com', name='Ana Attendee', role=UserRole.USER),
    UserConfig(email='ben@example.com', name='Ben Attendee', role=UserRole.USER),
]

TEST_COURSES = [
    CourseConfig(
        title='Async Python in Production',
        description='asyncio, SQLAlchemy 2 and FastAPI from the ground up',
        category='programming',
        instructor='Ada Lovelace',
        max_seats=20,
        starts_in_days=14,
        length_days=2,
        price=Decimal('1500.00'),
        modality=CourseModality.HYBRID,
    ),
    CourseConfig(
        title='Data Pipelines Workshop',
        description='Batch and streaming pipelines with a relational sink',
        category='data',
        instructor='Grace Hopper',
        max_seats=12,
        starts_in_days=21,
        length_days=3,
        price=Decimal('2499.99'),
        modality=CourseModality.IN_PERSON,
    ),
    CourseConfig(
        title='Last Seat Masterclass',
        description='A single-seat course to try the capacity limit by hand',
        category='programming',
        instructor='Alan Turing',
        max_seats=1,
        starts_in_days=30,
        length_days=1,
        price=Decimal('0'),
        modality=CourseModality.VIRTUAL,
    ),
]


async def create_users() -> list[UserEntity]:
    print(f'👥 Creating {len(TEST_USERS)} users...')
    user_repo = UserCommandRepoImpl(session_factory=Database().session)
    user_query_repo = UserQueryRepoImpl(session_factory=Database().session)

    users = []
    for config in TEST_USERS:
        user = await user_query_repo.get_by_email(email=config.email)
        if user is None:
            user = await user_repo.create(
                user=UserEntity(email=config.email, name=config.name, role=config.role)
            )
            print(f'   ✅ Created {config.role}: ID={user.id}, Email={user.email}')
        else:
            print(f'   ℹ️  Reusing {config.role}: ID={user.id}, Email={user.email}')
        users.append(user)
    return users


async def create_courses(admin: UserEntity) -> None:
    print(f'📚 Creating {len(TEST_COURSES)} courses...')
    use_case = CreateCourseUseCase(uow=container.uow())
    now = utc_now()

    for config in TEST_COURSES:
        start_date = now + timedelta(days=config.starts_in_days)
        course = await use_case.execute(
            actor=admin,
            title=config.title,
            description=config.description,
            max_seats=config.max_seats,
            start_date=start_date,
            end_date=start_date + timedelta(days=config.length_days),
            category=config.category,
            instructor=config.instructor,
            status=CourseStatus.ACTIVE,
            price=config.price,
            modality=config.modality,
        )
        print(f'   ✅ Course ID={course.id}: {course.title} ({course.max_seats} seats)')


async def main() -> None:
    try:
        await create_db_and_tables()
        users = await create_users()
        await create_courses(admin=users[0])

        jwt_auth = JwtAuth()
        print('🔑 Bearer tokens:')
        for user in users:
            print(f'   {user.email}: {jwt_auth.create_jwt_token(user)}')
    finally:
        await dispose_engine()


if __name__ == '__main__':
    asyncio.run(main())
