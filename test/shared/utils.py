from datetime import datetime, timedelta
from typing import Any, Optional

from fastapi.testclient import TestClient

from src.platform.database.orm_db_setting import Base, Database, get_engine
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.types.utc_datetime import utc_now
from src.service.course_booking.domain.entity.course_entity import CourseEntity
from src.service.course_booking.domain.entity.user_entity import UserEntity, UserRole
from src.service.course_booking.domain.enum.course_status import CourseStatus
from src.service.course_booking.driven_adapter.repo.user_command_repo_impl import (
    UserCommandRepoImpl,
)
from src.service.course_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from test.util_constant import (
    DEFAULT_COURSE_CATEGORY,
    DEFAULT_COURSE_DESCRIPTION,
    DEFAULT_COURSE_INSTRUCTOR,
    DEFAULT_COURSE_PRICE,
    DEFAULT_COURSE_TITLE,
)


async def truncate_all_tables() -> None:
    import src.service.course_booking.driven_adapter.model  # noqa: F401

    async with get_engine().begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            await conn.execute(table.delete())


async def create_user_in_db(email: str, name: str, role: UserRole = UserRole.USER) -> UserEntity:
    repo = UserCommandRepoImpl(session_factory=Database().session)
    return await repo.create(user=UserEntity(email=email, name=name, role=role))


def auth_headers(user: UserEntity) -> dict[str, str]:
    return {'Authorization': f'Bearer {JwtAuth().create_jwt_token(user)}'}


def build_course(
    *,
    created_by: int,
    max_seats: int = 10,
    status: CourseStatus = CourseStatus.ACTIVE,
    start_in: timedelta = timedelta(days=10),
    now: Optional[datetime] = None,
    **overrides: Any,
) -> CourseEntity:
    """Course entity that passes every validator, start date relative to `now`"""
    now = now or utc_now()
    start_date = now + start_in
    fields: dict[str, Any] = dict(
        title=DEFAULT_COURSE_TITLE,
        description=DEFAULT_COURSE_DESCRIPTION,
        max_seats=max_seats,
        start_date=start_date,
        end_date=start_date + timedelta(days=2),
        category=DEFAULT_COURSE_CATEGORY,
        instructor=DEFAULT_COURSE_INSTRUCTOR,
        created_by=created_by,
        status=status,
        price=DEFAULT_COURSE_PRICE,
        created_at=now,
        updated_at=now,
    )
    fields.update(overrides)
    return CourseEntity(**fields)


def course_payload(
    *, max_seats: int = 10, status: str = 'active', start_in: timedelta = timedelta(days=10)
) -> dict[str, Any]:
    start_date = utc_now() + start_in
    return {
        'title': DEFAULT_COURSE_TITLE,
        'description': DEFAULT_COURSE_DESCRIPTION,
        'max_seats': max_seats,
        'start_date': start_date.isoformat(),
        'end_date': (start_date + timedelta(days=2)).isoformat(),
        'category': DEFAULT_COURSE_CATEGORY,
        'instructor': DEFAULT_COURSE_INSTRUCTOR,
        'status': status,
        'price': DEFAULT_COURSE_PRICE,
    }


def create_course_via_api(
    client: TestClient, headers: dict[str, str], **kwargs: Any
) -> dict[str, Any]:
    response = client.post('/api/course', json=course_payload(**kwargs), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def assert_error(response: Any, status_code: int, code: str) -> None:
    assert response.status_code == status_code, response.text
    assert response.json()['code'] == code


def new_uow() -> SqlAlchemyUnitOfWork:
    """Fresh Unit of Work with its own session, one per concurrent caller"""
    return SqlAlchemyUnitOfWork(session_factory=Database().session)


async def create_course_in_db(course: CourseEntity) -> CourseEntity:
    async with new_uow() as uow:
        created = await uow.course_command_repo.create(course=course)
        await uow.commit()
    return created


async def fetch_course(course_id: int) -> Optional[CourseEntity]:
    async with new_uow() as uow:
        return await uow.course_query_repo.get_by_id(course_id=course_id)
