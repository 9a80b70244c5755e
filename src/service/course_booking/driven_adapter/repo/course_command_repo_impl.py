from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.course_booking.app.interface.i_course_command_repo import ICourseCommandRepo
from src.service.course_booking.domain.entity.course_entity import CourseEntity
from src.service.course_booking.driven_adapter.model.course_model import CourseModel
from src.service.course_booking.driven_adapter.model_mapper import (
    course_to_entity,
    course_to_model,
)
from src.service.course_booking.driven_adapter.repo.integrity_errors import is_foreign_key_violation
from src.service.course_booking.driven_adapter.repo.session_scoped_repo import SessionScopedRepo


class CourseCommandRepoImpl(SessionScopedRepo, ICourseCommandRepo):
    @Logger.io
    async def create(self, *, course: CourseEntity) -> CourseEntity:
        async with self._get_session() as session:
            course_model = course_to_model(course)
            session.add(course_model)
            await session.flush()

            Logger.base.info(f'📚 [CREATE_COURSE] id={course_model.id} seats={course.max_seats}')
            return course_to_entity(course_model)

    @Logger.io
    async def update_details(self, *, course: CourseEntity) -> CourseEntity:
        assert course.id is not None
        async with self._get_session() as session:
            course_model = await self._fetch(session, course_id=course.id)
            if course_model is None:
                raise NotFoundError('Course not found')

            # Seat columns are owned by the seat ledger and resize_capacity
            course_model.title = course.title
            course_model.description = course.description
            course_model.start_date = course.start_date
            course_model.end_date = course.end_date
            course_model.status = course.status.value
            course_model.price = course.price
            course_model.modality = course.modality.value
            course_model.category = course.category
            course_model.instructor = course.instructor
            course_model.location = course.location
            course_model.requirements = list(course.requirements)
            course_model.materials = list(course.materials)
            course_model.image_url = course.image_url
            await session.flush()

            return course_to_entity(course_model)

    @Logger.io
    async def resize_capacity(
        self, *, course_id: int, new_max_seats: int
    ) -> Optional[CourseEntity]:
        stmt = (
            update(CourseModel)
            .where(
                CourseModel.id == course_id,
                CourseModel.max_seats - CourseModel.available_seats <= new_max_seats,
            )
            .values(
                max_seats=new_max_seats,
                available_seats=CourseModel.available_seats
                + (new_max_seats - CourseModel.max_seats),
            )
            .execution_options(synchronize_session=False)
        )

        async with self._get_session() as session:
            result = await session.execute(stmt)
            if result.rowcount == 0:
                return None

            course_model = await self._fetch(session, course_id=course_id)
            assert course_model is not None
            Logger.base.info(
                f'📚 [RESIZE_COURSE] id={course_id} max={course_model.max_seats} '
                f'available={course_model.available_seats}'
            )
            return course_to_entity(course_model)

    @Logger.io
    async def delete(self, *, course_id: int) -> bool:
        async with self._get_session() as session:
            try:
                result = await session.execute(
                    delete(CourseModel)
                    .where(CourseModel.id == course_id)
                    .execution_options(synchronize_session=False)
                )
            except IntegrityError as e:
                if is_foreign_key_violation(e):
                    raise ConflictError('Course has reservations and cannot be deleted') from e
                raise
            return result.rowcount > 0

    @staticmethod
    async def _fetch(session: AsyncSession, *, course_id: int) -> Optional[CourseModel]:
        # populate_existing: the seat columns may have been changed by a Core UPDATE
        result = await session.execute(
            select(CourseModel)
            .where(CourseModel.id == course_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
