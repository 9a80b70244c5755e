from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, select

from src.platform.logging.loguru_io import Logger
from src.service.course_booking.app.dto.course_filter import CourseFilter
from src.service.course_booking.app.dto.page import Page
from src.service.course_booking.app.interface.i_course_query_repo import ICourseQueryRepo
from src.service.course_booking.domain.entity.course_entity import CourseEntity
from src.service.course_booking.domain.enum.course_status import CourseStatus
from src.service.course_booking.driven_adapter.model.course_model import CourseModel
from src.service.course_booking.driven_adapter.model_mapper import course_to_entity
from src.service.course_booking.driven_adapter.repo.session_scoped_repo import SessionScopedRepo


class CourseQueryRepoImpl(SessionScopedRepo, ICourseQueryRepo):
    """Course reads, either on the UoW session or on a session of their own"""

    @Logger.io
    async def get_by_id(self, *, course_id: int) -> Optional[CourseEntity]:
        async with self._get_session() as session:
            result = await session.execute(
                select(CourseModel)
                .where(CourseModel.id == course_id)
                .execution_options(populate_existing=True)
            )
            course_model = result.scalar_one_or_none()
            return course_to_entity(course_model) if course_model else None

    @Logger.io
    async def list_courses(
        self, *, course_filter: CourseFilter, page: int, limit: int
    ) -> Page[CourseEntity]:
        conditions = []
        if course_filter.status is not None:
            conditions.append(CourseModel.status == course_filter.status.value)
        if course_filter.modality is not None:
            conditions.append(CourseModel.modality == course_filter.modality.value)
        if course_filter.category:
            conditions.append(CourseModel.category.ilike(f'%{course_filter.category}%'))
        if course_filter.instructor:
            conditions.append(CourseModel.instructor.ilike(f'%{course_filter.instructor}%'))

        async with self._get_session() as session:
            total = await session.scalar(
                select(func.count()).select_from(CourseModel).where(*conditions)
            )
            result = await session.execute(
                select(CourseModel)
                .where(*conditions)
                .order_by(CourseModel.start_date.asc(), CourseModel.id.asc())
                .offset((page - 1) * limit)
                .limit(limit)
            )
            courses = [course_to_entity(row) for row in result.scalars().all()]

        return Page(items=courses, total=total or 0, page=page, limit=limit)

    @Logger.io
    async def list_reservable(self, *, now: datetime) -> List[CourseEntity]:
        async with self._get_session() as session:
            result = await session.execute(
                select(CourseModel)
                .where(
                    CourseModel.status == CourseStatus.ACTIVE.value,
                    CourseModel.start_date > now,
                    CourseModel.available_seats > 0,
                )
                .order_by(CourseModel.start_date.asc(), CourseModel.id.asc())
            )
            return [course_to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def list_active_categories(self) -> List[str]:
        async with self._get_session() as session:
            result = await session.execute(
                select(CourseModel.category)
                .where(CourseModel.status == CourseStatus.ACTIVE.value)
                .distinct()
                .order_by(CourseModel.category.asc())
            )
            return list(result.scalars().all())
