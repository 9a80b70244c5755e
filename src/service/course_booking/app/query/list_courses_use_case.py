from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.types.utc_datetime import utc_now
from src.service.course_booking.app.dto.course_filter import CourseFilter
from src.service.course_booking.app.dto.page import Page
from src.service.course_booking.app.interface.i_course_query_repo import ICourseQueryRepo
from src.service.course_booking.domain.entity.course_entity import CourseEntity
from src.service.course_booking.domain.entity.user_entity import UserEntity
from src.service.course_booking.domain.enum.course_status import CourseStatus


class ListCoursesUseCase:
    def __init__(self, *, course_query_repo: ICourseQueryRepo) -> None:
        self.course_query_repo = course_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        course_query_repo: ICourseQueryRepo = Depends(Provide[Container.course_query_repo]),
    ) -> Self:
        return cls(course_query_repo=course_query_repo)

    @Logger.io
    async def list_courses(
        self,
        *,
        course_filter: CourseFilter,
        page: int,
        limit: int,
        viewer: Optional[UserEntity] = None,
    ) -> Page[CourseEntity]:
        if not (viewer and viewer.is_admin):
            course_filter = CourseFilter(
                status=CourseStatus.ACTIVE,
                category=course_filter.category,
                modality=course_filter.modality,
                instructor=course_filter.instructor,
            )
        return await self.course_query_repo.list_courses(
            course_filter=course_filter, page=page, limit=limit
        )

    @Logger.io
    async def list_reservable(self) -> List[CourseEntity]:
        """Active courses that have not started and still have seats"""
        courses = await self.course_query_repo.list_reservable(now=utc_now())

        Logger.base.info(f'✅ [LIST_RESERVABLE] Found {len(courses)} reservable courses')
        return courses

    @Logger.io
    async def list_categories(self) -> List[str]:
        return await self.course_query_repo.list_active_categories()
