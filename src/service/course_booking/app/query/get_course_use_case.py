from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.course_booking.app.interface.i_course_query_repo import ICourseQueryRepo
from src.service.course_booking.domain.entity.course_entity import CourseEntity
from src.service.course_booking.domain.entity.user_entity import UserEntity
from src.service.course_booking.domain.enum.course_status import CourseStatus


class GetCourseUseCase:
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
    async def get_by_id(
        self, *, course_id: int, viewer: Optional[UserEntity] = None
    ) -> CourseEntity:
        course = await self.course_query_repo.get_by_id(course_id=course_id)
        if not course:
            raise NotFoundError('Course not found')

        # Drafts and closed courses are only visible to admins
        if course.status != CourseStatus.ACTIVE and not (viewer and viewer.is_admin):
            raise NotFoundError('Course not found')

        return course
