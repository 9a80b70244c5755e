from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from src.service.course_booking.app.dto.course_filter import CourseFilter
from src.service.course_booking.app.dto.page import Page
from src.service.course_booking.domain.entity.course_entity import CourseEntity


class ICourseQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, course_id: int) -> Optional[CourseEntity]:
        pass

    @abstractmethod
    async def list_courses(
        self, *, course_filter: CourseFilter, page: int, limit: int
    ) -> Page[CourseEntity]:
        """Ordered by start_date ascending"""
        pass

    @abstractmethod
    async def list_reservable(self, *, now: datetime) -> List[CourseEntity]:
        """Active, not yet started, seats left"""
        pass

    @abstractmethod
    async def list_active_categories(self) -> List[str]:
        pass
