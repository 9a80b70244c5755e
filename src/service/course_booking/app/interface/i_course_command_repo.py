from abc import ABC, abstractmethod
from typing import Optional

from src.service.course_booking.domain.entity.course_entity import CourseEntity


class ICourseCommandRepo(ABC):
    """Course write operations, the seat counter itself is owned by ISeatLedger"""

    @abstractmethod
    async def create(self, *, course: CourseEntity) -> CourseEntity:
        pass

    @abstractmethod
    async def update_details(self, *, course: CourseEntity) -> CourseEntity:
        """Persist every editable field except max_seats/available_seats"""
        pass

    @abstractmethod
    async def resize_capacity(self, *, course_id: int, new_max_seats: int) -> Optional[CourseEntity]:
        """
        Change max_seats and shift available_seats by the same delta in one UPDATE.

        Returns None when the new capacity is below the seats taken at write time.
        """
        pass

    @abstractmethod
    async def delete(self, *, course_id: int) -> bool:
        pass
