from abc import ABC, abstractmethod
from datetime import datetime

from src.service.course_booking.domain.entity.course_entity import CourseEntity


class ISeatLedger(ABC):
    """
    Course seat counter

    Both writes are single conditional UPDATEs, bounds live in the WHERE clause
    so concurrent callers can never push available_seats outside [0, max_seats].
    """

    @abstractmethod
    async def reserve_seat(self, *, course_id: int, now: datetime) -> int:
        """
        Take one seat, return the remaining count

        Raises:
            NotFoundError: course does not exist
            CourseNotAvailableError: course is not active or has already started
            CapacityExhaustedError: no seats left
        """
        pass

    @abstractmethod
    async def release_seat(self, *, course_id: int) -> int:
        """
        Give one seat back, return the remaining count

        Raises:
            CapacityOverflowError: course is already at max_seats
        """
        pass

    @staticmethod
    def can_reserve(course: CourseEntity, *, now: datetime) -> bool:
        return course.can_reserve(now=now)
