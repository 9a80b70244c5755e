from abc import ABC, abstractmethod
from typing import Optional

from uuid_utils import UUID

from src.service.course_booking.app.dto.page import Page
from src.service.course_booking.app.dto.reservation_detail import ReservationDetail
from src.service.course_booking.domain.entity.reservation_entity import ReservationEntity
from src.service.course_booking.domain.enum.reservation_status import ReservationStatus


class IReservationQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, reservation_id: UUID) -> Optional[ReservationEntity]:
        pass

    @abstractmethod
    async def get_detail(self, *, reservation_id: UUID) -> Optional[ReservationDetail]:
        pass

    @abstractmethod
    async def has_active_reservation(self, *, user_id: int, course_id: int) -> bool:
        pass

    @abstractmethod
    async def count_by_course(self, *, course_id: int, active_only: bool = False) -> int:
        pass

    @abstractmethod
    async def list_by_user(
        self, *, user_id: int, status: Optional[ReservationStatus], page: int, limit: int
    ) -> Page[ReservationDetail]:
        """Newest first"""
        pass

    @abstractmethod
    async def list_all(
        self,
        *,
        status: Optional[ReservationStatus],
        course_id: Optional[int],
        page: int,
        limit: int,
    ) -> Page[ReservationDetail]:
        """Newest first, with user summaries"""
        pass
