from abc import ABC, abstractmethod
from typing import Optional

from src.service.course_booking.app.dto.page import Page
from src.service.course_booking.domain.entity.user_entity import UserEntity, UserRole


class IUserQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, user_id: int) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def get_by_email(self, *, email: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def list_users(
        self,
        *,
        role: Optional[UserRole],
        is_active: Optional[bool],
        page: int,
        limit: int,
    ) -> Page[UserEntity]:
        """Newest accounts first"""
