from abc import ABC, abstractmethod

from src.service.course_booking.domain.entity.user_entity import UserEntity


class IUserCommandRepo(ABC):
    """Account records, credentials live with the external identity provider"""

    @abstractmethod
    async def create(self, *, user: UserEntity) -> UserEntity:
        pass

    @abstractmethod
    async def get_or_create(self, *, user: UserEntity) -> UserEntity:
        """
        Row for an authenticated principal, inserted from its token claims on first sight

        Raises:
            ConflictError: the claimed email already belongs to another account
        """

    @abstractmethod
    async def update(self, *, user: UserEntity) -> UserEntity:
        """
        Raises:
            NotFoundError: no row with user.id
            ConflictError: email already in use
        """

    @abstractmethod
    async def delete(self, *, user_id: int) -> bool:
        """
        Raises:
            ConflictError: the user still owns courses or reservations
        """
