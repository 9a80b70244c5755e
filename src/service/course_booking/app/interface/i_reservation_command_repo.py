from abc import ABC, abstractmethod

from src.service.course_booking.domain.entity.reservation_entity import ReservationEntity
from src.service.course_booking.domain.enum.reservation_status import ReservationStatus


class IReservationCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, reservation: ReservationEntity) -> ReservationEntity:
        """
        Raises:
            DuplicateReservationError: a row for (user_id, course_id) already exists
        """
        pass

    @abstractmethod
    async def save_transition(
        self,
        *,
        reservation: ReservationEntity,
        expected_status: ReservationStatus,
        require_unrated: bool = False,
    ) -> bool:
        """
        Compare-and-swap write of a lifecycle change.

        Only applied while the stored status still equals `expected_status`
        (and the stored rating is NULL when `require_unrated`). Returns False otherwise.
        """
        pass
