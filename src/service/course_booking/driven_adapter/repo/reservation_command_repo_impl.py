from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.types.uuid7_utils_types import to_std_uuid
from src.service.course_booking.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.course_booking.domain.entity.reservation_entity import ReservationEntity
from src.service.course_booking.domain.enum.reservation_status import ReservationStatus
from src.service.course_booking.domain.reservation_errors import DuplicateReservationError
from src.service.course_booking.driven_adapter.model.reservation_model import (
    UNIQUE_USER_COURSE_CONSTRAINT,
    ReservationModel,
)
from src.service.course_booking.driven_adapter.model_mapper import (
    reservation_to_entity,
    reservation_to_model,
)
from src.service.course_booking.driven_adapter.repo.integrity_errors import (
    is_foreign_key_violation,
    is_unique_violation,
)
from src.service.course_booking.driven_adapter.repo.session_scoped_repo import SessionScopedRepo


# PostgreSQL reports the constraint name, SQLite only the columns
_UNIQUE_VIOLATION_MARKERS = (
    UNIQUE_USER_COURSE_CONSTRAINT,
    'reservation.user_id, reservation.course_id',
)


class ReservationCommandRepoImpl(SessionScopedRepo, IReservationCommandRepo):
    @Logger.io
    async def create(self, *, reservation: ReservationEntity) -> ReservationEntity:
        async with self._get_session() as session:
            reservation_model = reservation_to_model(reservation)
            session.add(reservation_model)
            try:
                await session.flush()
            except IntegrityError as e:
                if is_unique_violation(e, _UNIQUE_VIOLATION_MARKERS):
                    raise DuplicateReservationError() from e
                if is_foreign_key_violation(e):
                    raise NotFoundError('Course or user no longer exists') from e
                raise

            return reservation_to_entity(reservation_model)

    @Logger.io
    async def save_transition(
        self,
        *,
        reservation: ReservationEntity,
        expected_status: ReservationStatus,
        require_unrated: bool = False,
    ) -> bool:
        conditions = [
            ReservationModel.id == to_std_uuid(reservation.id),
            ReservationModel.status == expected_status.value,
        ]
        if require_unrated:
            conditions.append(ReservationModel.rating.is_(None))

        stmt = (
            update(ReservationModel)
            .where(*conditions)
            .values(
                status=reservation.status.value,
                cancelled_at=reservation.cancelled_at,
                cancellation_reason=reservation.cancellation_reason,
                attended=reservation.attended,
                rating=reservation.rating,
                comment=reservation.comment,
                updated_at=reservation.updated_at,
            )
            .execution_options(synchronize_session=False)
        )

        async with self._get_session() as session:
            result = await session.execute(stmt)

        applied = result.rowcount == 1
        Logger.base.info(
            f'🔁 [SAVE_TRANSITION] id={reservation.id} {expected_status} -> {reservation.status} '
            f'applied={applied}'
        )
        return applied
