"""
Seat Ledger - atomic course seat counter

Every write is one conditional UPDATE ... RETURNING. The bounds are part of the WHERE clause,
so two callers racing for the last seat cannot both match the row: the database
serializes them and the loser sees no returned row.

Only rejections are counted here. Applied moves are counted by the callers once their
transaction commits, a rolled-back claim never shows up as applied.
"""

from datetime import datetime

from opentelemetry import trace
from sqlalchemy import select, update

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.service.course_booking.app.interface.i_seat_ledger import ISeatLedger
from src.service.course_booking.domain.enum.course_status import CourseStatus
from src.service.course_booking.domain.reservation_errors import (
    CapacityExhaustedError,
    CapacityOverflowError,
    CourseNotAvailableError,
)
from src.service.course_booking.driven_adapter.model.course_model import CourseModel
from src.service.course_booking.driven_adapter.repo.session_scoped_repo import SessionScopedRepo


class SeatLedgerImpl(SessionScopedRepo, ISeatLedger):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def reserve_seat(self, *, course_id: int, now: datetime) -> int:
        with self.tracer.start_as_current_span(
            'seat_ledger.reserve',
            attributes={'course.id': course_id},
        ):
            stmt = (
                update(CourseModel)
                .where(
                    CourseModel.id == course_id,
                    CourseModel.available_seats > 0,
                    CourseModel.status == CourseStatus.ACTIVE.value,
                    CourseModel.start_date > now,
                )
                .values(available_seats=CourseModel.available_seats - 1)
                .returning(CourseModel.available_seats)
                .execution_options(synchronize_session=False)
            )

            async with self._get_session() as session:
                result = await session.execute(stmt)
                remaining = result.scalar_one_or_none()

                if remaining is None:
                    metrics.record_seat_operation(operation='reserve', applied=False)
                    await self._raise_reserve_rejection(session, course_id=course_id, now=now)

            Logger.base.info(f'💺 [RESERVE_SEAT] course={course_id} remaining={remaining}')
            return remaining

    @Logger.io
    async def release_seat(self, *, course_id: int) -> int:
        with self.tracer.start_as_current_span(
            'seat_ledger.release',
            attributes={'course.id': course_id},
        ):
            stmt = (
                update(CourseModel)
                .where(
                    CourseModel.id == course_id,
                    CourseModel.available_seats < CourseModel.max_seats,
                )
                .values(available_seats=CourseModel.available_seats + 1)
                .returning(CourseModel.available_seats)
                .execution_options(synchronize_session=False)
            )

            async with self._get_session() as session:
                result = await session.execute(stmt)
                remaining = result.scalar_one_or_none()

                if remaining is None:
                    metrics.record_seat_operation(operation='release', applied=False)
                    exists = await session.scalar(
                        select(CourseModel.id).where(CourseModel.id == course_id)
                    )
                    if exists is None:
                        raise NotFoundError('Course not found')
                    raise CapacityOverflowError()

            Logger.base.info(f'💺 [RELEASE_SEAT] course={course_id} remaining={remaining}')
            return remaining

    @staticmethod
    async def _raise_reserve_rejection(session, *, course_id: int, now: datetime) -> None:
        """Re-read the row to tell the caller which bound the UPDATE failed on"""
        row = (
            await session.execute(
                select(
                    CourseModel.status, CourseModel.start_date, CourseModel.available_seats
                ).where(CourseModel.id == course_id)
            )
        ).one_or_none()

        if row is None:
            raise NotFoundError('Course not found')
        if row.status != CourseStatus.ACTIVE.value or row.start_date <= now:
            raise CourseNotAvailableError()
        raise CapacityExhaustedError()
