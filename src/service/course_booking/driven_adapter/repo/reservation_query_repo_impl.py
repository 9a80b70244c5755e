from typing import Any, List, Optional

from sqlalchemy import func, select
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.platform.types.uuid7_utils_types import to_std_uuid
from src.service.course_booking.app.dto.page import Page
from src.service.course_booking.app.dto.reservation_detail import (
    CourseSummary,
    ReservationDetail,
    UserSummary,
)
from src.service.course_booking.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.course_booking.domain.entity.reservation_entity import ReservationEntity
from src.service.course_booking.domain.enum.course_status import CourseModality
from src.service.course_booking.domain.enum.reservation_status import (
    ACTIVE_RESERVATION_STATUSES,
    ReservationStatus,
)
from src.service.course_booking.driven_adapter.model.course_model import CourseModel
from src.service.course_booking.driven_adapter.model.reservation_model import ReservationModel
from src.service.course_booking.driven_adapter.model.user_model import UserModel
from src.service.course_booking.driven_adapter.model_mapper import reservation_to_entity
from src.service.course_booking.driven_adapter.repo.session_scoped_repo import SessionScopedRepo


_ACTIVE_STATUS_VALUES = [status.value for status in ACTIVE_RESERVATION_STATUSES]


class ReservationQueryRepoImpl(SessionScopedRepo, IReservationQueryRepo):
    @staticmethod
    def _detail_select():
        return (
            select(ReservationModel, CourseModel, UserModel)
            .join(CourseModel, ReservationModel.course_id == CourseModel.id)
            .join(UserModel, ReservationModel.user_id == UserModel.id)
        )

    @staticmethod
    def _to_detail(row: Any, *, with_user: bool = True) -> ReservationDetail:
        reservation_model, course_model, user_model = row
        return ReservationDetail(
            reservation=reservation_to_entity(reservation_model),
            course=CourseSummary(
                id=course_model.id,
                title=course_model.title,
                start_date=course_model.start_date,
                end_date=course_model.end_date,
                instructor=course_model.instructor,
                modality=CourseModality(course_model.modality),
            ),
            user=UserSummary(id=user_model.id, name=user_model.name, email=user_model.email)
            if with_user
            else None,
        )

    @Logger.io
    async def get_by_id(self, *, reservation_id: UUID) -> Optional[ReservationEntity]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ReservationModel)
                .where(ReservationModel.id == to_std_uuid(reservation_id))
                .execution_options(populate_existing=True)
            )
            reservation_model = result.scalar_one_or_none()
            return reservation_to_entity(reservation_model) if reservation_model else None

    @Logger.io
    async def get_detail(self, *, reservation_id: UUID) -> Optional[ReservationDetail]:
        async with self._get_session() as session:
            result = await session.execute(
                self._detail_select()
                .where(ReservationModel.id == to_std_uuid(reservation_id))
                .execution_options(populate_existing=True)
            )
            row = result.one_or_none()
            return self._to_detail(row) if row else None

    @Logger.io
    async def has_active_reservation(self, *, user_id: int, course_id: int) -> bool:
        async with self._get_session() as session:
            found = await session.scalar(
                select(ReservationModel.id)
                .where(
                    ReservationModel.user_id == user_id,
                    ReservationModel.course_id == course_id,
                    ReservationModel.status.in_(_ACTIVE_STATUS_VALUES),
                )
                .limit(1)
            )
            return found is not None

    @Logger.io
    async def count_by_course(self, *, course_id: int, active_only: bool = False) -> int:
        conditions = [ReservationModel.course_id == course_id]
        if active_only:
            conditions.append(ReservationModel.status.in_(_ACTIVE_STATUS_VALUES))

        async with self._get_session() as session:
            total = await session.scalar(
                select(func.count()).select_from(ReservationModel).where(*conditions)
            )
            return total or 0

    @Logger.io
    async def list_by_user(
        self, *, user_id: int, status: Optional[ReservationStatus], page: int, limit: int
    ) -> Page[ReservationDetail]:
        conditions = [ReservationModel.user_id == user_id]
        if status is not None:
            conditions.append(ReservationModel.status == status.value)
        return await self._paginate(conditions, page=page, limit=limit, with_user=False)

    @Logger.io
    async def list_all(
        self,
        *,
        status: Optional[ReservationStatus],
        course_id: Optional[int],
        page: int,
        limit: int,
    ) -> Page[ReservationDetail]:
        conditions = []
        if status is not None:
            conditions.append(ReservationModel.status == status.value)
        if course_id is not None:
            conditions.append(ReservationModel.course_id == course_id)
        return await self._paginate(conditions, page=page, limit=limit, with_user=True)

    async def _paginate(
        self, conditions: List[Any], *, page: int, limit: int, with_user: bool
    ) -> Page[ReservationDetail]:
        async with self._get_session() as session:
            total = await session.scalar(
                select(func.count()).select_from(ReservationModel).where(*conditions)
            )
            result = await session.execute(
                self._detail_select()
                .where(*conditions)
                .order_by(ReservationModel.reserved_at.desc(), ReservationModel.id.desc())
                .offset((page - 1) * limit)
                .limit(limit)
            )
            items = [self._to_detail(row, with_user=with_user) for row in result.all()]

        return Page(items=items, total=total or 0, page=page, limit=limit)
