from typing import Any, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.platform.types.utc_datetime import ensure_utc, utc_now
from src.service.course_booking.domain.entity.course_entity import CourseEntity
from src.service.course_booking.domain.entity.user_entity import UserEntity


EDITABLE_FIELDS = frozenset(
    {
        'title',
        'description',
        'start_date',
        'end_date',
        'status',
        'price',
        'modality',
        'category',
        'instructor',
        'location',
        'requirements',
        'materials',
        'image_url',
    }
)
NULLABLE_FIELDS = frozenset({'location', 'image_url'})


class UpdateCourseUseCase:
    """
    Partial course edit

    A capacity change shifts available_seats by the same delta, seats already taken are kept.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.uow])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(
        self, *, course_id: int, actor: UserEntity, changes: dict[str, Any]
    ) -> CourseEntity:
        actor.validate_admin()

        unknown = set(changes) - EDITABLE_FIELDS - {'max_seats'}
        if unknown:
            raise DomainError(f'Cannot update fields: {", ".join(sorted(unknown))}')

        with (
            metrics.track_reservation('update_course'),
            self.tracer.start_as_current_span(
                'use_case.update_course', attributes={'course.id': course_id}
            ),
        ):
            async with self.uow:
                course = await self.uow.course_query_repo.get_by_id(course_id=course_id)
                if not course:
                    raise NotFoundError('Course not found')

                details = {
                    k: v
                    for k, v in changes.items()
                    if k in EDITABLE_FIELDS and (v is not None or k in NULLABLE_FIELDS)
                }
                for date_field in ('start_date', 'end_date'):
                    if details.get(date_field) is not None:
                        details[date_field] = ensure_utc(details[date_field])

                if details:
                    updated = attrs.evolve(course, **details)
                    if 'start_date' in details or 'end_date' in details:
                        self._validate_dates(original=course, updated=updated)
                    course = await self.uow.course_command_repo.update_details(course=updated)

                new_max_seats = changes.get('max_seats')
                if new_max_seats is not None and new_max_seats != course.max_seats:
                    course.validate_capacity_change(new_max_seats=new_max_seats)
                    resized = await self.uow.course_command_repo.resize_capacity(
                        course_id=course_id, new_max_seats=new_max_seats
                    )
                    if resized is None:
                        # Seats were taken between the read and the UPDATE
                        raise DomainError('max_seats cannot be lower than the seats already reserved')
                    course = resized

                await self.uow.commit()

            metrics.update_available_seats(
                course_id=course_id, available_seats=course.available_seats
            )
            Logger.base.info(f'✏️ [UPDATE_COURSE] {course_id} fields={sorted(changes)}')
            return course

    @staticmethod
    def _validate_dates(*, original: CourseEntity, updated: CourseEntity) -> None:
        if updated.start_date != original.start_date:
            CourseEntity.validate_schedule(
                start_date=updated.start_date, end_date=updated.end_date, now=utc_now()
            )
        elif updated.end_date <= updated.start_date:
            raise DomainError('End date must be after the start date')
