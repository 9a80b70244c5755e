from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.platform.types.utc_datetime import ensure_utc, utc_now
from src.service.course_booking.domain.entity.course_entity import CourseEntity
from src.service.course_booking.domain.entity.user_entity import UserEntity
from src.service.course_booking.domain.enum.course_status import CourseModality, CourseStatus


class CreateCourseUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.uow])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(
        self,
        *,
        actor: UserEntity,
        title: str,
        description: str,
        max_seats: int,
        start_date: datetime,
        end_date: datetime,
        category: str,
        instructor: str,
        status: CourseStatus = CourseStatus.DRAFT,
        price: Decimal = Decimal('0'),
        modality: CourseModality = CourseModality.IN_PERSON,
        location: Optional[str] = None,
        requirements: Optional[List[str]] = None,
        materials: Optional[List[str]] = None,
        image_url: Optional[str] = None,
    ) -> CourseEntity:
        actor.validate_admin()
        assert actor.id is not None

        with (
            metrics.track_reservation('create_course'),
            self.tracer.start_as_current_span('use_case.create_course'),
        ):
            course = CourseEntity.create(
                title=title,
                description=description,
                max_seats=max_seats,
                start_date=ensure_utc(start_date),
                end_date=ensure_utc(end_date),
                category=category,
                instructor=instructor,
                created_by=actor.id,
                now=utc_now(),
                status=status,
                price=price,
                modality=modality,
                location=location,
                requirements=requirements,
                materials=materials,
                image_url=image_url,
            )

            async with self.uow:
                course = await self.uow.course_command_repo.create(course=course)
                await self.uow.commit()

            metrics.update_available_seats(
                course_id=course.id, available_seats=course.available_seats
            )
            return course
