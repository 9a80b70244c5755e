"""Reservation read model joined with the course and user it points to."""

from datetime import datetime
from typing import Optional

import attrs

from src.service.course_booking.domain.entity.reservation_entity import ReservationEntity
from src.service.course_booking.domain.enum.course_status import CourseModality


@attrs.define(frozen=True)
class CourseSummary:
    id: int
    title: str
    start_date: datetime
    end_date: datetime
    instructor: str
    modality: CourseModality


@attrs.define(frozen=True)
class UserSummary:
    id: int
    name: str
    email: str


@attrs.define(frozen=True)
class ReservationDetail:
    reservation: ReservationEntity
    course: CourseSummary
    user: Optional[UserSummary] = None
