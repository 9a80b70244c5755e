from datetime import datetime
from decimal import Decimal
import math
from typing import List, Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.course_booking.domain.enum.course_status import CourseModality, CourseStatus


MAX_SEATS_LIMIT = 1000
MONEY_QUANTUM = Decimal('0.01')


def to_money(value: object) -> Decimal:
    return Decimal(str(value)).quantize(MONEY_QUANTUM)


def _validate_length(min_len: int, max_len: int):
    def validator(instance: object, attribute: attrs.Attribute, value: Optional[str]) -> None:
        if value is None:
            return
        if not min_len <= len(value.strip()) <= max_len:
            raise DomainError(f'Course {attribute.name} must be {min_len}-{max_len} characters')

    return validator


def _validate_max_seats(instance: object, attribute: attrs.Attribute, value: int) -> None:
    if not 1 <= value <= MAX_SEATS_LIMIT:
        raise DomainError(f'max_seats must be between 1 and {MAX_SEATS_LIMIT}')


def _validate_price(instance: object, attribute: attrs.Attribute, value: Decimal) -> None:
    if value < 0:
        raise DomainError('Price cannot be negative')


@attrs.define
class CourseEntity:
    title: str = attrs.field(validator=_validate_length(3, 100))
    description: str = attrs.field(validator=_validate_length(10, 1000))
    max_seats: int = attrs.field(validator=_validate_max_seats)
    start_date: datetime
    end_date: datetime
    category: str = attrs.field(validator=_validate_length(1, 50))
    instructor: str = attrs.field(validator=_validate_length(1, 100))
    created_by: int
    available_seats: int = attrs.field(
        default=attrs.Factory(lambda self: self.max_seats, takes_self=True)
    )
    status: CourseStatus = CourseStatus.DRAFT
    price: Decimal = attrs.field(
        default=Decimal('0'), converter=to_money, validator=_validate_price
    )
    modality: CourseModality = CourseModality.IN_PERSON
    location: Optional[str] = attrs.field(default=None, validator=_validate_length(0, 200))
    requirements: List[str] = attrs.field(factory=list)
    materials: List[str] = attrs.field(factory=list)
    image_url: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __attrs_post_init__(self) -> None:
        if not 0 <= self.available_seats <= self.max_seats:
            raise DomainError('available_seats must be between 0 and max_seats')

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        title: str,
        description: str,
        max_seats: int,
        start_date: datetime,
        end_date: datetime,
        category: str,
        instructor: str,
        created_by: int,
        now: datetime,
        status: CourseStatus = CourseStatus.DRAFT,
        price: Decimal = Decimal('0'),
        modality: CourseModality = CourseModality.IN_PERSON,
        location: Optional[str] = None,
        requirements: Optional[List[str]] = None,
        materials: Optional[List[str]] = None,
        image_url: Optional[str] = None,
    ) -> 'CourseEntity':
        cls.validate_schedule(start_date=start_date, end_date=end_date, now=now)
        return cls(
            title=title.strip(),
            description=description.strip(),
            max_seats=max_seats,
            available_seats=max_seats,
            start_date=start_date,
            end_date=end_date,
            category=category.strip(),
            instructor=instructor.strip(),
            created_by=created_by,
            status=status,
            price=price,
            modality=modality,
            location=location,
            requirements=requirements or [],
            materials=materials or [],
            image_url=image_url,
            created_at=now,
            updated_at=now,
        )

    @staticmethod
    def validate_schedule(*, start_date: datetime, end_date: datetime, now: datetime) -> None:
        if start_date <= now:
            raise DomainError('Start date must be in the future')
        if end_date <= start_date:
            raise DomainError('End date must be after the start date')

    @property
    def taken_seats(self) -> int:
        return self.max_seats - self.available_seats

    @property
    def is_full(self) -> bool:
        return self.available_seats == 0

    @property
    def occupancy_percentage(self) -> int:
        if self.max_seats == 0:
            return 0
        return round(self.taken_seats / self.max_seats * 100)

    @property
    def duration_days(self) -> int:
        return math.ceil((self.end_date - self.start_date).total_seconds() / 86400)

    def is_open_for_reservation(self, *, now: datetime) -> bool:
        return self.status == CourseStatus.ACTIVE and now < self.start_date

    def can_reserve(self, *, now: datetime) -> bool:
        return self.is_open_for_reservation(now=now) and self.available_seats > 0

    @Logger.io
    def validate_capacity_change(self, *, new_max_seats: int) -> None:
        """A smaller capacity must still hold every seat already taken"""
        if not 1 <= new_max_seats <= MAX_SEATS_LIMIT:
            raise DomainError(f'max_seats must be between 1 and {MAX_SEATS_LIMIT}')
        if new_max_seats < self.taken_seats:
            raise DomainError(
                f'max_seats cannot be lower than the {self.taken_seats} seats already reserved'
            )
