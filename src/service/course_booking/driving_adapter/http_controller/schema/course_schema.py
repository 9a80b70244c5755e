from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import BaseModel, Field, field_validator

from src.service.course_booking.domain.entity.course_entity import MAX_SEATS_LIMIT, CourseEntity
from src.service.course_booking.domain.enum.course_status import CourseModality, CourseStatus


# Exact decimal amount, serialized as a string so no precision is lost on the wire
Money = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]


class CourseCreateRequest(BaseModel):
    title: str = Field(min_length=3, max_length=100)
    description: str = Field(min_length=10, max_length=1000)
    max_seats: int = Field(ge=1, le=MAX_SEATS_LIMIT)
    start_date: datetime
    end_date: datetime
    category: str = Field(min_length=1, max_length=50)
    instructor: str = Field(min_length=1, max_length=100)
    status: CourseStatus = CourseStatus.DRAFT
    price: Money = Decimal('0')
    modality: CourseModality = CourseModality.IN_PERSON
    location: Optional[str] = Field(default=None, max_length=200)
    requirements: List[str] = []
    materials: List[str] = []
    image_url: Optional[str] = Field(default=None, max_length=500)

    class Config:
        json_schema_extra = {
            'example': {
                'title': 'Async Python in Production',
                'description': 'Two days of asyncio, SQLAlchemy and FastAPI',
                'max_seats': 20,
                'start_date': '2026-03-01T09:00:00Z',
                'end_date': '2026-03-02T17:00:00Z',
                'category': 'programming',
                'instructor': 'Ada Lovelace',
                'status': 'active',
                'price': '1500.00',
                'modality': 'hybrid',
            }
        }


class CourseUpdateRequest(BaseModel):
    """Every field optional, only the ones sent are applied"""

    title: Optional[str] = Field(default=None, min_length=3, max_length=100)
    description: Optional[str] = Field(default=None, min_length=10, max_length=1000)
    max_seats: Optional[int] = Field(default=None, ge=1, le=MAX_SEATS_LIMIT)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    category: Optional[str] = Field(default=None, min_length=1, max_length=50)
    instructor: Optional[str] = Field(default=None, min_length=1, max_length=100)
    status: Optional[CourseStatus] = None
    price: Optional[Money] = None
    modality: Optional[CourseModality] = None
    location: Optional[str] = Field(default=None, max_length=200)
    requirements: Optional[List[str]] = None
    materials: Optional[List[str]] = None
    image_url: Optional[str] = Field(default=None, max_length=500)

    @field_validator('title', 'description', 'category', 'instructor')
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v


class CourseResponse(BaseModel):
    id: int
    title: str
    description: str
    max_seats: int
    available_seats: int
    start_date: datetime
    end_date: datetime
    status: CourseStatus
    price: Decimal
    modality: CourseModality
    category: str
    instructor: str
    location: Optional[str] = None
    requirements: List[str] = []
    materials: List[str] = []
    image_url: Optional[str] = None
    created_by: int
    is_full: bool
    occupancy_percentage: int
    duration_days: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, course: CourseEntity) -> 'CourseResponse':
        assert course.id is not None
        return cls(
            id=course.id,
            title=course.title,
            description=course.description,
            max_seats=course.max_seats,
            available_seats=course.available_seats,
            start_date=course.start_date,
            end_date=course.end_date,
            status=course.status,
            price=course.price,
            modality=course.modality,
            category=course.category,
            instructor=course.instructor,
            location=course.location,
            requirements=course.requirements,
            materials=course.materials,
            image_url=course.image_url,
            created_by=course.created_by,
            is_full=course.is_full,
            occupancy_percentage=course.occupancy_percentage,
            duration_days=course.duration_days,
            created_at=course.created_at,
            updated_at=course.updated_at,
        )


class CourseListResponse(BaseModel):
    items: List[CourseResponse]
    total: int
    page: int
    limit: int
    pages: int
