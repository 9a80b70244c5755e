from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import JSON, CheckConstraint, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base
from src.platform.types.utc_datetime import UtcDateTime, utc_now


class CourseModel(Base):
    __tablename__ = 'course'
    __table_args__ = (
        CheckConstraint('max_seats >= 1', name='ck_course_max_seats_positive'),
        CheckConstraint(
            'available_seats >= 0 AND available_seats <= max_seats',
            name='ck_course_available_seats_bounds',
        ),
        CheckConstraint('price >= 0', name='ck_course_price_non_negative'),
        Index('ix_course_status_start_date', 'status', 'start_date'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    max_seats: Mapped[int] = mapped_column(Integer, nullable=False)
    available_seats: Mapped[int] = mapped_column(Integer, nullable=False)
    start_date: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
    end_date: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='draft', nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0, nullable=False)
    modality: Mapped[str] = mapped_column(String(20), default='in_person', nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    instructor: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    requirements: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    materials: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    created_by: Mapped[int] = mapped_column(Integer, ForeignKey('user.id'), nullable=False)
    created_at: Mapped[datetime] = mapped_column(UtcDateTime, default=utc_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        UtcDateTime, default=utc_now, onupdate=utc_now, nullable=False
    )
