from datetime import datetime
from decimal import Decimal
from typing import Optional
import uuid

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base
from src.platform.types.utc_datetime import UtcDateTime, utc_now


UNIQUE_USER_COURSE_CONSTRAINT = 'uq_reservation_user_course'


class ReservationModel(Base):
    __tablename__ = 'reservation'
    __table_args__ = (
        UniqueConstraint('user_id', 'course_id', name=UNIQUE_USER_COURSE_CONSTRAINT),
        CheckConstraint(
            'rating IS NULL OR (rating >= 1 AND rating <= 5)', name='ck_reservation_rating_range'
        ),
        CheckConstraint('amount_paid >= 0', name='ck_reservation_amount_paid_non_negative'),
        Index('ix_reservation_user_status', 'user_id', 'status'),
        Index('ix_reservation_course_status', 'course_id', 'status'),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)  # UUID7
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey('user.id'), nullable=False)
    course_id: Mapped[int] = mapped_column(Integer, ForeignKey('course.id'), nullable=False)
    reserved_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(20), default='pending', nullable=False)
    cancelled_at: Mapped[Optional[datetime]] = mapped_column(UtcDateTime, nullable=True)
    cancellation_reason: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    payment_method: Mapped[str] = mapped_column(String(20), default='free', nullable=False)
    payment_reference: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    amount_paid: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0, nullable=False)
    attended: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    rating: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    comment: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(UtcDateTime, default=utc_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        UtcDateTime, default=utc_now, onupdate=utc_now, nullable=False
    )
