"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.course_booking.driven_adapter.model.course_model import CourseModel
from src.service.course_booking.driven_adapter.model.reservation_model import ReservationModel
from src.service.course_booking.driven_adapter.model.user_model import UserModel

__all__ = [
    'CourseModel',
    'ReservationModel',
    'UserModel',
]
