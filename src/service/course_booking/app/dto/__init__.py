"""Application layer DTOs"""

from src.service.course_booking.app.dto.course_filter import CourseFilter
from src.service.course_booking.app.dto.page import Page
from src.service.course_booking.app.dto.reservation_detail import (
    CourseSummary,
    ReservationDetail,
    UserSummary,
)

__all__ = ['CourseFilter', 'CourseSummary', 'Page', 'ReservationDetail', 'UserSummary']
