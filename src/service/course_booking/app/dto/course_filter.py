from typing import Optional

import attrs

from src.service.course_booking.domain.enum.course_status import CourseModality, CourseStatus


@attrs.define(frozen=True)
class CourseFilter:
    """Listing filters, category and instructor match case-insensitively on substrings"""

    status: Optional[CourseStatus] = None
    category: Optional[str] = None
    modality: Optional[CourseModality] = None
    instructor: Optional[str] = None
