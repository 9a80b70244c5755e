"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.course_booking.app.command import (
    cancel_reservation_use_case,
    complete_reservation_use_case,
    confirm_reservation_use_case,
    create_course_use_case,
    create_reservation_use_case,
    delete_course_use_case,
    delete_user_use_case,
    rate_reservation_use_case,
    update_course_use_case,
    update_user_use_case,
)
from src.service.course_booking.app.query import (
    get_course_use_case,
    get_reservation_use_case,
    list_courses_use_case,
    list_reservations_use_case,
    user_query_use_case,
)
from src.service.course_booking.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    create_reservation_use_case,
    cancel_reservation_use_case,
    rate_reservation_use_case,
    confirm_reservation_use_case,
    complete_reservation_use_case,
    create_course_use_case,
    update_course_use_case,
    delete_course_use_case,
    update_user_use_case,
    delete_user_use_case,
    get_course_use_case,
    list_courses_use_case,
    get_reservation_use_case,
    list_reservations_use_case,
    user_query_use_case,
    role_auth,
]
