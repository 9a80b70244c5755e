"""Application layer interfaces (Ports)"""

from src.service.course_booking.app.interface.i_course_command_repo import ICourseCommandRepo
from src.service.course_booking.app.interface.i_course_query_repo import ICourseQueryRepo
from src.service.course_booking.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.course_booking.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.course_booking.app.interface.i_seat_ledger import ISeatLedger
from src.service.course_booking.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.course_booking.app.interface.i_user_query_repo import IUserQueryRepo

__all__ = [
    'ICourseCommandRepo',
    'ICourseQueryRepo',
    'IReservationCommandRepo',
    'IReservationQueryRepo',
    'ISeatLedger',
    'IUserCommandRepo',
    'IUserQueryRepo',
]
