from enum import StrEnum


class ReservationStatus(StrEnum):
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'


# Active reservations hold a seat
ACTIVE_RESERVATION_STATUSES = frozenset({ReservationStatus.PENDING, ReservationStatus.CONFIRMED})


class PaymentMethod(StrEnum):
    CASH = 'cash'
    CARD = 'card'
    TRANSFER = 'transfer'
    FREE = 'free'
