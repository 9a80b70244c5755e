"""
Unit tests for CancelReservationUseCase

Test Focus:
1. Owner or admin only
2. Cutoff from settings, measured against the course start date
3. CAS status write, then release_seat, then commit
4. Released seat metrics only after the commit
"""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from uuid_utils import UUID

from src.platform.config.core_setting import Settings
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.metrics.reservation_metrics import metrics
from src.platform.types.utc_datetime import utc_now
from src.service.course_booking.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from src.service.course_booking.domain.entity.reservation_entity import ReservationEntity
from src.service.course_booking.domain.enum.reservation_status import ReservationStatus
from src.service.course_booking.domain.reservation_errors import (
    CancellationNotAllowedError,
    InvalidTransitionError,
)
from test.shared.utils import build_course


RESERVATION_ID = UUID('01936d8f-5e73-7c4e-a9c5-123456789abc')


def _reservation(status: ReservationStatus, user_id: int = 2) -> ReservationEntity:
    return ReservationEntity(
        id=RESERVATION_ID,
        user_id=user_id,
        course_id=5,
        reserved_at=utc_now(),
        status=status,
    )


@pytest.mark.unit
class TestCancelReservation:
    @pytest.fixture
    def use_case(self, mock_uow: MagicMock) -> CancelReservationUseCase:
        return CancelReservationUseCase(uow=mock_uow, settings=Settings())

    @pytest.fixture
    def confirmed(self, mock_uow: MagicMock) -> ReservationEntity:
        reservation = _reservation(ReservationStatus.CONFIRMED)
        mock_uow.reservation_query_repo.get_by_id = AsyncMock(return_value=reservation)
        mock_uow.course_query_repo.get_by_id = AsyncMock(
            return_value=build_course(created_by=1, id=5, start_in=timedelta(days=10))
        )
        mock_uow.reservation_command_repo.save_transition = AsyncMock(return_value=True)
        mock_uow.seat_ledger.release_seat = AsyncMock(return_value=4)
        return reservation

    async def test_owner_cancels_and_seat_is_released(self, use_case, mock_uow, confirmed, owner):
        result = await use_case.execute(
            reservation_id=RESERVATION_ID, actor=owner, reason='schedule clash'
        )

        assert result.status == ReservationStatus.CANCELLED
        assert isinstance(result.cancelled_at, datetime)
        assert result.cancellation_reason == 'schedule clash'

        save_kwargs = mock_uow.reservation_command_repo.save_transition.call_args.kwargs
        assert save_kwargs['expected_status'] == ReservationStatus.CONFIRMED
        assert save_kwargs['reservation'].status == ReservationStatus.CANCELLED
        mock_uow.seat_ledger.release_seat.assert_awaited_once_with(course_id=5)
        mock_uow.commit.assert_awaited_once()

    async def test_admin_cancels_someone_elses_reservation(
        self, use_case, mock_uow, confirmed, admin
    ):
        result = await use_case.execute(reservation_id=RESERVATION_ID, actor=admin)

        assert result.status == ReservationStatus.CANCELLED
        mock_uow.commit.assert_awaited_once()

    async def test_stranger_is_forbidden(self, use_case, mock_uow, confirmed, stranger):
        with pytest.raises(ForbiddenError):
            await use_case.execute(reservation_id=RESERVATION_ID, actor=stranger)

        mock_uow.seat_ledger.release_seat.assert_not_awaited()

    async def test_reservation_not_found(self, use_case, mock_uow, owner):
        mock_uow.reservation_query_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await use_case.execute(reservation_id=RESERVATION_ID, actor=owner)

    async def test_inside_cutoff(self, use_case, mock_uow, confirmed, owner):
        mock_uow.course_query_repo.get_by_id = AsyncMock(
            return_value=build_course(created_by=1, id=5, start_in=timedelta(days=1))
        )

        with pytest.raises(CancellationNotAllowedError):
            await use_case.execute(reservation_id=RESERVATION_ID, actor=owner)

        mock_uow.reservation_command_repo.save_transition.assert_not_awaited()
        mock_uow.seat_ledger.release_seat.assert_not_awaited()

    async def test_already_cancelled(self, use_case, mock_uow, confirmed, owner):
        mock_uow.reservation_query_repo.get_by_id = AsyncMock(
            return_value=_reservation(ReservationStatus.CANCELLED)
        )

        with pytest.raises(InvalidTransitionError):
            await use_case.execute(reservation_id=RESERVATION_ID, actor=owner)

        mock_uow.seat_ledger.release_seat.assert_not_awaited()

    async def test_concurrent_cancel_loses_the_compare_and_swap(
        self, use_case, mock_uow, confirmed, owner
    ):
        mock_uow.reservation_command_repo.save_transition = AsyncMock(return_value=False)

        with pytest.raises(InvalidTransitionError):
            await use_case.execute(reservation_id=RESERVATION_ID, actor=owner)

        mock_uow.seat_ledger.release_seat.assert_not_awaited()
        mock_uow.commit.assert_not_awaited()

    async def test_cutoff_comes_from_settings(self, mock_uow, confirmed, owner):
        use_case = CancelReservationUseCase(
            uow=mock_uow, settings=Settings(CANCELLATION_CUTOFF_DAYS=14)
        )

        with pytest.raises(CancellationNotAllowedError):
            await use_case.execute(reservation_id=RESERVATION_ID, actor=owner)

    async def test_released_seat_is_recorded_after_commit(
        self, use_case, mock_uow, confirmed, owner
    ):
        with (
            patch.object(metrics, 'record_seat_operation') as record_seat_operation,
            patch.object(metrics, 'update_available_seats') as update_available_seats,
        ):
            await use_case.execute(reservation_id=RESERVATION_ID, actor=owner)

        record_seat_operation.assert_called_once_with(operation='release', applied=True)
        update_available_seats.assert_called_once_with(course_id=5, available_seats=4)

    async def test_failed_commit_records_no_release(self, use_case, mock_uow, confirmed, owner):
        mock_uow.commit = AsyncMock(side_effect=RuntimeError('connection lost'))

        with patch.object(metrics, 'record_seat_operation') as record_seat_operation:
            with pytest.raises(RuntimeError):
                await use_case.execute(reservation_id=RESERVATION_ID, actor=owner)

        record_seat_operation.assert_not_called()
