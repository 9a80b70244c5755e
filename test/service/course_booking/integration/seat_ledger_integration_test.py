"""
Seat ledger against a real database

Test Focus:
1. reserve/release move available_seats by exactly one
2. Rejections are typed by the bound the conditional UPDATE failed on
3. Nothing is persisted when the Unit of Work exits without commit
4. The ledger counts rejections only, applied moves belong to the committing caller
"""

from datetime import timedelta

from prometheus_client import REGISTRY
import pytest

from src.platform.exception.exceptions import NotFoundError
from src.platform.types.utc_datetime import utc_now
from src.service.course_booking.domain.enum.course_status import CourseStatus
from src.service.course_booking.domain.reservation_errors import (
    CapacityExhaustedError,
    CapacityOverflowError,
    CourseNotAvailableError,
)
from test.shared.utils import fetch_course, new_uow


@pytest.mark.integration
class TestSeatLedger:
    async def test_reserve_then_release(self, seed_course):
        course = await seed_course(max_seats=3)

        async with new_uow() as uow:
            assert await uow.seat_ledger.reserve_seat(course_id=course.id, now=utc_now()) == 2
            assert await uow.seat_ledger.reserve_seat(course_id=course.id, now=utc_now()) == 1
            assert await uow.seat_ledger.release_seat(course_id=course.id) == 2
            await uow.commit()

        stored = await fetch_course(course.id)
        assert stored is not None
        assert stored.available_seats == 2
        assert stored.max_seats == 3

    async def test_reserve_last_seat_then_exhausted(self, seed_course):
        course = await seed_course(max_seats=1)

        async with new_uow() as uow:
            assert await uow.seat_ledger.reserve_seat(course_id=course.id, now=utc_now()) == 0
            with pytest.raises(CapacityExhaustedError):
                await uow.seat_ledger.reserve_seat(course_id=course.id, now=utc_now())
            await uow.commit()

        stored = await fetch_course(course.id)
        assert stored is not None
        assert stored.available_seats == 0

    async def test_release_on_full_capacity_overflows(self, seed_course):
        course = await seed_course(max_seats=2)

        async with new_uow() as uow:
            with pytest.raises(CapacityOverflowError):
                await uow.seat_ledger.release_seat(course_id=course.id)

    @pytest.mark.parametrize(
        'overrides',
        [
            {'status': CourseStatus.DRAFT},
            {'status': CourseStatus.CANCELLED},
        ],
    )
    async def test_reserve_on_inactive_course(self, seed_course, overrides):
        course = await seed_course(**overrides)

        async with new_uow() as uow:
            with pytest.raises(CourseNotAvailableError):
                await uow.seat_ledger.reserve_seat(course_id=course.id, now=utc_now())

    async def test_reserve_after_start(self, seed_course):
        course = await seed_course(start_in=timedelta(days=1))

        async with new_uow() as uow:
            with pytest.raises(CourseNotAvailableError):
                await uow.seat_ledger.reserve_seat(
                    course_id=course.id, now=utc_now() + timedelta(days=2)
                )

    async def test_unknown_course(self, clean_database):
        async with new_uow() as uow:
            with pytest.raises(NotFoundError):
                await uow.seat_ledger.reserve_seat(course_id=999_999, now=utc_now())
            with pytest.raises(NotFoundError):
                await uow.seat_ledger.release_seat(course_id=999_999)

    async def test_uncommitted_reserve_is_rolled_back(self, seed_course):
        course = await seed_course(max_seats=5)

        async with new_uow() as uow:
            await uow.seat_ledger.reserve_seat(course_id=course.id, now=utc_now())

        stored = await fetch_course(course.id)
        assert stored is not None
        assert stored.available_seats == 5

    async def test_uncommitted_claim_is_not_counted_as_applied(self, seed_course):
        course = await seed_course(max_seats=2)
        labels = {'operation': 'reserve', 'result': 'applied'}
        before = REGISTRY.get_sample_value('seat_ledger_operations_total', labels) or 0.0

        async with new_uow() as uow:
            await uow.seat_ledger.reserve_seat(course_id=course.id, now=utc_now())

        after = REGISTRY.get_sample_value('seat_ledger_operations_total', labels) or 0.0
        assert after == before
        stored = await fetch_course(course.id)
        assert stored is not None
        assert stored.available_seats == 2
