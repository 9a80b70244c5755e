from decimal import Decimal

import pytest

from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.types.utc_datetime import utc_now
from src.service.course_booking.domain.entity.reservation_entity import ReservationEntity
from src.service.course_booking.domain.enum.reservation_status import ReservationStatus
from src.service.course_booking.domain.reservation_errors import DuplicateReservationError
from test.shared.utils import new_uow


async def _persist(user_id: int, course) -> ReservationEntity:
    reservation = ReservationEntity.create(user_id=user_id, course=course, now=utc_now())
    async with new_uow() as uow:
        created = await uow.reservation_command_repo.create(reservation=reservation)
        await uow.commit()
    return created


@pytest.mark.integration
class TestReservationRepo:
    async def test_create_and_read_back_detail(self, seed_course, seed_users):
        course = await seed_course()
        [user] = await seed_users(1)
        created = await _persist(user.id, course)

        async with new_uow() as uow:
            detail = await uow.reservation_query_repo.get_detail(reservation_id=created.id)
            active = await uow.reservation_query_repo.has_active_reservation(
                user_id=user.id, course_id=course.id
            )

        assert detail is not None
        assert detail.reservation.id == created.id
        assert detail.reservation.status == ReservationStatus.PENDING
        assert detail.reservation.amount_paid == course.price
        assert detail.course.title == course.title
        assert detail.user is not None and detail.user.email == user.email
        assert active is True

    async def test_unique_user_course_pair(self, seed_course, seed_users):
        course = await seed_course()
        [user] = await seed_users(1)
        await _persist(user.id, course)

        with pytest.raises(DuplicateReservationError):
            await _persist(user.id, course)

    async def test_save_transition_is_compare_and_swap(self, seed_course, seed_users):
        course = await seed_course()
        [user] = await seed_users(1)
        created = await _persist(user.id, course)
        confirmed = created.confirm(now=utc_now())

        async with new_uow() as uow:
            first = await uow.reservation_command_repo.save_transition(
                reservation=confirmed, expected_status=ReservationStatus.PENDING
            )
            second = await uow.reservation_command_repo.save_transition(
                reservation=confirmed, expected_status=ReservationStatus.PENDING
            )
            await uow.commit()

        assert (first, second) == (True, False)

        async with new_uow() as uow:
            stored = await uow.reservation_query_repo.get_by_id(reservation_id=created.id)
        assert stored is not None
        assert stored.status == ReservationStatus.CONFIRMED

    async def test_rating_written_once(self, seed_course, seed_users):
        course = await seed_course()
        [user] = await seed_users(1)
        created = await _persist(user.id, course)
        completed = created.confirm(now=utc_now()).complete(now=utc_now())

        async with new_uow() as uow:
            await uow.reservation_command_repo.save_transition(
                reservation=created.confirm(now=utc_now()),
                expected_status=ReservationStatus.PENDING,
            )
            await uow.reservation_command_repo.save_transition(
                reservation=completed, expected_status=ReservationStatus.CONFIRMED
            )
            rated = await uow.reservation_command_repo.save_transition(
                reservation=completed.rate(rating=4, now=utc_now()),
                expected_status=ReservationStatus.COMPLETED,
                require_unrated=True,
            )
            rerated = await uow.reservation_command_repo.save_transition(
                reservation=completed.rate(rating=1, now=utc_now()),
                expected_status=ReservationStatus.COMPLETED,
                require_unrated=True,
            )
            await uow.commit()

        assert (rated, rerated) == (True, False)
        async with new_uow() as uow:
            stored = await uow.reservation_query_repo.get_by_id(reservation_id=created.id)
        assert stored is not None
        assert stored.rating == 4

    async def test_list_by_user_newest_first_with_status_filter(self, seed_course, seed_users):
        first_course = await seed_course()
        second_course = await seed_course()
        [user] = await seed_users(1)
        older = await _persist(user.id, first_course)
        newer = await _persist(user.id, second_course)

        async with new_uow() as uow:
            page = await uow.reservation_query_repo.list_by_user(
                user_id=user.id, status=None, page=1, limit=10
            )
            cancelled = await uow.reservation_query_repo.list_by_user(
                user_id=user.id, status=ReservationStatus.CANCELLED, page=1, limit=10
            )

        assert page.total == 2
        assert [d.reservation.id for d in page.items] == [newer.id, older.id]
        assert cancelled.total == 0
        assert cancelled.items == []

    async def test_amount_paid_keeps_the_cents(self, seed_course, seed_users):
        course = await seed_course(price='99.99')
        [user] = await seed_users(1)
        created = await _persist(user.id, course)

        async with new_uow() as uow:
            stored = await uow.reservation_query_repo.get_by_id(reservation_id=created.id)
            stored_course = await uow.course_query_repo.get_by_id(course_id=course.id)

        assert stored is not None and stored_course is not None
        assert stored_course.price == Decimal('99.99')
        assert stored.amount_paid == Decimal('99.99')

    async def test_unknown_user_is_a_typed_error(self, seed_course):
        course = await seed_course()

        with pytest.raises(NotFoundError):
            await _persist(999_999, course)

    async def test_course_with_reservations_cannot_be_deleted(self, seed_course, seed_users):
        course = await seed_course()
        [user] = await seed_users(1)
        await _persist(user.id, course)

        # Straight to the repo, as a delete that raced past the reservation count would
        async with new_uow() as uow:
            with pytest.raises(ConflictError):
                await uow.course_command_repo.delete(course_id=course.id)
