"""
Unit of Work Pattern - one database transaction shared by several repositories

Architecture:
- UoW owns the session lifecycle
- UoW owns commit/rollback
- Repositories receive the UoW's session, so the seat ledger and the reservation
  repos write inside the same transaction
- Anything not committed is rolled back on exit, including a seat already claimed
"""

from __future__ import annotations

import abc
from contextlib import AsyncExitStack
from typing import TYPE_CHECKING, AsyncContextManager, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession


if TYPE_CHECKING:
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


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the course booking service

    Usage:
        async with uow:
            await uow.seat_ledger.reserve_seat(course_id=course.id, now=now)
            reservation = await uow.reservation_command_repo.create(reservation=...)
            await uow.commit()
    """

    course_command_repo: ICourseCommandRepo
    course_query_repo: ICourseQueryRepo
    reservation_command_repo: IReservationCommandRepo
    reservation_query_repo: IReservationQueryRepo
    seat_ledger: ISeatLedger
    user_command_repo: IUserCommandRepo
    user_query_repo: IUserQueryRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    A new session is opened on every `async with` and closed on exit,
    so one instance must not be entered concurrently.
    """

    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory
        self.session: Optional[AsyncSession] = None
        self._exit_stack: Optional[AsyncExitStack] = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.course_booking.driven_adapter.repo.course_command_repo_impl import (
            CourseCommandRepoImpl,
        )
        from src.service.course_booking.driven_adapter.repo.course_query_repo_impl import (
            CourseQueryRepoImpl,
        )
        from src.service.course_booking.driven_adapter.repo.reservation_command_repo_impl import (
            ReservationCommandRepoImpl,
        )
        from src.service.course_booking.driven_adapter.repo.reservation_query_repo_impl import (
            ReservationQueryRepoImpl,
        )
        from src.service.course_booking.driven_adapter.repo.seat_ledger_impl import SeatLedgerImpl
        from src.service.course_booking.driven_adapter.repo.user_command_repo_impl import (
            UserCommandRepoImpl,
        )
        from src.service.course_booking.driven_adapter.repo.user_query_repo_impl import (
            UserQueryRepoImpl,
        )

        self._exit_stack = AsyncExitStack()
        self.session = await self._exit_stack.enter_async_context(self.session_factory())

        # Every repo shares the UoW session
        self.course_command_repo = CourseCommandRepoImpl(session=self.session)
        self.course_query_repo = CourseQueryRepoImpl(session=self.session)
        self.reservation_command_repo = ReservationCommandRepoImpl(session=self.session)
        self.reservation_query_repo = ReservationQueryRepoImpl(session=self.session)
        self.seat_ledger = SeatLedgerImpl(session=self.session)
        self.user_command_repo = UserCommandRepoImpl(session=self.session)
        self.user_query_repo = UserQueryRepoImpl(session=self.session)

        return await super().__aenter__()

    async def __aexit__(self, *args) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self._exit_stack is not None:
                await self._exit_stack.aclose()
            self._exit_stack = None
            self.session = None

    async def _commit(self) -> None:
        assert self.session is not None, 'UnitOfWork used outside "async with"'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
