"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.course_booking.driven_adapter.repo.course_query_repo_impl import (
    CourseQueryRepoImpl,
)
from src.service.course_booking.driven_adapter.repo.reservation_query_repo_impl import (
    ReservationQueryRepoImpl,
)
from src.service.course_booking.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.course_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager with settings from config_service)
    database = providers.Singleton(Database)

    # Unit of Work - new instance per request, it owns one session/transaction
    uow = providers.Factory(SqlAlchemyUnitOfWork, session_factory=database.provided.session)

    # Read-side repositories (stateless - use session_factory per call)
    course_query_repo = providers.Singleton(
        CourseQueryRepoImpl, session_factory=database.provided.session
    )
    reservation_query_repo = providers.Singleton(
        ReservationQueryRepoImpl, session_factory=database.provided.session
    )
    user_query_repo = providers.Singleton(
        UserQueryRepoImpl, session_factory=database.provided.session
    )

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
