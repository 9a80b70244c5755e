"""
Test Configuration and Fixtures

This module provides:
- A throwaway SQLite database (aiosqlite) shared by every integration test
- Database cleanup between tests
- A FastAPI TestClient bound to the real application
- User/token/course helpers for API tests

Architecture:
- Unit tests (test/**/unit/): mock the Unit of Work, no database
- Integration tests: real engine, real constraints, tables emptied per test
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time (src.platform.config.core_setting)
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    db_dir = Path(tempfile.mkdtemp(prefix=f'course_reservation_{worker_id}_'))
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{db_dir / "test.db"}'
    os.environ['SECRET_KEY'] = 'test_secret_key'
    os.environ['SQLITE_BUSY_TIMEOUT'] = '30'
    os.environ['DEPLOY_ENV'] = 'test'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import AsyncGenerator, Callable, Generator  # noqa: E402
from typing import Any  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.platform.database.orm_db_setting import (  # noqa: E402
    create_db_and_tables,
    dispose_engine,
    drop_db_and_tables,
)
from src.service.course_booking.domain.entity.user_entity import UserEntity, UserRole  # noqa: E402
from test.shared.utils import (  # noqa: E402
    auth_headers,
    create_user_in_db,
    truncate_all_tables,
)
from test.util_constant import (  # noqa: E402
    ADMIN_EMAIL,
    ADMIN_NAME,
    ANOTHER_USER_EMAIL,
    ANOTHER_USER_NAME,
    TEST_USER_EMAIL,
    TEST_USER_NAME,
)


# =============================================================================
# Integration Test Fixtures (async tests)
# =============================================================================
@pytest.fixture(scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    """Fresh schema on the test's own event loop, engine disposed afterwards"""
    await drop_db_and_tables()
    await create_db_and_tables()
    yield
    await dispose_engine()


# =============================================================================
# API Fixtures (sync tests through TestClient)
# =============================================================================
@pytest.fixture(scope='function')
def client() -> Generator[TestClient, None, None]:
    """
    The lifespan creates the tables and wires DI, then every row is removed
    on the client's own loop so the engine never crosses event loops.
    """
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        test_client.portal.call(truncate_all_tables)
        yield test_client


@pytest.fixture
def make_user(client: TestClient) -> Callable[..., UserEntity]:
    def _make(email: str, name: str, role: UserRole = UserRole.USER) -> UserEntity:
        return client.portal.call(create_user_in_db, email, name, role)

    return _make


@pytest.fixture
def admin_user(make_user: Callable[..., UserEntity]) -> UserEntity:
    return make_user(ADMIN_EMAIL, ADMIN_NAME, UserRole.ADMIN)


@pytest.fixture
def test_user(make_user: Callable[..., UserEntity]) -> UserEntity:
    return make_user(TEST_USER_EMAIL, TEST_USER_NAME)


@pytest.fixture
def another_user(make_user: Callable[..., UserEntity]) -> UserEntity:
    return make_user(ANOTHER_USER_EMAIL, ANOTHER_USER_NAME)


@pytest.fixture
def admin_headers(admin_user: UserEntity) -> dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture
def user_headers(test_user: UserEntity) -> dict[str, str]:
    return auth_headers(test_user)


@pytest.fixture
def another_user_headers(another_user: UserEntity) -> dict[str, str]:
    return auth_headers(another_user)


@pytest.fixture
def bdd_state() -> dict[str, Any]:
    """Mutable scratchpad shared by the steps of one scenario"""
    return {}


# =============================================================================
# Load BDD steps
# =============================================================================
from test.bdd_steps_loader import *  # noqa: E402, F401, F403
