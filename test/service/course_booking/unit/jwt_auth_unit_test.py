from datetime import timedelta

import jwt
import pytest

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError, ForbiddenError
from src.service.course_booking.domain.entity.user_entity import UserEntity, UserRole
from src.service.course_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


@pytest.fixture
def jwt_auth() -> JwtAuth:
    return JwtAuth()


@pytest.fixture
def user() -> UserEntity:
    return UserEntity(id=9, email='jwt@test.com', name='Jwt User', role=UserRole.ADMIN)


@pytest.mark.unit
class TestJwtAuth:
    def test_token_round_trips_the_principal(self, jwt_auth, user):
        token = jwt_auth.create_jwt_token(user)

        principal = jwt_auth.get_current_user_info_from_jwt(token)

        assert principal.id == 9
        assert principal.email == 'jwt@test.com'
        assert principal.role == UserRole.ADMIN
        assert principal.is_admin

    def test_missing_token(self, jwt_auth):
        with pytest.raises(AuthenticationError):
            jwt_auth.get_current_user_info_from_jwt(None)

    def test_expired_token(self, jwt_auth, user):
        token = jwt_auth.create_jwt_token(user, expires_delta=timedelta(seconds=-1))

        with pytest.raises(AuthenticationError, match='expired'):
            jwt_auth.get_current_user_info_from_jwt(token)

    def test_token_signed_with_another_key(self, jwt_auth, user):
        token = jwt.encode(
            {'user_id': 9, 'email': 'x@test.com', 'name': 'X', 'role': 'user', 'is_active': True},
            'not-the-secret',
            algorithm=settings.ALGORITHM,
        )

        with pytest.raises(AuthenticationError):
            jwt_auth.get_current_user_info_from_jwt(token)

    def test_unknown_role(self, jwt_auth):
        token = jwt.encode(
            {'user_id': 9, 'email': 'x@test.com', 'name': 'X', 'role': 'root', 'is_active': True},
            settings.SECRET_KEY.get_secret_value(),
            algorithm=settings.ALGORITHM,
        )

        with pytest.raises(AuthenticationError):
            jwt_auth.get_current_user_info_from_jwt(token)

    def test_inactive_user_is_forbidden(self, jwt_auth, user):
        user.is_active = False
        token = jwt_auth.create_jwt_token(user)

        with pytest.raises(ForbiddenError):
            jwt_auth.get_current_user_info_from_jwt(token)
