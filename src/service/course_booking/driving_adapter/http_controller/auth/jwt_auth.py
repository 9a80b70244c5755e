"""
Bearer token gate

Tokens are minted by the identity provider (or `create_jwt_token` for seeding scripts and tests).
The principal is rebuilt from the payload alone, no database lookup.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError, ForbiddenError
from src.service.course_booking.domain.entity.user_entity import UserEntity, UserRole


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES

    def create_jwt_token(
        self, user_entity: UserEntity, *, expires_delta: Optional[timedelta] = None
    ) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': str(user_entity.id),
            'exp': now + (expires_delta or timedelta(minutes=self.token_expire_minutes)),
            'iat': now,
            'user_id': user_entity.id,
            'email': user_entity.email,
            'name': user_entity.name,
            'role': user_entity.role.value,
            'is_active': user_entity.is_active,
        }

        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError('Token has expired') from e
        except jwt.PyJWTError as e:
            raise AuthenticationError('Invalid token') from e

    def get_current_user_info_from_jwt(self, token: Optional[str]) -> UserEntity:
        if not token:
            raise AuthenticationError('Not authenticated')

        payload = self.decode_jwt_token(token)

        user_id = payload.get('user_id')
        email = payload.get('email')
        name = payload.get('name')
        role = payload.get('role')
        is_active = payload.get('is_active')

        if not user_id or not email or not name or not role or is_active is None:
            raise AuthenticationError('Invalid token')

        try:
            user_role = UserRole(role)
        except ValueError as e:
            raise AuthenticationError('Invalid token') from e

        user_entity = UserEntity(
            id=int(user_id),
            email=email,
            name=name,
            role=user_role,
            is_active=bool(is_active),
        )

        if not user_entity.is_active:
            raise ForbiddenError('User is inactive')

        return user_entity
