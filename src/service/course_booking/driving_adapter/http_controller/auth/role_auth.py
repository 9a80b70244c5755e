from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.service.course_booking.domain.entity.user_entity import UserEntity
from src.service.course_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


# auto_error=False: a missing header is reported as our own 401 instead of FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


@inject
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> UserEntity:
    """Stateless principal from the bearer token"""
    token = credentials.credentials if credentials else None
    return jwt_auth.get_current_user_info_from_jwt(token)


@inject
async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> Optional[UserEntity]:
    if credentials is None:
        return None
    return jwt_auth.get_current_user_info_from_jwt(credentials.credentials)


async def require_admin(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_admin',
        attributes={
            'user.id': current_user.id or 0,
            'user.role': current_user.role.value,
        },
    ):
        if not current_user.is_admin:
            raise ForbiddenError('Admin access required')
        return current_user
