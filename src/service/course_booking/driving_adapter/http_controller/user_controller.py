from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.course_booking.app.command.delete_user_use_case import DeleteUserUseCase
from src.service.course_booking.app.command.update_user_use_case import UpdateUserUseCase
from src.service.course_booking.app.query.user_query_use_case import UserQueryUseCase
from src.service.course_booking.domain.entity.user_entity import UserEntity, UserRole
from src.service.course_booking.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_admin,
)
from src.service.course_booking.driving_adapter.http_controller.schema.user_schema import (
    AdminUserUpdateRequest,
    ProfileUpdateRequest,
    UserListResponse,
    UserResponse,
)


router = APIRouter()


@router.get('/profile', response_model=UserResponse)
@Logger.io
async def get_profile(
    current_user: UserEntity = Depends(get_current_user),
    use_case: UserQueryUseCase = Depends(UserQueryUseCase.depends),
) -> UserResponse:
    user = await use_case.get_profile(actor=current_user)
    return UserResponse.from_entity(user)


@router.put('/profile', response_model=UserResponse)
@Logger.io
async def update_profile(
    request: ProfileUpdateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: UpdateUserUseCase = Depends(UpdateUserUseCase.depends),
) -> UserResponse:
    user = await use_case.update_profile(
        actor=current_user, name=request.name, email=request.email
    )
    return UserResponse.from_entity(user)


@router.get('/admin', response_model=UserListResponse)
@Logger.io
async def list_users(
    role: Optional[UserRole] = None,
    is_active: Optional[bool] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.USER_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: UserEntity = Depends(require_admin),
    use_case: UserQueryUseCase = Depends(UserQueryUseCase.depends),
) -> UserListResponse:
    result = await use_case.list_users(
        actor=current_user, role=role, is_active=is_active, page=page, limit=limit
    )
    return UserListResponse(
        items=[UserResponse.from_entity(user) for user in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        pages=result.pages,
    )


@router.get('/admin/{user_id}', response_model=UserResponse)
@Logger.io
async def get_user(
    user_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: UserQueryUseCase = Depends(UserQueryUseCase.depends),
) -> UserResponse:
    user = await use_case.get_user(actor=current_user, user_id=user_id)
    return UserResponse.from_entity(user)


@router.put('/admin/{user_id}', response_model=UserResponse)
@Logger.io
async def update_user(
    user_id: int,
    request: AdminUserUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdateUserUseCase = Depends(UpdateUserUseCase.depends),
) -> UserResponse:
    user = await use_case.update_user(
        actor=current_user, user_id=user_id, changes=request.model_dump(exclude_unset=True)
    )
    return UserResponse.from_entity(user)


@router.put('/admin/{user_id}/toggle_status', response_model=UserResponse)
@Logger.io
async def toggle_user_status(
    user_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdateUserUseCase = Depends(UpdateUserUseCase.depends),
) -> UserResponse:
    user = await use_case.toggle_status(actor=current_user, user_id=user_id)
    return UserResponse.from_entity(user)


@router.delete('/admin/{user_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_user(
    user_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: DeleteUserUseCase = Depends(DeleteUserUseCase.depends),
) -> None:
    await use_case.execute(user_id=user_id, actor=current_user)
