from datetime import datetime
from enum import StrEnum
from typing import Optional

import attrs

from src.platform.exception.exceptions import ForbiddenError


class UserRole(StrEnum):
    USER = 'user'
    ADMIN = 'admin'


@attrs.define
class UserEntity:
    email: str = ''
    name: str = ''
    id: Optional[int] = None
    role: UserRole = UserRole.USER
    is_active: bool = True
    created_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def validate_active(self) -> None:
        if not self.is_active:
            raise ForbiddenError('User is inactive')

    def validate_admin(self) -> None:
        if not self.is_admin:
            raise ForbiddenError('Admin access required')

    def can_access(self, *, owner_id: int) -> bool:
        return self.is_admin or self.id == owner_id
