"""
User API Schemas - Pydantic models for request/response
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.service.course_booking.domain.entity.user_entity import UserEntity, UserRole


class _AccountFields(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=50)
    email: Optional[EmailStr] = None

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if isinstance(v, str) else v

    @field_validator('email')
    @classmethod
    def lower_email(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v is not None else v


class ProfileUpdateRequest(_AccountFields):
    """Only the fields sent are changed"""

    class Config:
        json_schema_extra = {'example': {'name': 'Ada Lovelace', 'email': 'ada@example.com'}}


class AdminUserUpdateRequest(_AccountFields):
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None

    class Config:
        json_schema_extra = {'example': {'role': 'admin', 'is_active': True}}


class UserResponse(BaseModel):
    """User response schema"""

    id: int
    email: str
    name: str
    role: UserRole
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        json_schema_extra = {
            'example': {
                'id': 1,
                'email': 'user@example.com',
                'name': 'John Doe',
                'role': 'user',
                'is_active': True,
            }
        }

    @classmethod
    def from_entity(cls, user: UserEntity) -> 'UserResponse':
        return cls(
            id=user.id or 0,
            email=user.email,
            name=user.name,
            role=user.role,
            is_active=user.is_active,
            created_at=user.created_at,
        )


class UserListResponse(BaseModel):
    items: List[UserResponse]
    total: int
    page: int
    limit: int
    pages: int
