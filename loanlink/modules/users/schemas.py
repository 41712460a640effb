from pydantic import ConfigDict, EmailStr, Field, field_validator
from typing import Optional

from loanlink.core.schemas import CamelModel
from loanlink.modules.users.models import UserRole, UserStatus


class UserCreateRequest(CamelModel):
    """Registration payload; unknown profile fields are stored as given"""
    model_config = ConfigDict(extra="allow")

    email: EmailStr
    name: Optional[str] = None
    photo_url: Optional[str] = Field(None, alias="photoURL")
    role: UserRole = UserRole.BORROWER

    @field_validator("role")
    @classmethod
    def no_self_assigned_admin(cls, role: UserRole) -> UserRole:
        if role == UserRole.ADMIN:
            raise ValueError("Admin role cannot be self-assigned")
        return role


class UserRoleUpdate(CamelModel):
    role: UserRole
    status: UserStatus = UserStatus.ACTIVE
    reason: Optional[str] = None


class UserRoleResponse(CamelModel):
    role: Optional[str] = None
    status: Optional[str] = None
