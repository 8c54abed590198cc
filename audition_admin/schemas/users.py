"""
Request payloads for user management, profile and application settings.
"""

from datetime import datetime
from typing import Any, Dict, Literal, Optional

from pydantic import Field

from .common import AdminModel, QueryFilters


class UserFilters(QueryFilters):
    name: Optional[str] = None
    role: Optional[str] = None
    status: Optional[Literal["active", "inactive"]] = None
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")


class _Payload(AdminModel):
    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class UserCreate(_Payload):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
    role_id: Optional[str] = Field(None, alias="roleId")
    address: Optional[str] = None
    phone_number: Optional[str] = None


class UserUpdate(_Payload):
    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    phone_number: Optional[str] = None


class ProfileUpdate(UserUpdate):
    """Same editable fields as :class:`UserUpdate`, applied to the signed-in user."""


class PasswordChange(_Payload):
    current_password: str = Field(..., alias="currentPassword", min_length=1)
    new_password: str = Field(..., alias="newPassword", min_length=1)


class Setting(AdminModel):
    id: str
    key: str
    value: str
    description: Optional[str] = None
    active_status: bool = True
    del_status: bool = False
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")


class SettingUpdate(_Payload):
    value: str
    description: Optional[str] = None


__all__ = [
    "PasswordChange",
    "ProfileUpdate",
    "Setting",
    "SettingUpdate",
    "UserCreate",
    "UserFilters",
    "UserUpdate",
]
