"""Schemas describing admin users, their roles and login results."""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field, model_validator

from .common import AdminModel


class Permission(AdminModel):
    id: str
    name: str = Field(..., description="Machine name, e.g. ``users.edit``.")
    display_name: Optional[str] = Field(None, alias="displayName")


class Role(AdminModel):
    id: str
    name: str
    display_name: Optional[str] = Field(None, alias="displayName")
    assigned_code: Optional[str] = Field(None, alias="assignedCode")
    description: Optional[str] = None
    permissions: Optional[List[Permission]] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")


class User(AdminModel):
    """An admin user as returned by the users and profile endpoints."""

    id: str
    name: str
    email: str
    address: Optional[str] = None
    phone_number: Optional[str] = None
    active_status: bool = False
    del_status: bool = False
    roles: Optional[List[Role]] = None
    permissions: Optional[List[str]] = Field(
        None,
        description="Flattened permission names granted directly to the user.",
    )
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    last_login: Optional[datetime] = Field(None, alias="lastLogin")

    @model_validator(mode="before")
    @classmethod
    def _derive_active_status(cls, value: Any) -> Any:
        """The users endpoints report ``status: "active"`` instead of ``active_status``."""
        if isinstance(value, dict) and "status" in value:
            value = dict(value)
            value["active_status"] = (
                value["status"] == "active" or value.get("active_status") is True
            )
        return value


class LoginResult(AdminModel):
    access_token: str = Field(..., alias="accessToken")
    refresh_token: str = Field(..., alias="refreshToken")
    user: User


class LoginRequest(AdminModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


__all__ = ["LoginRequest", "LoginResult", "Permission", "Role", "User"]
