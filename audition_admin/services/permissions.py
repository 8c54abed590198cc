"""
Flat permission checks for the signed-in admin user.

A permission is granted when its name appears in the user's own permission
list or in the permission list of any of the user's roles.
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, Optional

from audition_admin.schemas import Role, User


class PERMISSIONS:
    """Permission names known to the admin backend."""

    DASHBOARD_SHOW = "dashboard.show"

    AUDITIONS_INDEX = "auditions.index"
    AUDITIONS_SHOW = "auditions.show"
    AUDITIONS_RESENDSMS = "auditions.resendsms"
    AUDITIONS_EXPORT = "auditions.export"

    TRANSACTIONS_INDEX = "transactions.index"
    TRANSACTIONS_SHOW = "transactions.show"
    TRANSACTIONS_EXPORT = "transactions.export"

    USERS_INDEX = "users.index"
    USERS_SHOW = "users.show"
    USERS_CREATE = "users.create"
    USERS_EDIT = "users.edit"
    USERS_ACTIVATE = "users.activate"
    USERS_DEACTIVATE = "users.deactivate"
    USERS_DELETE = "users.delete"

    SETTINGS_INDEX = "settings.index"
    SETTINGS_EDIT = "settings.edit"


class PermissionDeniedError(Exception):
    """Raised when the current user lacks a required permission."""

    def __init__(self, permission: str) -> None:
        self.permission = permission
        super().__init__(f"Missing permission: {permission}")


class PermissionEvaluator:
    """Answer membership questions over a user's flattened permissions."""

    def __init__(
        self,
        permissions: Optional[Iterable[str]],
        roles: Iterable[Role] = (),
    ) -> None:
        # No permission list at all means nothing is granted, roles included.
        self._enabled = permissions is not None
        granted = set(permissions or ())
        for role in roles:
            granted.update(p.name for p in role.permissions or ())
        self._granted: FrozenSet[str] = frozenset(granted)

    @classmethod
    def for_user(cls, user: Optional[User]) -> "PermissionEvaluator":
        if user is None:
            return cls(None)
        return cls(user.permissions, user.roles or ())

    @property
    def permissions(self) -> FrozenSet[str]:
        return self._granted if self._enabled else frozenset()

    def has(self, permission: str) -> bool:
        return self._enabled and permission in self._granted

    def has_any(self, permissions: Iterable[str]) -> bool:
        return any(self.has(p) for p in permissions)

    def has_all(self, permissions: Iterable[str]) -> bool:
        return all(self.has(p) for p in permissions)

    def require(self, permission: str) -> None:
        if not self.has(permission):
            raise PermissionDeniedError(permission)


__all__ = ["PERMISSIONS", "PermissionDeniedError", "PermissionEvaluator"]
