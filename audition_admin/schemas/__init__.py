"""Public schema exports."""

from .audition import Audition, AuditionDetails, EntryFilters
from .auth import LoginRequest, LoginResult, Permission, Role, User
from .common import Page, Pagination
from .dashboard import DashboardStats
from .transaction import Transaction, TransactionFilters
from .users import (
    PasswordChange,
    ProfileUpdate,
    Setting,
    SettingUpdate,
    UserCreate,
    UserFilters,
    UserUpdate,
)

__all__ = [
    "Audition",
    "AuditionDetails",
    "DashboardStats",
    "EntryFilters",
    "LoginRequest",
    "LoginResult",
    "Page",
    "Pagination",
    "PasswordChange",
    "Permission",
    "ProfileUpdate",
    "Role",
    "Setting",
    "SettingUpdate",
    "Transaction",
    "TransactionFilters",
    "User",
    "UserCreate",
    "UserFilters",
    "UserUpdate",
]
