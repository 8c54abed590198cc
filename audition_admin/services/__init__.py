"""Service layer exports."""

from .app_settings import AppSettingsService
from .auditions import AuditionService
from .credentials import CredentialCipher, CredentialStore
from .dashboard import DashboardService
from .permissions import PERMISSIONS, PermissionDeniedError, PermissionEvaluator
from .profile import ProfileService
from .session import AdminSession, NotAuthenticatedError
from .token_refresh import RefreshCoordinator, RefreshState
from .transactions import TransactionService
from .users import RoleService, UserService

__all__ = [
    "AdminSession",
    "AppSettingsService",
    "AuditionService",
    "CredentialCipher",
    "CredentialStore",
    "DashboardService",
    "NotAuthenticatedError",
    "PERMISSIONS",
    "PermissionDeniedError",
    "PermissionEvaluator",
    "ProfileService",
    "RefreshCoordinator",
    "RefreshState",
    "RoleService",
    "TransactionService",
    "UserService",
]
