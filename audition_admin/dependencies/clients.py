"""
Factory functions to provide shared clients and services.

Each factory is cached so a process holds exactly one credential store,
refresh coordinator and HTTP client; ``reset_dependencies`` drops them.
"""

from functools import lru_cache
from typing import Optional

import httpx

from audition_admin.clients import AdminApiClient, AuthApi, SQLiteStore
from audition_admin.core.config import get_settings
from audition_admin.services import (
    AdminSession,
    AppSettingsService,
    AuditionService,
    CredentialCipher,
    CredentialStore,
    DashboardService,
    ProfileService,
    RefreshCoordinator,
    RoleService,
    TransactionService,
    UserService,
)


@lru_cache()
def get_sqlite_store() -> SQLiteStore:
    """Provide the durable store backing saved credentials."""
    return SQLiteStore(get_settings().storage.token_store_path)


@lru_cache()
def get_credential_store() -> CredentialStore:
    secret = get_settings().storage.token_encryption_secret
    cipher = CredentialCipher(secret=secret) if secret else None
    return CredentialStore(get_sqlite_store(), cipher)


def get_http_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport used by every HTTP client; ``None`` selects httpx's default."""
    return None


@lru_cache()
def get_auth_api() -> AuthApi:
    return AuthApi(get_settings().api, transport=get_http_transport())


@lru_cache()
def get_refresh_coordinator() -> RefreshCoordinator:
    return RefreshCoordinator(
        get_credential_store(),
        get_auth_api().refresh_access_token,
    )


@lru_cache()
def get_api_client() -> AdminApiClient:
    """Create the singleton authenticated API client."""
    return AdminApiClient(
        get_settings().api,
        get_refresh_coordinator(),
        transport=get_http_transport(),
    )


@lru_cache()
def get_profile_service() -> ProfileService:
    return ProfileService(get_api_client())


@lru_cache()
def get_admin_session() -> AdminSession:
    return AdminSession(
        auth_api=get_auth_api(),
        credentials=get_credential_store(),
        coordinator=get_refresh_coordinator(),
        profile_service=get_profile_service(),
    )


@lru_cache()
def get_dashboard_service() -> DashboardService:
    return DashboardService(get_api_client())


@lru_cache()
def get_audition_service() -> AuditionService:
    return AuditionService(get_api_client())


@lru_cache()
def get_transaction_service() -> TransactionService:
    return TransactionService(get_api_client())


@lru_cache()
def get_user_service() -> UserService:
    return UserService(get_api_client())


@lru_cache()
def get_role_service() -> RoleService:
    return RoleService(get_api_client())


@lru_cache()
def get_app_settings_service() -> AppSettingsService:
    return AppSettingsService(get_api_client())


_FACTORIES = (
    get_sqlite_store,
    get_credential_store,
    get_auth_api,
    get_refresh_coordinator,
    get_api_client,
    get_profile_service,
    get_admin_session,
    get_dashboard_service,
    get_audition_service,
    get_transaction_service,
    get_user_service,
    get_role_service,
    get_app_settings_service,
)


def reset_dependencies() -> None:
    """Forget every cached instance, including the cached settings."""
    for factory in _FACTORIES:
        factory.cache_clear()
    get_settings.cache_clear()
