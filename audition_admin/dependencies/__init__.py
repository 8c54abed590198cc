"""Expose dependency helpers for the library and the command-line tool."""

from .clients import (
    get_admin_session,
    get_api_client,
    get_app_settings_service,
    get_audition_service,
    get_auth_api,
    get_credential_store,
    get_dashboard_service,
    get_http_transport,
    get_profile_service,
    get_refresh_coordinator,
    get_role_service,
    get_sqlite_store,
    get_transaction_service,
    get_user_service,
    reset_dependencies,
)

__all__ = [
    "get_admin_session",
    "get_api_client",
    "get_app_settings_service",
    "get_audition_service",
    "get_auth_api",
    "get_credential_store",
    "get_dashboard_service",
    "get_http_transport",
    "get_profile_service",
    "get_refresh_coordinator",
    "get_role_service",
    "get_sqlite_store",
    "get_transaction_service",
    "get_user_service",
    "reset_dependencies",
]
