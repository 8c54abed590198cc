"""Command-line front end for the audition platform's admin API.

Credentials are kept in the durable token store between invocations, so a
``login`` is followed by any number of other commands until the session ends.
An expired access token is refreshed silently; when the session cannot be
recovered the stored credentials are wiped and the tool asks for a new login.

Example usages::

    python -m scripts.admin login --email admin@example.com
    python -m scripts.admin entries list --status PAID --limit 20
    python -m scripts.admin entries export --output entries.csv
    python -m scripts.admin settings set sms_sender_id SCOUTS
    python -m scripts.admin logout
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import json
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx
from pydantic import BaseModel, ValidationError

from audition_admin import dependencies
from audition_admin.clients import TokenRefreshError
from audition_admin.core.config import get_settings
from audition_admin.core.logging import configure_logging
from audition_admin.schemas import (
    EntryFilters,
    PasswordChange,
    ProfileUpdate,
    TransactionFilters,
    UserCreate,
    UserFilters,
    UserUpdate,
)
from audition_admin.services import (
    PERMISSIONS,
    AdminSession,
    NotAuthenticatedError,
    PermissionDeniedError,
)
from audition_admin.utils.http import ApiError

EXIT_OK = 0
EXIT_API_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_PERMISSION_DENIED = 3
EXIT_SESSION_ENDED = 4
EXIT_RUNTIME_ERROR = 5

Handler = Callable[[argparse.Namespace, AdminSession], Awaitable[int]]


def _emit(value: Any) -> None:
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    elif isinstance(value, list):
        value = [v.model_dump(mode="json") if isinstance(v, BaseModel) else v for v in value]
    print(json.dumps(value, indent=2, sort_keys=True))


def _options(args: argparse.Namespace, *names: str) -> Dict[str, Any]:
    """Collect the given argparse attributes that were actually supplied."""
    values = {name: getattr(args, name, None) for name in names}
    return {name: value for name, value in values.items() if value is not None}


async def _signed_in(session: AdminSession, permission: Optional[str] = None) -> None:
    await session.restore()
    session.require_user()
    if permission:
        session.permissions.require(permission)


# -- auth ---------------------------------------------------------------------


async def _login(args: argparse.Namespace, session: AdminSession) -> int:
    password = args.password or getpass.getpass("Password: ")
    user = await session.login(args.email, password)
    print(f"Signed in as {user.name} <{user.email}>")
    return EXIT_OK


async def _logout(args: argparse.Namespace, session: AdminSession) -> int:
    await session.logout()
    print("Signed out.")
    return EXIT_OK


async def _whoami(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session)
    user = session.require_user()
    payload = user.model_dump(mode="json")
    payload["effective_permissions"] = sorted(session.permissions.permissions)
    _emit(payload)
    return EXIT_OK


async def _forgot_password(args: argparse.Namespace, session: AdminSession) -> int:
    await session.forgot_password(args.email)
    print("If the address is registered, a reset link has been sent.")
    return EXIT_OK


async def _reset_password(args: argparse.Namespace, session: AdminSession) -> int:
    new_password = args.new_password or getpass.getpass("New password: ")
    await session.reset_password(args.token, new_password)
    print("Password reset.")
    return EXIT_OK


# -- dashboard / entries / transactions ---------------------------------------


async def _dashboard(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session, PERMISSIONS.DASHBOARD_SHOW)
    _emit(await dependencies.get_dashboard_service().get_stats())
    return EXIT_OK


_ENTRY_FILTER_FIELDS = (
    "page", "limit", "status", "sms_status", "customer_number", "processing_id",
    "position", "start_date", "end_date", "sort_by", "sort_order",
)


async def _entries_list(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session, PERMISSIONS.AUDITIONS_INDEX)
    filters = EntryFilters(**_options(args, *_ENTRY_FILTER_FIELDS))
    _emit(await dependencies.get_audition_service().list(filters))
    return EXIT_OK


async def _entries_show(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session, PERMISSIONS.AUDITIONS_SHOW)
    _emit(await dependencies.get_audition_service().get(args.id))
    return EXIT_OK


async def _entries_resend_sms(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session, PERMISSIONS.AUDITIONS_RESENDSMS)
    await dependencies.get_audition_service().resend_sms(args.id)
    print(f"SMS queued for audition {args.id}.")
    return EXIT_OK


async def _entries_export(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session, PERMISSIONS.AUDITIONS_EXPORT)
    filters = EntryFilters(**_options(args, *_ENTRY_FILTER_FIELDS))
    content = await dependencies.get_audition_service().export(filters)
    args.output.write_bytes(content)
    print(f"Wrote {len(content)} bytes to {args.output}")
    return EXIT_OK


_TRANSACTION_FILTER_FIELDS = (
    "page", "limit", "status", "customer_number", "network", "min_amount",
    "max_amount", "start_date", "end_date", "sort_by", "sort_order",
)


async def _transactions_list(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session, PERMISSIONS.TRANSACTIONS_INDEX)
    filters = TransactionFilters(**_options(args, *_TRANSACTION_FILTER_FIELDS))
    _emit(await dependencies.get_transaction_service().list(filters))
    return EXIT_OK


async def _transactions_show(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session, PERMISSIONS.TRANSACTIONS_SHOW)
    _emit(await dependencies.get_transaction_service().get(args.id))
    return EXIT_OK


async def _transactions_export(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session, PERMISSIONS.TRANSACTIONS_EXPORT)
    filters = TransactionFilters(**_options(args, *_TRANSACTION_FILTER_FIELDS))
    content = await dependencies.get_transaction_service().export(filters)
    args.output.write_bytes(content)
    print(f"Wrote {len(content)} bytes to {args.output}")
    return EXIT_OK


# -- users / roles ------------------------------------------------------------


async def _users_list(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session, PERMISSIONS.USERS_INDEX)
    filters = UserFilters(
        **_options(args, "page", "limit", "name", "role", "status", "start_date", "end_date")
    )
    _emit(await dependencies.get_user_service().list(filters))
    return EXIT_OK


async def _users_show(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session, PERMISSIONS.USERS_SHOW)
    _emit(await dependencies.get_user_service().get(args.id))
    return EXIT_OK


async def _users_create(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session, PERMISSIONS.USERS_CREATE)
    password = args.password or getpass.getpass("Initial password: ")
    payload = UserCreate(
        password=password,
        **_options(args, "name", "email", "role_id", "address", "phone_number"),
    )
    _emit(await dependencies.get_user_service().create(payload))
    return EXIT_OK


async def _users_update(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session, PERMISSIONS.USERS_EDIT)
    payload = UserUpdate(**_options(args, "name", "email", "address", "phone_number"))
    _emit(await dependencies.get_user_service().update(args.id, payload))
    return EXIT_OK


async def _users_activate(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session, PERMISSIONS.USERS_ACTIVATE)
    _emit(await dependencies.get_user_service().activate(args.id))
    return EXIT_OK


async def _users_deactivate(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session, PERMISSIONS.USERS_DEACTIVATE)
    _emit(await dependencies.get_user_service().deactivate(args.id))
    return EXIT_OK


async def _users_delete(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session, PERMISSIONS.USERS_DELETE)
    await dependencies.get_user_service().delete(args.id)
    print(f"Deleted user {args.id}.")
    return EXIT_OK


async def _roles_list(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session)
    _emit(await dependencies.get_role_service().list())
    return EXIT_OK


# -- settings / profile -------------------------------------------------------


async def _settings_list(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session, PERMISSIONS.SETTINGS_INDEX)
    _emit(await dependencies.get_app_settings_service().list())
    return EXIT_OK


async def _settings_get(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session, PERMISSIONS.SETTINGS_INDEX)
    _emit(await dependencies.get_app_settings_service().get(args.key))
    return EXIT_OK


async def _settings_set(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session, PERMISSIONS.SETTINGS_EDIT)
    setting = await dependencies.get_app_settings_service().update(
        args.key, args.value, args.description
    )
    _emit(setting)
    return EXIT_OK


async def _profile_show(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session)
    _emit(session.require_user())
    return EXIT_OK


async def _profile_update(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session)
    payload = ProfileUpdate(**_options(args, "name", "email", "address", "phone_number"))
    _emit(await dependencies.get_profile_service().update(payload))
    return EXIT_OK


async def _profile_change_password(args: argparse.Namespace, session: AdminSession) -> int:
    await _signed_in(session)
    payload = PasswordChange(
        current_password=args.current_password or getpass.getpass("Current password: "),
        new_password=args.new_password or getpass.getpass("New password: "),
    )
    await dependencies.get_profile_service().change_password(payload)
    print("Password changed.")
    return EXIT_OK


# -- parser -------------------------------------------------------------------


def _add_paging(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--page", type=int)
    parser.add_argument("--limit", type=int)
    parser.add_argument("--start-date", dest="start_date", help="ISO date (inclusive).")
    parser.add_argument("--end-date", dest="end_date", help="ISO date (inclusive).")


def _add_entry_filters(parser: argparse.ArgumentParser) -> None:
    _add_paging(parser)
    parser.add_argument("--status", help="Payment status, e.g. PAID.")
    parser.add_argument("--sms-status", dest="sms_status")
    parser.add_argument("--customer-number", dest="customer_number")
    parser.add_argument("--processing-id", dest="processing_id")
    parser.add_argument("--position")
    parser.add_argument("--sort-by", dest="sort_by")
    parser.add_argument("--sort-order", dest="sort_order", choices=("ASC", "DESC"))


def _add_transaction_filters(parser: argparse.ArgumentParser) -> None:
    _add_paging(parser)
    parser.add_argument("--status", help="Transaction status, e.g. SUCCESS.")
    parser.add_argument("--customer-number", dest="customer_number")
    parser.add_argument("--network", choices=("MTN", "VOD", "AIR"))
    parser.add_argument("--min-amount", dest="min_amount", type=float)
    parser.add_argument("--max-amount", dest="max_amount", type=float)
    parser.add_argument("--sort-by", dest="sort_by")
    parser.add_argument("--sort-order", dest="sort_order", choices=("ASC", "DESC"))


def _add_contact_fields(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--address")
    parser.add_argument("--phone-number", dest="phone_number")


def _command(subparsers: Any, name: str, handler: Handler, **kwargs: Any) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(name, **kwargs)
    parser.set_defaults(handler=handler)
    return parser


def _group(subparsers: Any, name: str, help_text: str) -> Any:
    parser = subparsers.add_parser(name, help=help_text)
    return parser.add_subparsers(dest="action", required=True)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Manage auditions, transactions, users and settings."
    )
    parser.add_argument("--log-level", dest="log_level", help="Overrides ADMIN_LOG_LEVEL.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    login = _command(subparsers, "login", _login, help="Sign in and store credentials.")
    login.add_argument("--email", required=True)
    login.add_argument("--password", help="Prompted for when omitted.")

    _command(subparsers, "logout", _logout, help="Revoke and forget stored credentials.")
    _command(subparsers, "whoami", _whoami, help="Show the signed-in user.")

    forgot = _command(subparsers, "forgot-password", _forgot_password)
    forgot.add_argument("--email", required=True)
    reset = _command(subparsers, "reset-password", _reset_password)
    reset.add_argument("--token", required=True)
    reset.add_argument("--new-password", dest="new_password")

    _command(subparsers, "dashboard", _dashboard, help="Show dashboard statistics.")

    entries = _group(subparsers, "entries", "Audition entries.")
    _add_entry_filters(_command(entries, "list", _entries_list))
    _command(entries, "show", _entries_show).add_argument("id")
    _command(entries, "resend-sms", _entries_resend_sms).add_argument("id")
    export_entries = _command(entries, "export", _entries_export)
    _add_entry_filters(export_entries)
    export_entries.add_argument("--output", type=Path, required=True)

    transactions = _group(subparsers, "transactions", "Payment transactions.")
    _add_transaction_filters(_command(transactions, "list", _transactions_list))
    _command(transactions, "show", _transactions_show).add_argument("id")
    export_transactions = _command(transactions, "export", _transactions_export)
    _add_transaction_filters(export_transactions)
    export_transactions.add_argument("--output", type=Path, required=True)

    users = _group(subparsers, "users", "Admin users.")
    users_list = _command(users, "list", _users_list)
    _add_paging(users_list)
    users_list.add_argument("--name")
    users_list.add_argument("--role")
    users_list.add_argument("--status", choices=("active", "inactive"))
    _command(users, "show", _users_show).add_argument("id")
    create = _command(users, "create", _users_create)
    create.add_argument("--name", required=True)
    create.add_argument("--email", required=True)
    create.add_argument("--password", help="Prompted for when omitted.")
    create.add_argument("--role-id", dest="role_id")
    _add_contact_fields(create)
    update = _command(users, "update", _users_update)
    update.add_argument("id")
    update.add_argument("--name")
    update.add_argument("--email")
    _add_contact_fields(update)
    _command(users, "activate", _users_activate).add_argument("id")
    _command(users, "deactivate", _users_deactivate).add_argument("id")
    _command(users, "delete", _users_delete).add_argument("id")

    roles = _group(subparsers, "roles", "Roles.")
    _command(roles, "list", _roles_list)

    settings = _group(subparsers, "settings", "Application settings.")
    _command(settings, "list", _settings_list)
    _command(settings, "get", _settings_get).add_argument("key")
    setting_set = _command(settings, "set", _settings_set)
    setting_set.add_argument("key")
    setting_set.add_argument("value")
    setting_set.add_argument("--description")

    profile = _group(subparsers, "profile", "Your own profile.")
    _command(profile, "show", _profile_show)
    profile_update = _command(profile, "update", _profile_update)
    profile_update.add_argument("--name")
    profile_update.add_argument("--email")
    _add_contact_fields(profile_update)
    change_password = _command(profile, "change-password", _profile_change_password)
    change_password.add_argument("--current-password", dest="current_password")
    change_password.add_argument("--new-password", dest="new_password")

    return parser


async def _run(args: argparse.Namespace) -> int:
    session = dependencies.get_admin_session()
    try:
        return await args.handler(args, session)
    finally:
        await dependencies.get_api_client().aclose()


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as exc:
        print(f"Invalid configuration:\n{exc}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    configure_logging(args.log_level or settings.log_level)

    try:
        return asyncio.run(_run(args))
    except ValidationError as exc:
        print(f"Invalid input:\n{exc}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except PermissionDeniedError as exc:
        print(f"Permission denied: {exc.permission}", file=sys.stderr)
        return EXIT_PERMISSION_DENIED
    except NotAuthenticatedError:
        print("Not signed in. Run the 'login' command first.", file=sys.stderr)
        return EXIT_SESSION_ENDED
    except TokenRefreshError as exc:
        print(f"Session ended: {exc} Run the 'login' command again.", file=sys.stderr)
        return EXIT_SESSION_ENDED
    except ApiError as exc:
        if args.command == "login":
            print(f"Login failed: {exc}", file=sys.stderr)
            return EXIT_API_ERROR
        if exc.is_unauthorized:
            print("Session ended. Run the 'login' command again.", file=sys.stderr)
            return EXIT_SESSION_ENDED
        print(f"Request failed ({exc.status_code}): {exc}", file=sys.stderr)
        return EXIT_API_ERROR
    except httpx.HTTPError as exc:
        print(f"Could not reach the admin API: {exc}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    finally:
        dependencies.reset_dependencies()


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
