try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from audition_admin.schemas import User
from audition_admin.services import PERMISSIONS, PermissionDeniedError, PermissionEvaluator
from conftest import USER_PAYLOAD


@pytest.fixture
def evaluator() -> PermissionEvaluator:
    return PermissionEvaluator.for_user(User.model_validate(USER_PAYLOAD))


def test_direct_and_role_permissions_are_granted(evaluator: PermissionEvaluator) -> None:
    assert evaluator.has(PERMISSIONS.DASHBOARD_SHOW)
    assert evaluator.has(PERMISSIONS.SETTINGS_INDEX)
    assert not evaluator.has(PERMISSIONS.USERS_DELETE)


def test_any_and_all(evaluator: PermissionEvaluator) -> None:
    assert evaluator.has_any([PERMISSIONS.USERS_DELETE, PERMISSIONS.AUDITIONS_INDEX])
    assert not evaluator.has_any([PERMISSIONS.USERS_DELETE, PERMISSIONS.SETTINGS_EDIT])
    assert evaluator.has_all([PERMISSIONS.DASHBOARD_SHOW, PERMISSIONS.SETTINGS_INDEX])
    assert not evaluator.has_all([PERMISSIONS.DASHBOARD_SHOW, PERMISSIONS.USERS_EDIT])
    assert evaluator.has_all([])
    assert not evaluator.has_any([])


def test_no_user_has_nothing() -> None:
    evaluator = PermissionEvaluator.for_user(None)

    assert not evaluator.has(PERMISSIONS.DASHBOARD_SHOW)
    assert evaluator.permissions == frozenset()


def test_user_without_permission_list_gets_nothing_from_roles() -> None:
    payload = {**USER_PAYLOAD, "permissions": None}
    evaluator = PermissionEvaluator.for_user(User.model_validate(payload))

    assert not evaluator.has(PERMISSIONS.SETTINGS_INDEX)


def test_empty_permission_list_still_honours_roles() -> None:
    payload = {**USER_PAYLOAD, "permissions": []}
    evaluator = PermissionEvaluator.for_user(User.model_validate(payload))

    assert evaluator.has(PERMISSIONS.SETTINGS_INDEX)
    assert not evaluator.has(PERMISSIONS.DASHBOARD_SHOW)


def test_require_raises_with_missing_permission(evaluator: PermissionEvaluator) -> None:
    evaluator.require(PERMISSIONS.AUDITIONS_INDEX)

    with pytest.raises(PermissionDeniedError) as exc_info:
        evaluator.require(PERMISSIONS.USERS_CREATE)

    assert exc_info.value.permission == "users.create"
