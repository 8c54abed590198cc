try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from pathlib import Path

import pytest

from audition_admin.clients import SQLiteStore
from audition_admin.services import CredentialCipher, CredentialStore
from audition_admin.services.credentials import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY


def test_tokens_survive_a_new_store_instance(tmp_path: Path) -> None:
    db_path = str(tmp_path / "nested" / "credentials.sqlite3")
    CredentialStore(SQLiteStore(db_path)).set_tokens("access", "refresh")

    reopened = CredentialStore(SQLiteStore(db_path))

    assert reopened.get_access_token() == "access"
    assert reopened.get_refresh_token() == "refresh"


def test_clear_tokens_removes_both_keys(credential_store: CredentialStore) -> None:
    credential_store.set_tokens("access", "refresh")

    credential_store.clear_tokens()

    assert credential_store.get_access_token() is None
    assert credential_store.get_refresh_token() is None


def test_set_tokens_without_refresh_token_drops_the_old_one(
    credential_store: CredentialStore,
) -> None:
    credential_store.set_tokens("access-1", "refresh-1")

    credential_store.set_tokens("access-2", None)

    assert credential_store.get_access_token() == "access-2"
    assert credential_store.get_refresh_token() is None


def test_cipher_keeps_plaintext_out_of_storage(tmp_path: Path) -> None:
    raw = SQLiteStore(str(tmp_path / "credentials.sqlite3"))
    store = CredentialStore(raw, CredentialCipher(secret="s3cret"))

    store.set_tokens("access-token", "refresh-token")

    assert raw.get_item(ACCESS_TOKEN_KEY) not in (None, "access-token")
    assert raw.get_item(REFRESH_TOKEN_KEY) not in (None, "refresh-token")
    assert store.get_access_token() == "access-token"
    assert store.get_refresh_token() == "refresh-token"


def test_tokens_sealed_with_another_secret_read_as_absent(tmp_path: Path) -> None:
    raw = SQLiteStore(str(tmp_path / "credentials.sqlite3"))
    CredentialStore(raw, CredentialCipher(secret="first")).set_tokens("a", "r")

    store = CredentialStore(raw, CredentialCipher(secret="second"))

    assert store.get_access_token() is None
    assert store.get_refresh_token() is None


def test_cipher_requires_secret() -> None:
    with pytest.raises(ValueError):
        CredentialCipher(secret="")


def test_sqlite_store_rejects_empty_key(tmp_path: Path) -> None:
    store = SQLiteStore(str(tmp_path / "kv.sqlite3"))

    with pytest.raises(ValueError):
        store.set_item("", "value")
