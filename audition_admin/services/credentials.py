"""
Durable storage of the admin session's access/refresh token pair.

Only one credential pair is active at a time. It is written on login or after
a successful refresh and wiped on logout or when a refresh episode fails.
"""

from __future__ import annotations

import base64
import hashlib
import logging
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken

from audition_admin.clients.sqlite_store import SQLiteStore

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "accessToken"
REFRESH_TOKEN_KEY = "refreshToken"


class CredentialCipher:
    """Encrypt and decrypt stored tokens using a Fernet key derived from a secret."""

    def __init__(self, *, secret: str) -> None:
        if not secret:
            raise ValueError("Token encryption secret must be provided.")
        digest = hashlib.sha256(secret.encode("utf-8")).digest()
        self._fernet = Fernet(base64.urlsafe_b64encode(digest))

    def seal(self, token: str) -> str:
        return self._fernet.encrypt(token.encode("utf-8")).decode("utf-8")

    def unseal(self, sealed: str) -> str:
        """Return the plaintext token, raising ``ValueError`` for foreign ciphertext."""
        try:
            plaintext = self._fernet.decrypt(sealed.encode("utf-8"))
        except InvalidToken as exc:
            raise ValueError("Stored token could not be decrypted.") from exc
        return plaintext.decode("utf-8")


class CredentialStore:
    """Read and write the token pair under two fixed keys of a durable store."""

    def __init__(self, store: SQLiteStore, cipher: CredentialCipher | None = None) -> None:
        self._store = store
        self._cipher = cipher

    def get_access_token(self) -> Optional[str]:
        return self._read(ACCESS_TOKEN_KEY)

    def get_refresh_token(self) -> Optional[str]:
        return self._read(REFRESH_TOKEN_KEY)

    def set_tokens(self, access_token: str, refresh_token: Optional[str]) -> None:
        """Persist a token pair. A missing refresh token removes the stored one."""
        self._write(ACCESS_TOKEN_KEY, access_token)
        if refresh_token is None:
            self._store.remove_item(REFRESH_TOKEN_KEY)
        else:
            self._write(REFRESH_TOKEN_KEY, refresh_token)

    def clear_tokens(self) -> None:
        self._store.remove_item(ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY)

    def _read(self, key: str) -> Optional[str]:
        value = self._store.get_item(key)
        if value is None or self._cipher is None:
            return value
        try:
            return self._cipher.unseal(value)
        except ValueError:
            # Written under a different secret or tampered with.
            logger.warning("Ignoring undecryptable stored credential %s", key)
            return None

    def _write(self, key: str, value: str) -> None:
        if self._cipher is not None:
            value = self._cipher.seal(value)
        self._store.set_item(key, value)


__all__ = [
    "ACCESS_TOKEN_KEY",
    "REFRESH_TOKEN_KEY",
    "CredentialCipher",
    "CredentialStore",
]
