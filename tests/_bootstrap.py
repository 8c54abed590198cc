"""Test helper that normalizes sys.path and environment defaults."""

from __future__ import annotations

import os
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


BASE_URL = "http://admin.test/api"

_DEFAULT_ENV_VARS: dict[str, str] = {
    "ADMIN_API_BASE_URL": BASE_URL,
    "ADMIN_API_TIMEOUT": "5",
    "ADMIN_ENV": "test",
}

for key, value in _DEFAULT_ENV_VARS.items():
    os.environ.setdefault(key, value)

# Never pick up a developer's real token store or secret.
os.environ.pop("ADMIN_TOKEN_ENCRYPTION_SECRET", None)
