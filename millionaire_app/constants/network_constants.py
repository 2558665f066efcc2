"""Network and storage configuration for the millionaire application.

Values may be overridden through environment variables at process start.
"""

from __future__ import annotations

import os

DEFAULT_HOST: str = os.environ.get("MILLIONAIRE_HOST", "0.0.0.0")
DEFAULT_PORT: int = int(os.environ.get("MILLIONAIRE_PORT", "8000"))

# Remote synchronized store; empty means local-only.
REMOTE_STORE_URL: str = os.environ.get("MILLIONAIRE_REMOTE_STORE_URL", "")
REMOTE_STORE_TIMEOUT_SECONDS: float = float(os.environ.get("MILLIONAIRE_REMOTE_STORE_TIMEOUT", "5"))
LOCAL_STORE_PATH: str = os.environ.get("MILLIONAIRE_LOCAL_STORE_PATH", "millionaire_store.json")
