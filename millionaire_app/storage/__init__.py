"""Key-value store backends and store selection."""

from .base import KeyValueStore
from .fallback_store import FallbackStore, select_store
from .local_store import LocalStore
from .remote_store import RemoteStore

__all__ = ["FallbackStore", "KeyValueStore", "LocalStore", "RemoteStore", "select_store"]
