"""Exceptions and write outcomes shared by the storage layer and core services."""

from __future__ import annotations

from dataclasses import dataclass, field


class StoreError(Exception):
    """Base class for key-value store failures."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class StoreUnavailable(StoreError):
    """Raised when the backing store cannot be reached."""


class MalformedStoredValue(StoreError):
    """Raised when a stored value cannot be decoded or fails its schema."""


class GameNotActiveError(RuntimeError):
    """Raised for host actions that need an active session."""


class LifelineUnavailableError(RuntimeError):
    """Raised when a lifeline was already used or no class is assigned."""


class GameInProgressError(RuntimeError):
    """Raised for setup changes that must wait until the session has ended."""


@dataclass(slots=True)
class WriteResult:
    """Outcome of a single set/remove against the store."""

    key: str
    ok: bool = True
    error: str | None = None


@dataclass(slots=True)
class ActionResult:
    """Result of a host action; carries any writes the store rejected."""

    failed_writes: list[WriteResult] = field(default_factory=list)
    session_id: str | None = None

    @property
    def ok(self) -> bool:
        return not self.failed_writes

    def extend(self, writes: list[WriteResult]) -> None:
        self.failed_writes.extend(write for write in writes if not write.ok)

    def warnings(self) -> list[str]:
        return [f"{write.key}: {write.error}" for write in self.failed_writes]
