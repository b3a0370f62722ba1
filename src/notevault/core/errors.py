"""Error kinds raised by the vault store and command table."""

from enum import StrEnum
from pathlib import Path


class ErrorKind(StrEnum):
    """Closed set of failure kinds surfaced to callers."""

    NOT_FOUND = "not_found"
    IO_ERROR = "io_error"
    PARSE_ERROR = "parse_error"
    SERIALIZE_ERROR = "serialize_error"


class VaultStoreError(Exception):
    """Raised when a vault operation cannot complete.

    The message is already human-readable; callers at the presentation
    boundary render ``str(error)`` and may branch on ``kind``.
    """

    def __init__(self, kind: ErrorKind, message: str, path: Path | None = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.path = path

    def to_dict(self) -> dict[str, str]:
        return {"detail": self.message, "kind": self.kind.value}

    def __repr__(self) -> str:
        return f"VaultStoreError({self.kind.value!r}, {self.message!r})"
