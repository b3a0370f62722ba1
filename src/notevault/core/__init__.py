"""Core vault storage: record types, store, and command table."""

from notevault.core.commands import CommandRegistry, get_command_registry
from notevault.core.errors import ErrorKind, VaultStoreError
from notevault.core.store import VaultStore, check_vault_path
from notevault.core.types import Connection, Note

__all__ = [
    "CommandRegistry",
    "Connection",
    "ErrorKind",
    "Note",
    "VaultStore",
    "VaultStoreError",
    "check_vault_path",
    "get_command_registry",
]
