"""FastAPI dependencies for the NoteVault API."""

from typing import Annotated

from fastapi import Depends, Query

from notevault.core.commands import CommandRegistry, get_command_registry
from notevault.core.store import VaultStore


def get_vault_store(
    vault_path: Annotated[str, Query(description="Vault root folder")],
) -> VaultStore:
    """
    Build a store for the vault named in the query string.

    Args:
        vault_path: Vault root folder

    Returns:
        VaultStore bound to that folder
    """
    return VaultStore(vault_path)


def get_registry() -> CommandRegistry:
    """Get the process-wide command registry."""
    return get_command_registry()


# Type aliases for dependency injection
VaultStoreDep = Annotated[VaultStore, Depends(get_vault_store)]
RegistryDep = Annotated[CommandRegistry, Depends(get_registry)]
