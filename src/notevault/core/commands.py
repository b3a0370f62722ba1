"""Command table exposed to front-end transports.

Each command is a named store operation. Transports (HTTP, CLI, a desktop
bridge) look commands up by name and pass a mapping of keyword arguments.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel, ValidationError, validate_call

from notevault.core import store
from notevault.core.errors import ErrorKind, VaultStoreError

logger = logging.getLogger(__name__)


@dataclass
class CommandDefinition:
    """Definition of a command."""

    name: str
    description: str
    handler: Callable[..., Any]
    mutates: bool = False


def _to_jsonable(value: Any) -> Any:
    """Dump models (and lists of models) to plain JSON-ready values."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_to_jsonable(item) for item in value]
    return value


class CommandRegistry:
    """Registry for available commands."""

    def __init__(self):
        """Initialize command registry."""
        self.commands: dict[str, CommandDefinition] = {}
        self._register_default_commands()

    def _register_default_commands(self) -> None:
        """Register the vault store commands."""
        # Existence check never fails, so its argument is not validated
        self.register(
            CommandDefinition(
                name="check_vault_path",
                description="Check whether a path exists",
                handler=store.check_vault_path,
            )
        )

        # Notes
        self.register(
            CommandDefinition(
                name="read_notes",
                description="Load all notes of a vault",
                handler=validate_call(store.read_notes),
            )
        )
        self.register(
            CommandDefinition(
                name="write_notes",
                description="Overwrite all notes of a vault",
                handler=validate_call(store.write_notes),
                mutates=True,
            )
        )
        self.register(
            CommandDefinition(
                name="get_note",
                description="Load a single note by id",
                handler=validate_call(store.get_note),
            )
        )
        self.register(
            CommandDefinition(
                name="save_note",
                description="Insert or replace a note by id",
                handler=validate_call(store.save_note),
                mutates=True,
            )
        )
        self.register(
            CommandDefinition(
                name="delete_note",
                description="Delete a note by id",
                handler=validate_call(store.delete_note),
                mutates=True,
            )
        )

        # Connections
        self.register(
            CommandDefinition(
                name="read_connections",
                description="Load all connections of a vault",
                handler=validate_call(store.read_connections),
            )
        )
        self.register(
            CommandDefinition(
                name="write_connections",
                description="Overwrite all connections of a vault",
                handler=validate_call(store.write_connections),
                mutates=True,
            )
        )
        self.register(
            CommandDefinition(
                name="save_connection",
                description="Insert or replace a connection by id",
                handler=validate_call(store.save_connection),
                mutates=True,
            )
        )
        self.register(
            CommandDefinition(
                name="delete_connection",
                description="Delete a connection by id",
                handler=validate_call(store.delete_connection),
                mutates=True,
            )
        )

    def register(self, command: CommandDefinition) -> None:
        """Register a command."""
        self.commands[command.name] = command

    def unregister(self, name: str) -> None:
        """Unregister a command."""
        self.commands.pop(name, None)

    def get(self, name: str) -> CommandDefinition | None:
        """Get a command by name."""
        return self.commands.get(name)

    def list_commands(self, mutating: bool | None = None) -> list[CommandDefinition]:
        """List all commands, optionally filtered by whether they write."""
        if mutating is None:
            return list(self.commands.values())
        return [c for c in self.commands.values() if c.mutates is mutating]

    def get_command_names(self) -> list[str]:
        """Get list of command names."""
        return list(self.commands.keys())

    def invoke(self, name: str, args: dict[str, Any] | None = None) -> Any:
        """
        Run a command with keyword arguments.

        Args:
            name: Registered command name
            args: Keyword arguments for the command handler

        Returns:
            JSON-ready result of the command

        Raises:
            VaultStoreError: ``not_found`` for an unknown command,
                ``parse_error`` for arguments that do not fit the command,
                or whatever the store raised.
        """
        command = self.get(name)
        if command is None:
            raise VaultStoreError(ErrorKind.NOT_FOUND, f"Unknown command: {name}")

        kwargs = dict(args or {})
        try:
            inspect.signature(command.handler).bind(**kwargs)
        except TypeError as e:
            raise VaultStoreError(
                ErrorKind.PARSE_ERROR, f"Invalid arguments for {name}: {e}"
            ) from e

        logger.debug(f"Invoking command {name}")
        try:
            result = command.handler(**kwargs)
        except ValidationError as e:
            raise VaultStoreError(
                ErrorKind.PARSE_ERROR, f"Invalid arguments for {name}: {e}"
            ) from e

        return _to_jsonable(result)


# Default instance
_registry: CommandRegistry | None = None


def get_command_registry() -> CommandRegistry:
    """Get or create the default command registry."""
    global _registry
    if _registry is None:
        _registry = CommandRegistry()
    return _registry


def set_command_registry(registry: CommandRegistry | None) -> None:
    """Set the default command registry (for testing)."""
    global _registry
    _registry = registry
