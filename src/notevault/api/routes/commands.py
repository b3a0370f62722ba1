"""Named command invocation.

Mirrors the desktop bridge: the front-end sends a command name and a JSON
object of arguments, and receives the command's result.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body
from pydantic import BaseModel

from notevault.api.deps import RegistryDep

router = APIRouter()


class CommandInfo(BaseModel):
    """Description of a registered command."""

    name: str
    description: str
    mutates: bool


class CommandResult(BaseModel):
    """Result envelope for a command invocation."""

    command: str
    result: Any = None


@router.get("/commands", response_model=list[CommandInfo])
def list_commands(registry: RegistryDep) -> list[CommandInfo]:
    """List the registered commands."""
    return [
        CommandInfo(name=c.name, description=c.description, mutates=c.mutates)
        for c in registry.list_commands()
    ]


@router.post("/commands/{name}", response_model=CommandResult)
def invoke_command(
    name: str,
    registry: RegistryDep,
    args: Annotated[dict[str, Any] | None, Body()] = None,
) -> CommandResult:
    """
    Invoke a command by name.

    Failures are rendered as ``{"detail": message, "kind": kind}``.
    """
    return CommandResult(command=name, result=registry.invoke(name, args))
