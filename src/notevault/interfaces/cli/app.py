"""CLI application for NoteVault using Rich and Typer."""

import json
import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from notevault.core.commands import get_command_registry
from notevault.core.config import NOTEVAULT_VAULT, setup_logging
from notevault.core.errors import VaultStoreError
from notevault.core.store import VaultStore, check_vault_path

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="notevault",
    help="NoteVault CLI - inspect and edit a local notes vault",
    no_args_is_help=True,
)

console = Console()

VAULT_HELP = "Vault folder (defaults to NOTEVAULT_VAULT)"


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error: {escape(message)}[/red]")
    raise typer.Exit(code=1)


def _resolve_vault(vault: Optional[str]) -> VaultStore:
    """Resolve vault path from argument or env var."""
    path = vault or NOTEVAULT_VAULT
    if not path:
        _fail("No vault given. Pass a path or set NOTEVAULT_VAULT.")
    return VaultStore(path)


def _preview(text: str, width: int = 40) -> str:
    line = text.splitlines()[0] if text else ""
    return line if len(line) <= width else line[: width - 3] + "..."


@app.command()
def check(path: str = typer.Argument(..., help="Path to check")) -> None:
    """Check whether a vault path exists (exit status 1 if it does not)."""
    if check_vault_path(path):
        console.print(f"[green]exists[/green] {escape(path)}")
        return
    console.print(f"[yellow]missing[/yellow] {escape(path)}")
    raise typer.Exit(code=1)


@app.command()
def notes(
    vault: Optional[str] = typer.Argument(None, help=VAULT_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """List the notes of a vault."""
    store = _resolve_vault(vault)
    try:
        records = store.read_notes()
    except VaultStoreError as e:
        _fail(str(e))

    if as_json:
        console.print_json(data=[n.model_dump(mode="json") for n in records])
        return

    if not records:
        console.print("[dim]No notes yet.[/dim]")
        return

    table = Table(title=f"Notes ({len(records)})", show_header=True)
    table.add_column("ID", style="cyan")
    table.add_column("Created")
    table.add_column("Updated")
    table.add_column("Content")
    for note in records:
        table.add_row(
            escape(note.id),
            note.created_at,
            note.updated_at or "-",
            escape(_preview(note.content)),
        )
    console.print(table)


@app.command()
def connections(
    vault: Optional[str] = typer.Argument(None, help=VAULT_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """List the connections of a vault."""
    store = _resolve_vault(vault)
    try:
        records = store.read_connections()
    except VaultStoreError as e:
        _fail(str(e))

    if as_json:
        console.print_json(data=[c.model_dump(mode="json") for c in records])
        return

    if not records:
        console.print("[dim]No connections yet.[/dim]")
        return

    table = Table(title=f"Connections ({len(records)})", show_header=True)
    table.add_column("ID", style="cyan")
    table.add_column("Source")
    table.add_column("Target")
    table.add_column("Type")
    table.add_column("Strength", justify="right")
    for conn in records:
        table.add_row(
            escape(conn.id),
            escape(conn.source_id),
            escape(conn.target_id),
            escape(conn.type_name),
            f"{conn.strength:.2f}",
        )
    console.print(table)


@app.command("write-notes")
def write_notes(
    vault: str = typer.Argument(..., help="Vault folder"),
    source: Path = typer.Argument(..., help="JSON file holding an array of notes"),
) -> None:
    """Replace all notes of a vault with the contents of a JSON file."""
    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except OSError as e:
        _fail(f"Cannot read {source}: {e}")
    except json.JSONDecodeError as e:
        _fail(f"Invalid JSON in {source}: {e}")

    if not isinstance(payload, list):
        _fail(f"{source} must contain a JSON array, got {type(payload).__name__}")

    try:
        VaultStore(vault).write_notes(payload)
    except VaultStoreError as e:
        _fail(str(e))

    console.print(f"[green]Wrote {len(payload)} notes to {escape(vault)}[/green]")


@app.command()
def invoke(
    name: str = typer.Argument(..., help="Command name"),
    args: str = typer.Option("{}", "--args", "-a", help="JSON object of arguments"),
) -> None:
    """Invoke a registered command the way the desktop front-end does."""
    try:
        parsed = json.loads(args)
    except json.JSONDecodeError as e:
        _fail(f"--args is not valid JSON: {e}")

    if not isinstance(parsed, dict):
        _fail("--args must be a JSON object")

    try:
        result = get_command_registry().invoke(name, parsed)
    except VaultStoreError as e:
        _fail(f"{e} ({e.kind})")

    console.print_json(data=result)


@app.command("commands")
def list_commands() -> None:
    """List the registered commands."""
    table = Table(title="Commands", show_header=True, header_style="bold cyan")
    table.add_column("Command", style="green")
    table.add_column("Writes")
    table.add_column("Description")

    for command in get_command_registry().list_commands():
        table.add_row(command.name, "yes" if command.mutates else "", command.description)

    console.print(table)


def run_cli(args: list[str] | None = None):
    """Run the CLI application."""
    setup_logging()
    app(args=args)


if __name__ == "__main__":
    run_cli()
