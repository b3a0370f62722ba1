"""Vault store - JSON persistence for notes and connections.

A vault is a folder identified by its path. Each collection lives in its own
file at the vault root and holds a bare JSON array of records:

    <vault>/notes.json
    <vault>/connections.json

Every write replaces the whole collection. Writes go to a temporary sibling
file that is moved over the target, and writers to the same vault are
serialized by a per-vault lock held for the duration of the operation.
"""

import json
import logging
import os
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from threading import Lock, RLock
from typing import Any, TypeVar
from uuid import uuid4
from weakref import WeakValueDictionary

from pydantic import BaseModel, TypeAdapter, ValidationError

from notevault.core.errors import ErrorKind, VaultStoreError
from notevault.core.types import Connection, ConnectionList, Note, NoteList

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

Record = BaseModel | Mapping[str, Any]


def check_vault_path(path: str) -> bool:
    """Return True if ``path`` exists as a file or a directory.

    Never raises: unresolvable, malformed or non-string paths report False.
    """
    if not isinstance(path, str):
        return False
    try:
        return os.path.exists(path)
    except (TypeError, ValueError):
        return False


def _atomic_write(path: Path, content: bytes) -> None:
    """Write content to a temp file beside ``path`` then rename it over."""
    tmp_path = path.with_name(f".{path.name}.{uuid4().hex}.tmp")
    try:
        tmp_path.write_bytes(content)
        os.replace(tmp_path, path)
    except (OSError, ValueError):
        if check_vault_path(str(tmp_path)):
            tmp_path.unlink()
        raise


class VaultStore:
    """Reads and writes the record collections of one vault.

    Example:
        store = VaultStore("/home/me/Brain")
        notes = store.read_notes()
        store.write_notes([*notes, Note(id="n2", content="hi", created_at=now)])
    """

    NOTES_FILENAME = "notes.json"
    CONNECTIONS_FILENAME = "connections.json"

    # Entries live only while some caller holds the lock object
    _locks: WeakValueDictionary[str, RLock] = WeakValueDictionary()
    _locks_guard = Lock()

    def __init__(self, path: Path | str):
        """Initialize store for a vault root.

        Args:
            path: Path to the vault folder. It is not created or checked here.
        """
        self.root = Path(path)
        self.notes_file = self.root / self.NOTES_FILENAME
        self.connections_file = self.root / self.CONNECTIONS_FILENAME

    @property
    def exists(self) -> bool:
        """Check if the vault folder exists."""
        return check_vault_path(str(self.root))

    @property
    def _lock(self) -> RLock:
        key = os.path.abspath(self.root)
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = RLock()
                self._locks[key] = lock
            return lock

    # --- Collection primitives ---

    def _read_collection(
        self, path: Path, adapter: TypeAdapter[list[RecordT]], label: str
    ) -> list[RecordT]:
        if not check_vault_path(str(path)):
            logger.debug(f"No {label} file at {path}, returning empty list")
            return []

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {label} from {path}: {e}")
            raise VaultStoreError(
                ErrorKind.IO_ERROR, f"Failed to read {label}: {e}", path
            ) from e

        try:
            records = adapter.validate_json(text)
        except ValidationError as e:
            logger.error(f"Failed to parse {label} in {path}: {e}")
            raise VaultStoreError(
                ErrorKind.PARSE_ERROR, f"Failed to parse {label}: {e}", path
            ) from e

        logger.debug(f"Loaded {len(records)} {label} from {path}")
        return records

    def _write_collection(
        self,
        path: Path,
        records: Iterable[Record],
        adapter: TypeAdapter[list[RecordT]],
        label: str,
    ) -> None:
        try:
            items = adapter.validate_python(list(records))
        except ValidationError as e:
            logger.error(f"Rejected {label} payload for {path}: {e}")
            raise VaultStoreError(
                ErrorKind.PARSE_ERROR, f"Invalid {label}: {e}", path
            ) from e

        try:
            content = json.dumps(
                [item.model_dump(mode="json") for item in items],
                indent=2,
                ensure_ascii=False,
                allow_nan=False,
            ).encode("utf-8")
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize {label} for {path}: {e}")
            raise VaultStoreError(
                ErrorKind.SERIALIZE_ERROR, f"Failed to serialize {label}: {e}", path
            ) from e

        with self._lock:
            try:
                _atomic_write(path, content)
            except (OSError, ValueError) as e:
                logger.error(f"Failed to write {label} to {path}: {e}")
                raise VaultStoreError(
                    ErrorKind.IO_ERROR, f"Failed to write {label}: {e}", path
                ) from e

        logger.debug(f"Wrote {len(items)} {label} to {path}")

    @staticmethod
    def _coerce(model: type[RecordT], record: Any, label: str) -> RecordT:
        if isinstance(record, model):
            return record
        try:
            return model.model_validate(record)
        except ValidationError as e:
            raise VaultStoreError(ErrorKind.PARSE_ERROR, f"Invalid {label}: {e}") from e

    @staticmethod
    def _upsert(records: list[RecordT], record: RecordT) -> list[RecordT]:
        for index, existing in enumerate(records):
            if existing.id == record.id:
                records[index] = record
                return records
        records.append(record)
        return records

    # --- Notes ---

    def read_notes(self) -> list[Note]:
        """Load all notes in file order.

        Returns:
            List of notes. Empty if ``notes.json`` does not exist.

        Raises:
            VaultStoreError: ``io_error`` if the file cannot be read,
                ``parse_error`` if it is not a JSON array of notes.
        """
        return self._read_collection(self.notes_file, NoteList, "notes")

    def write_notes(self, notes: Sequence[Note | Mapping[str, Any]]) -> None:
        """Replace ``notes.json`` with the given notes.

        Raises:
            VaultStoreError: ``parse_error`` for records that are not notes,
                ``serialize_error`` if encoding fails, ``io_error`` if the
                file cannot be written (including a missing vault folder).
        """
        self._write_collection(self.notes_file, notes, NoteList, "notes")

    def get_note(self, note_id: str) -> Note | None:
        """Return the first note with ``note_id``, or None."""
        for note in self.read_notes():
            if note.id == note_id:
                return note
        return None

    def save_note(self, note: Note | Mapping[str, Any]) -> Note:
        """Insert or replace a note by id, keeping the order of the others."""
        record = self._coerce(Note, note, "note")
        with self._lock:
            notes = self._upsert(self.read_notes(), record)
            self.write_notes(notes)
        return record

    def delete_note(self, note_id: str) -> bool:
        """Remove every note with ``note_id``.

        Returns:
            True if anything was removed. The file is untouched otherwise.
        """
        with self._lock:
            notes = self.read_notes()
            kept = [n for n in notes if n.id != note_id]
            if len(kept) == len(notes):
                return False
            self.write_notes(kept)
        return True

    # --- Connections ---

    def read_connections(self) -> list[Connection]:
        """Load all connections in file order. Same contract as read_notes."""
        return self._read_collection(
            self.connections_file, ConnectionList, "connections"
        )

    def write_connections(
        self, connections: Sequence[Connection | Mapping[str, Any]]
    ) -> None:
        """Replace ``connections.json``. Same contract as write_notes."""
        self._write_collection(
            self.connections_file, connections, ConnectionList, "connections"
        )

    def save_connection(self, connection: Connection | Mapping[str, Any]) -> Connection:
        """Insert or replace a connection by id."""
        record = self._coerce(Connection, connection, "connection")
        with self._lock:
            connections = self._upsert(self.read_connections(), record)
            self.write_connections(connections)
        return record

    def delete_connection(self, connection_id: str) -> bool:
        """Remove every connection with ``connection_id``."""
        with self._lock:
            connections = self.read_connections()
            kept = [c for c in connections if c.id != connection_id]
            if len(kept) == len(connections):
                return False
            self.write_connections(kept)
        return True

    def __repr__(self) -> str:
        return f"VaultStore({self.root})"


# --- Path-based operations ---


def read_notes(vault_path: str) -> list[Note]:
    """Load the notes of the vault at ``vault_path``."""
    return VaultStore(vault_path).read_notes()


def write_notes(vault_path: str, notes: Sequence[Note | Mapping[str, Any]]) -> None:
    """Overwrite the notes of the vault at ``vault_path``."""
    VaultStore(vault_path).write_notes(notes)


def get_note(vault_path: str, note_id: str) -> Note | None:
    return VaultStore(vault_path).get_note(note_id)


def save_note(vault_path: str, note: Note | Mapping[str, Any]) -> Note:
    return VaultStore(vault_path).save_note(note)


def delete_note(vault_path: str, note_id: str) -> bool:
    return VaultStore(vault_path).delete_note(note_id)


def read_connections(vault_path: str) -> list[Connection]:
    """Load the connections of the vault at ``vault_path``."""
    return VaultStore(vault_path).read_connections()


def write_connections(
    vault_path: str, connections: Sequence[Connection | Mapping[str, Any]]
) -> None:
    """Overwrite the connections of the vault at ``vault_path``."""
    VaultStore(vault_path).write_connections(connections)


def save_connection(
    vault_path: str, connection: Connection | Mapping[str, Any]
) -> Connection:
    return VaultStore(vault_path).save_connection(connection)


def delete_connection(vault_path: str, connection_id: str) -> bool:
    return VaultStore(vault_path).delete_connection(connection_id)
