"""Note collection endpoints."""

from fastapi import APIRouter
from pydantic import BaseModel

from notevault.api.deps import VaultStoreDep
from notevault.core.errors import ErrorKind, VaultStoreError
from notevault.core.types import Note

router = APIRouter()


class WriteResult(BaseModel):
    """Response for a full-collection overwrite."""

    ok: bool = True
    count: int


class DeleteResult(BaseModel):
    """Response for a single-record delete."""

    deleted: bool


@router.get("/notes", response_model=list[Note])
def read_notes(store: VaultStoreDep) -> list[Note]:
    """
    Load all notes of the vault, in file order.

    A vault without ``notes.json`` has no notes.
    """
    return store.read_notes()


@router.put("/notes", response_model=WriteResult)
def write_notes(notes: list[Note], store: VaultStoreDep) -> WriteResult:
    """Overwrite all notes of the vault."""
    store.write_notes(notes)
    return WriteResult(count=len(notes))


@router.get("/notes/{note_id}", response_model=Note)
def get_note(note_id: str, store: VaultStoreDep) -> Note:
    note = store.get_note(note_id)
    if note is None:
        raise VaultStoreError(ErrorKind.NOT_FOUND, f"Note not found: {note_id}")
    return note


@router.put("/notes/{note_id}", response_model=Note)
def save_note(note_id: str, note: Note, store: VaultStoreDep) -> Note:
    """Insert or replace one note. The body id must match the path."""
    if note.id != note_id:
        raise VaultStoreError(
            ErrorKind.PARSE_ERROR,
            f"Note id {note.id!r} does not match path id {note_id!r}",
        )
    return store.save_note(note)


@router.delete("/notes/{note_id}", response_model=DeleteResult)
def delete_note(note_id: str, store: VaultStoreDep) -> DeleteResult:
    if not store.delete_note(note_id):
        raise VaultStoreError(ErrorKind.NOT_FOUND, f"Note not found: {note_id}")
    return DeleteResult(deleted=True)
