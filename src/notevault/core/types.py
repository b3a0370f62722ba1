"""Record types persisted inside a vault."""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class Note(BaseModel):
    """A single text entry in a vault.

    Identifiers and timestamps are assigned by the caller and stored verbatim.
    Field order is the key order written to ``notes.json``.
    """

    model_config = ConfigDict(extra="forbid")

    id: str
    content: str
    created_at: str
    updated_at: str | None = None


class Connection(BaseModel):
    """A weighted relation between two notes.

    ``source_id`` and ``target_id`` are not checked against the notes
    collection; dangling references are stored as given.
    """

    # NaN and infinities are kept on dump so that encoding rejects them
    model_config = ConfigDict(extra="forbid", ser_json_inf_nan="constants")

    id: str
    source_id: str
    target_id: str
    strength: float = Field(strict=True, allow_inf_nan=False)
    type_name: str
    created_at: str


NoteList = TypeAdapter(list[Note])
ConnectionList = TypeAdapter(list[Connection])

__all__ = [
    "Connection",
    "ConnectionList",
    "Note",
    "NoteList",
]
