"""Connection collection endpoints."""

from fastapi import APIRouter

from notevault.api.deps import VaultStoreDep
from notevault.api.routes.notes import DeleteResult, WriteResult
from notevault.core.errors import ErrorKind, VaultStoreError
from notevault.core.types import Connection

router = APIRouter()


@router.get("/connections", response_model=list[Connection])
def read_connections(store: VaultStoreDep) -> list[Connection]:
    """Load all connections of the vault, in file order."""
    return store.read_connections()


@router.put("/connections", response_model=WriteResult)
def write_connections(
    connections: list[Connection], store: VaultStoreDep
) -> WriteResult:
    """
    Overwrite all connections of the vault.

    Source and target ids are stored as given; they are not checked
    against the notes collection.
    """
    store.write_connections(connections)
    return WriteResult(count=len(connections))


@router.put("/connections/{connection_id}", response_model=Connection)
def save_connection(
    connection_id: str, connection: Connection, store: VaultStoreDep
) -> Connection:
    if connection.id != connection_id:
        raise VaultStoreError(
            ErrorKind.PARSE_ERROR,
            f"Connection id {connection.id!r} does not match path id "
            f"{connection_id!r}",
        )
    return store.save_connection(connection)


@router.delete("/connections/{connection_id}", response_model=DeleteResult)
def delete_connection(connection_id: str, store: VaultStoreDep) -> DeleteResult:
    if not store.delete_connection(connection_id):
        raise VaultStoreError(
            ErrorKind.NOT_FOUND, f"Connection not found: {connection_id}"
        )
    return DeleteResult(deleted=True)
