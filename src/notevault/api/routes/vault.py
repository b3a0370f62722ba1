"""Vault folder endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query

from notevault.core.store import check_vault_path

router = APIRouter()


@router.get("/vault/exists")
def vault_exists(
    path: Annotated[str, Query(description="Folder or file path to check")],
) -> dict[str, bool]:
    """Check whether a path exists. Never fails; unknown paths report false."""
    return {"exists": check_vault_path(path)}
