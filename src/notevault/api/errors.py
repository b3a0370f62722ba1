"""Rendering of store errors as HTTP responses."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from notevault.core.errors import ErrorKind, VaultStoreError

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.PARSE_ERROR: 422,
    ErrorKind.IO_ERROR: 500,
    ErrorKind.SERIALIZE_ERROR: 500,
}


async def vault_store_error_handler(
    request: Request, exc: VaultStoreError
) -> JSONResponse:
    """Render a VaultStoreError as ``{"detail": ..., "kind": ...}``."""
    status_code = STATUS_BY_KIND.get(exc.kind, 500)
    logger.warning(f"{request.method} {request.url.path} -> {status_code}: {exc}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())
