"""API middleware for authentication."""

import logging
import secrets
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from notevault.core.config import NOTEVAULT_ALLOW_NO_AUTH, NOTEVAULT_API_KEY

logger = logging.getLogger(__name__)

# Paths that don't require authentication
PUBLIC_PATHS = {
    "/api/v1/health",
    "/api/v1/health/live",
    "/docs",
    "/openapi.json",
    "/redoc",
}


def _is_public(path: str) -> bool:
    return path in PUBLIC_PATHS or path.startswith("/docs") or path.startswith("/redoc")


async def api_key_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """
    Middleware to validate API key authentication.

    Checks the X-API-Key header against NOTEVAULT_API_KEY.
    Public paths are exempt from authentication.
    """
    if _is_public(request.url.path):
        return await call_next(request)

    # If no API key is configured, fail closed unless explicitly allowed
    if not NOTEVAULT_API_KEY:
        if not NOTEVAULT_ALLOW_NO_AUTH:
            logger.error("NOTEVAULT_API_KEY not set - refusing unauthenticated access")
            return JSONResponse(
                status_code=503,
                content={"detail": "API key not configured"},
            )
        return await call_next(request)

    api_key = request.headers.get("X-API-Key")

    if not api_key:
        return JSONResponse(
            status_code=401,
            content={"detail": "Missing X-API-Key header"},
        )

    if not secrets.compare_digest(api_key, NOTEVAULT_API_KEY):
        return JSONResponse(
            status_code=401,
            content={"detail": "Invalid API key"},
        )

    return await call_next(request)
