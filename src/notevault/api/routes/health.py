"""Health check endpoints."""

from fastapi import APIRouter

from notevault import __version__
from notevault.core.commands import get_command_registry

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str | int]:
    """
    Report service status.

    Returns:
        dict with status, version and number of registered commands
    """
    return {
        "status": "healthy",
        "version": __version__,
        "commands": len(get_command_registry().get_command_names()),
    }


@router.get("/health/live")
async def liveness_check() -> dict[str, str]:
    """Simple OK response if the service is running."""
    return {"status": "ok"}
