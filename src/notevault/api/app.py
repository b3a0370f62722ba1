"""FastAPI application for the NoteVault REST API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notevault import __version__
from notevault.api.errors import vault_store_error_handler
from notevault.api.middleware import api_key_middleware
from notevault.api.routes import commands, connections, health, notes, vault
from notevault.core.config import (
    NOTEVAULT_CORS_ORIGINS,
    NOTEVAULT_HOST,
    NOTEVAULT_PORT,
)
from notevault.core.errors import VaultStoreError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("NoteVault API starting up...")
    yield
    logger.info("NoteVault API shutting down...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="NoteVault API",
        description="Local vault storage for notes and connections",
        version=__version__,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=NOTEVAULT_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add API key authentication middleware
    app.middleware("http")(api_key_middleware)

    app.add_exception_handler(VaultStoreError, vault_store_error_handler)

    # Include routers
    app.include_router(health.router, prefix="/api/v1", tags=["Health"])
    app.include_router(commands.router, prefix="/api/v1", tags=["Commands"])
    app.include_router(vault.router, prefix="/api/v1", tags=["Vault"])
    app.include_router(notes.router, prefix="/api/v1", tags=["Notes"])
    app.include_router(connections.router, prefix="/api/v1", tags=["Connections"])

    return app


# Create the default app instance
app = create_app()


def run_server():
    """Run the API server."""
    import uvicorn

    uvicorn.run(
        "notevault.api.app:app",
        host=NOTEVAULT_HOST,
        port=NOTEVAULT_PORT,
        reload=False,
    )


if __name__ == "__main__":
    run_server()
