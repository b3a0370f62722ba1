"""Configuration management for NoteVault core."""

import logging
import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    return os.getenv(key, default)


def get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"{key}={value!r} is not an integer, using {default}")
        return default


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return default


def get_env_list(key: str, default: str) -> list[str]:
    """Get a comma-separated environment variable as a list of strings."""
    raw = get_env(key, default) or default
    return [item.strip() for item in raw.split(",") if item.strip()]


# Logging
LOG_LEVEL = get_env("LOG_LEVEL", "INFO") or "INFO"

# Vault used by the CLI when none is given on the command line
NOTEVAULT_VAULT = get_env("NOTEVAULT_VAULT")

# API Server settings
NOTEVAULT_API_KEY = get_env("NOTEVAULT_API_KEY")
NOTEVAULT_HOST = get_env("NOTEVAULT_HOST", "127.0.0.1")
NOTEVAULT_PORT = get_env_int("NOTEVAULT_PORT", 8421)
NOTEVAULT_ALLOW_NO_AUTH = get_env_bool("NOTEVAULT_ALLOW_NO_AUTH", False)
NOTEVAULT_CORS_ORIGINS = get_env_list(
    "NOTEVAULT_CORS_ORIGINS", "http://localhost:3000,tauri://localhost"
)


def setup_logging() -> logging.Logger:
    """Configure and return logger."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    )
    return logging.getLogger(__name__)


def validate_api_environment() -> tuple[bool, str]:
    """
    Validate environment variables for serving the API.

    Returns:
        (is_valid, message) - If not valid, message explains what's missing.
    """
    if not NOTEVAULT_API_KEY and not NOTEVAULT_ALLOW_NO_AUTH:
        return (
            False,
            "Missing NOTEVAULT_API_KEY - set it, or NOTEVAULT_ALLOW_NO_AUTH=true "
            "for local development",
        )

    return True, ""
