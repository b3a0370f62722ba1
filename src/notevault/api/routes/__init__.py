"""API route modules."""

from notevault.api.routes import commands, connections, health, notes, vault

__all__ = ["commands", "connections", "health", "notes", "vault"]
