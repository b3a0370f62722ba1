"""User-facing interfaces for NoteVault."""
