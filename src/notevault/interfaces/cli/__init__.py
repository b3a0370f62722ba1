"""Command-line interface for NoteVault."""
