"""REST API for NoteVault."""
