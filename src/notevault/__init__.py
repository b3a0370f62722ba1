"""NoteVault - local vault storage for notes and connections."""

__version__ = "1.0.0"
