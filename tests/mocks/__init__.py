"""Mock collaborators for focus-crop tests."""
