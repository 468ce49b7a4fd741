"""Core cleanup logic for cleanctl."""
