"""Core pagination engine, settings and error types."""
