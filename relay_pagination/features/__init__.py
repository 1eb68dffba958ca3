"""Optional integrations built on the core pagination engine."""
