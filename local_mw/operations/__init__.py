"""Top-level operations (check, update)."""
