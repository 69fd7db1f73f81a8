"""Output rendering for the CLI (human and JSON)."""
