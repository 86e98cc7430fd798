"""Voice-driven scripture lookup with per-connection reading position."""
