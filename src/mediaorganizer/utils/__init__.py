"""Small conversion helpers (sizes, timestamps)."""
