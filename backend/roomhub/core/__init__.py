"""Settings and process setup helpers."""
