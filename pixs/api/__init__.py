"""HTTP API for the reminder service."""
