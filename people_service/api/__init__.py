"""HTTP layer for the people service."""
