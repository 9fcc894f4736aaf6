"""Shared building blocks: configuration, database wiring, errors, logging."""
