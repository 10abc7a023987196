"""Shared utilities: display formatting and structured logging helpers."""
