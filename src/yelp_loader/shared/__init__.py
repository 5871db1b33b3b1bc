"""Shared models, exceptions and logging helpers."""
