"""Shared console logging and settings helpers."""
