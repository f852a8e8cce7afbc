"""Shared helpers for photo_resizer."""
