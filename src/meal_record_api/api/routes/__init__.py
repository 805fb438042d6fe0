"""API routes."""

from . import meals

__all__ = ["meals"]
