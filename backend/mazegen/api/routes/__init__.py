"""API routes package.

This package contains all API route handlers for the application.
"""
from . import levels
from . import solve

__all__ = [
    "levels",
    "solve",
]
