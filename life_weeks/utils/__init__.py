"""Utility modules for Life Weeks."""

from . import formatting

__all__ = ["formatting"]
