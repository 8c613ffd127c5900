"""Utility functions for pqseal."""

from .formatting import format_elapsed, format_size
from .progress import with_progress

__all__ = ["format_elapsed", "format_size", "with_progress"]
