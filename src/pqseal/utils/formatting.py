"""Human-readable formatting helpers for pqseal."""

from __future__ import annotations


def format_size(size: int) -> str:
    """Format a byte count for display.

    Args:
        size: Number of bytes.

    Returns:
        ``"N B"`` below 1 KiB, KiB with one decimal below 1 MiB, otherwise
        MiB with two decimals.
    """
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.2f} MB"


def format_elapsed(seconds: float, precision: int = 1) -> str:
    """Format a duration in seconds, e.g. ``"12.3s"``."""
    return f"{seconds:.{precision}f}s"
