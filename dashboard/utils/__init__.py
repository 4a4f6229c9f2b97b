"""Utility functions for the invoice dashboard."""

from .numeric import format_minor_units, from_minor_units, to_minor_units
from .view_cache import get_view_cache, revalidate_path

__all__ = [
    "format_minor_units",
    "from_minor_units",
    "to_minor_units",
    "get_view_cache",
    "revalidate_path",
]
