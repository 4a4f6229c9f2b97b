"""Helpers for handling paginated views."""

from __future__ import annotations

from typing import Tuple

from flask import request

PAGINATION_SIZES: Tuple[int, ...] = (6, 12, 25, 50)


def get_per_page(param: str = "per_page", default: int = 6) -> int:
    """Return a validated per-page value from the query string.

    Parameters
    ----------
    param:
        Query string parameter containing the requested page size.
    default:
        Fallback value used when the parameter is missing or invalid.

    Returns
    -------
    int
        A value from :data:`PAGINATION_SIZES`.
    """

    value = request.args.get(param, type=int)
    if value in PAGINATION_SIZES:
        return value
    if default in PAGINATION_SIZES:
        return default
    return PAGINATION_SIZES[0]


def get_page(param: str = "page") -> int:
    """Return the requested page number, never lower than 1."""

    value = request.args.get(param, 1, type=int)
    return value if value and value > 0 else 1
