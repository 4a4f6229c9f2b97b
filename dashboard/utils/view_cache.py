"""Rendered-view cache with path based invalidation."""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Any, Dict, Hashable, Optional

from flask import current_app

DEFAULT_MAX_ENTRIES = 128


class ViewCache:
    """Stores rendered payloads per route path and query key.

    Each path carries a generation number that :meth:`invalidate` bumps. A
    payload built under an older generation is dropped by :meth:`set`, so a
    render that raced a mutation is never stored.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        self.max_entries = max_entries
        self._entries: Dict[str, "OrderedDict[Hashable, Any]"] = {}
        self._generations: Dict[str, int] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    def get(self, path: str, key: Hashable = "") -> Optional[Any]:
        with self._lock:
            entries = self._entries.get(path)
            if not entries or key not in entries:
                return None
            entries.move_to_end(key)
            return entries[key]

    # ------------------------------------------------------------------
    def generation(self, path: str) -> int:
        with self._lock:
            return self._generations.get(path, 0)

    # ------------------------------------------------------------------
    def set(
        self,
        path: str,
        key: Hashable,
        payload: Any,
        generation: Optional[int] = None,
    ) -> bool:
        """Store ``payload`` unless ``path`` was invalidated since ``generation``.

        Returns whether the payload was stored. The least recently used
        variant of ``path`` is evicted past ``max_entries``.
        """
        with self._lock:
            current = self._generations.get(path, 0)
            if generation is not None and generation != current:
                return False
            entries = self._entries.setdefault(path, OrderedDict())
            entries[key] = payload
            entries.move_to_end(key)
            while len(entries) > self.max_entries:
                entries.popitem(last=False)
            return True

    # ------------------------------------------------------------------
    def invalidate(self, path: str) -> None:
        """Drop every cached variant of ``path`` so the next request rebuilds it."""
        with self._lock:
            self._entries.pop(path, None)
            self._generations[path] = self._generations.get(path, 0) + 1

    # ------------------------------------------------------------------
    def __contains__(self, path: str) -> bool:
        with self._lock:
            return bool(self._entries.get(path))

    def __len__(self) -> int:
        with self._lock:
            return sum(len(entries) for entries in self._entries.values())


# ----------------------------------------------------------------------
def get_view_cache() -> ViewCache:
    app = current_app._get_current_object()
    cache = app.extensions.get("view_cache")
    if cache is None:
        cache = app.extensions["view_cache"] = ViewCache(
            app.config.get("VIEW_CACHE_MAX_ENTRIES", DEFAULT_MAX_ENTRIES)
        )
    return cache


def revalidate_path(path: str) -> None:
    """Public helper to discard cached renderings of ``path``."""
    get_view_cache().invalidate(path)
