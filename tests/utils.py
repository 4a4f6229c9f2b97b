"""Fakes shared across the test-suite."""

from __future__ import annotations

from typing import Any, List, Tuple

from dashboard.services.invoice_store import PersistenceError


class RedirectCalled(Exception):
    """Raised by :class:`RecordingRouter` to mimic a framework redirect."""

    def __init__(self, path: str):
        super().__init__(path)
        self.path = path


class RecordingStore:
    """In-memory stand-in for :class:`InvoiceStore` that records calls."""

    def __init__(self, fail: bool = False, rowcount: int = 1):
        self.fail = fail
        self.rowcount = rowcount
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if self.fail:
            raise PersistenceError(name, "connection refused")

    def insert(self, customer_id, amount, status, created):
        self._record("insert", customer_id, amount, status, created)
        return "generated-id"

    def update(self, invoice_id, customer_id, amount, status):
        self._record("update", invoice_id, customer_id, amount, status)
        return self.rowcount

    def delete(self, invoice_id):
        self._record("delete", invoice_id)
        return self.rowcount


class RecordingCache:
    def __init__(self, events: List[Tuple[str, str]] | None = None):
        self.events = events if events is not None else []
        self.invalidated: List[str] = []

    def invalidate(self, path: str) -> None:
        self.invalidated.append(path)
        self.events.append(("invalidate", path))


class RecordingRouter:
    def __init__(self, events: List[Tuple[str, str]] | None = None, raise_on_redirect: bool = False):
        self.events = events if events is not None else []
        self.raise_on_redirect = raise_on_redirect
        self.redirects: List[str] = []

    def redirect(self, path: str) -> None:
        self.redirects.append(path)
        self.events.append(("redirect", path))
        if self.raise_on_redirect:
            raise RedirectCalled(path)
