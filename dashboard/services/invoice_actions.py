"""Create, update and delete actions for invoices.

Each action validates the submitted fields, issues a single store
statement, then invalidates the cached invoice list and redirects to it.
Failures come back as a :class:`State` for the form to display.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol

from flask import current_app
from werkzeug.datastructures import MultiDict

from dashboard import INVOICES_PATH
from dashboard.forms import InvoiceForm
from dashboard.services.invoice_store import PersistenceError
from dashboard.utils.numeric import to_minor_units

DELETED_MESSAGE = "Deleted Invoice."


class InvoiceWriter(Protocol):
    def insert(
        self, customer_id: str, amount: int, status: str, created: date
    ) -> str: ...

    def update(
        self, invoice_id: str, customer_id: str, amount: int, status: str
    ) -> int: ...

    def delete(self, invoice_id: str) -> int: ...


class PathInvalidator(Protocol):
    def invalidate(self, path: str) -> None: ...


class Router(Protocol):
    def redirect(self, path: str) -> None: ...


@dataclass
class State:
    """Outcome shown back to the invoice form."""

    errors: Dict[str, List[str]] = field(default_factory=dict)
    message: Optional[str] = None
    ok: bool = False

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"message": self.message}
        if self.errors:
            payload["errors"] = self.errors
        return payload


@dataclass
class InvoiceRecord:
    customer_id: str
    amount: int
    status: str


class InvoiceValidationError(ValueError):
    """Raised by the legacy actions when submitted fields are invalid."""

    def __init__(self, errors: Dict[str, List[str]]):
        super().__init__(
            "Invalid invoice fields: " + ", ".join(sorted(errors))
        )
        self.errors = errors


def _logger():
    return current_app.logger if current_app else logging.getLogger(__name__)


def validate_invoice_fields(form_data: Mapping[str, Any]):
    """Return ``(record, errors)`` for submitted invoice fields.

    Exactly one of the two is set. ``record.amount`` is already in minor
    units.
    """

    if not isinstance(form_data, MultiDict):
        form_data = MultiDict(form_data)
    form = InvoiceForm(formdata=form_data)
    if not form.validate():
        return None, form.field_errors
    record = InvoiceRecord(
        customer_id=form.customer_id.data,
        amount=to_minor_units(form.amount.data),
        status=form.status.data,
    )
    return record, None


class InvoiceActions:
    """Invoice mutations wired to a store, a view cache and a router."""

    def __init__(
        self,
        store: InvoiceWriter,
        cache: PathInvalidator,
        router: Router,
        today: Callable[[], date] = date.today,
    ):
        self.store = store
        self.cache = cache
        self.router = router
        self.today = today

    def _finish(self) -> None:
        self.cache.invalidate(INVOICES_PATH)
        self.router.redirect(INVOICES_PATH)

    # ------------------------------------------------------------------
    def create_invoice(
        self, prev_state: Optional[State], form_data: Mapping[str, Any]
    ) -> Optional[State]:
        record, errors = validate_invoice_fields(form_data)
        if errors:
            return State(
                errors=errors,
                message="Missing Fields. Failed to Create Invoice.",
            )

        try:
            invoice_id = self.store.insert(
                record.customer_id, record.amount, record.status, self.today()
            )
        except PersistenceError:
            _logger().exception("Failed to create invoice")
            return State(message="Database Error: Failed to Create Invoice.")

        _logger().info("Created invoice %s", invoice_id)
        self._finish()
        return None

    # ------------------------------------------------------------------
    def update_invoice(
        self,
        invoice_id: str,
        prev_state: Optional[State],
        form_data: Mapping[str, Any],
    ) -> Optional[State]:
        record, errors = validate_invoice_fields(form_data)
        if errors:
            return State(
                errors=errors,
                message="Missing Fields. Failed to Update Invoice.",
            )

        try:
            updated = self.store.update(
                invoice_id, record.customer_id, record.amount, record.status
            )
        except PersistenceError:
            _logger().exception("Failed to update invoice %s", invoice_id)
            return State(message="Database Error: Failed to Update Invoice.")

        # A missing id updates nothing and still counts as success.
        _logger().info("Updated invoice %s (%s row(s))", invoice_id, updated)
        self._finish()
        return None

    # ------------------------------------------------------------------
    def delete_invoice(self, invoice_id: str) -> State:
        try:
            deleted = self.store.delete(invoice_id)
        except PersistenceError:
            _logger().exception("Failed to delete invoice %s", invoice_id)
            return State(message="Database Error: Failed to Delete Invoice.")

        _logger().info("Deleted invoice %s (%s row(s))", invoice_id, deleted)
        self.cache.invalidate(INVOICES_PATH)
        return State(message=DELETED_MESSAGE, ok=True)

    # ------------------------------------------------------------------
    def create_invoice_legacy(self, form_data: Mapping[str, Any]):
        """Deprecated form of :meth:`create_invoice`.

        Raises :class:`InvoiceValidationError` for invalid fields and
        returns ``{"message": ...}`` on a database error.
        """
        warnings.warn(
            "create_invoice_legacy is deprecated; use create_invoice",
            DeprecationWarning,
            stacklevel=2,
        )
        return self._legacy_result(self.create_invoice(None, form_data))

    def update_invoice_legacy(
        self, invoice_id: str, form_data: Mapping[str, Any]
    ):
        """Deprecated form of :meth:`update_invoice`."""
        warnings.warn(
            "update_invoice_legacy is deprecated; use update_invoice",
            DeprecationWarning,
            stacklevel=2,
        )
        return self._legacy_result(
            self.update_invoice(invoice_id, None, form_data)
        )

    @staticmethod
    def _legacy_result(state: Optional[State]):
        if state is None:
            return None
        if state.errors:
            raise InvoiceValidationError(state.errors)
        return {"message": state.message}
