"""Parameterized persistence for invoices.

Every statement is built with SQLAlchemy Core so values are always sent as
bound parameters. A connection is checked out per call through
``engine.begin()`` and returned on every exit path.
"""

from __future__ import annotations

from datetime import date
from math import ceil
from typing import Dict, List, Optional

from sqlalchemy import String, cast, delete, func, insert, or_, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from dashboard.models import Customer, Invoice
from dashboard.utils.numeric import format_minor_units

invoices = Invoice.__table__
customers = Customer.__table__


def _rowcount(result) -> int:
    return result.rowcount


def _all_mappings(result):
    return result.mappings().all()


class PersistenceError(RuntimeError):
    """Raised when the invoice store cannot complete a statement."""

    def __init__(self, operation: str, detail: str = ""):
        message = f"Invoice store failed to {operation}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.operation = operation


class InvoiceStore:
    """Store for the ``invoices`` table backed by a SQLAlchemy engine."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def _execute(self, operation: str, statement, consume):
        # Results are consumed before the connection goes back to the pool.
        # Some drivers raise OverflowError for out of range bound values.
        try:
            with self.engine.begin() as connection:
                return consume(connection.execute(statement))
        except (SQLAlchemyError, OverflowError) as exc:
            raise PersistenceError(operation, str(exc)) from exc

    # ------------------------------------------------------------------
    def insert(
        self, customer_id: str, amount: int, status: str, created: date
    ) -> str:
        """Insert an invoice and return the id the store assigned."""
        return self._execute(
            "insert invoice",
            insert(invoices).values(
                customer_id=customer_id,
                amount=amount,
                status=status,
                date=created,
            ),
            lambda result: result.inserted_primary_key[0],
        )

    def update(
        self, invoice_id: str, customer_id: str, amount: int, status: str
    ) -> int:
        """Update the mutable columns and return the affected row count."""
        return self._execute(
            "update invoice",
            update(invoices)
            .where(invoices.c.id == invoice_id)
            .values(customer_id=customer_id, amount=amount, status=status),
            _rowcount,
        )

    def delete(self, invoice_id: str) -> int:
        return self._execute(
            "delete invoice",
            delete(invoices).where(invoices.c.id == invoice_id),
            _rowcount,
        )

    # ------------------------------------------------------------------
    def _search_clause(self, query: str):
        pattern = f"%{query}%"
        return or_(
            customers.c.name.ilike(pattern),
            customers.c.email.ilike(pattern),
            cast(invoices.c.amount, String).ilike(pattern),
            cast(invoices.c.date, String).ilike(pattern),
            invoices.c.status.ilike(pattern),
        )

    def fetch_filtered_invoices(
        self, query: str = "", page: int = 1, per_page: int = 6
    ) -> List[Dict[str, str]]:
        """Return one page of invoices matching ``query``, newest first."""
        page = max(page, 1)
        statement = (
            select(
                invoices.c.id,
                invoices.c.customer_id,
                invoices.c.amount,
                invoices.c.status,
                invoices.c.date,
                customers.c.name,
                customers.c.email,
                customers.c.image_url,
            )
            .select_from(invoices.join(customers))
            .order_by(invoices.c.date.desc(), invoices.c.id)
            .limit(per_page)
            .offset((page - 1) * per_page)
        )
        if query:
            statement = statement.where(self._search_clause(query))
        rows = self._execute("fetch invoices", statement, _all_mappings)
        return [
            {
                "id": row["id"],
                "customer_id": row["customer_id"],
                "name": row["name"],
                "email": row["email"],
                "image_url": row["image_url"],
                "amount": format_minor_units(row["amount"]),
                "status": row["status"],
                "date": row["date"].isoformat(),
            }
            for row in rows
        ]

    def fetch_invoice_pages(self, query: str = "", per_page: int = 6) -> int:
        statement = select(func.count()).select_from(
            invoices.join(customers)
        )
        if query:
            statement = statement.where(self._search_clause(query))
        total = self._execute(
            "count invoices", statement, lambda result: result.scalar_one()
        )
        return ceil(total / per_page)

    def fetch_invoice_by_id(self, invoice_id: str) -> Optional[Dict[str, str]]:
        """Return an invoice with its amount in major units, or ``None``."""
        row = self._execute(
            "fetch invoice",
            select(invoices).where(invoices.c.id == invoice_id),
            lambda result: result.mappings().first(),
        )
        if row is None:
            return None
        return {
            "id": row["id"],
            "customerId": row["customer_id"],
            "amount": format_minor_units(row["amount"]),
            "status": row["status"],
            "date": row["date"].isoformat(),
        }

    def fetch_customers(self) -> List[Dict[str, str]]:
        rows = self._execute(
            "fetch customers",
            select(customers.c.id, customers.c.name).order_by(
                customers.c.name
            ),
            _all_mappings,
        )
        return [{"id": row["id"], "name": row["name"]} for row in rows]
