from flask import Blueprint, abort, jsonify, request

from dashboard import db
from dashboard.services.invoice_actions import InvoiceActions
from dashboard.services.invoice_store import InvoiceStore
from dashboard.utils.navigation import FlaskRouter
from dashboard.utils.pagination import get_page, get_per_page
from dashboard.utils.view_cache import get_view_cache

invoice = Blueprint("invoice", __name__)


def _store():
    return InvoiceStore(db.engine)


def _actions():
    return InvoiceActions(
        store=_store(), cache=get_view_cache(), router=FlaskRouter()
    )


def _state_response(state):
    # Field errors are the caller's to fix; anything else is a store failure.
    status = 400 if state.errors else 500
    return jsonify(state.to_dict()), status


@invoice.route("", methods=["GET"])
def view_invoices():
    """List invoices with optional search and pagination."""
    query = request.args.get("query", "").strip()
    page = get_page()
    per_page = get_per_page()
    cache = get_view_cache()
    key = (query, page, per_page)
    payload = cache.get(request.path, key)
    if payload is None:
        generation = cache.generation(request.path)
        store = _store()
        payload = {
            "invoices": store.fetch_filtered_invoices(query, page, per_page),
            "query": query,
            "page": page,
            "per_page": per_page,
            "total_pages": store.fetch_invoice_pages(query, per_page),
        }
        cache.set(request.path, key, payload, generation=generation)
    return jsonify(payload)


@invoice.route("/create", methods=["GET"])
def create_invoice_form():
    """Return the customer choices for the create form."""
    return jsonify({"customers": _store().fetch_customers()})


@invoice.route("/create", methods=["POST"])
def create_invoice():
    """Create an invoice from submitted form fields."""
    state = _actions().create_invoice(None, request.form)
    return _state_response(state)


@invoice.route("/<invoice_id>/edit", methods=["GET"])
def edit_invoice_form(invoice_id):
    """Return an invoice for pre-filling the edit form."""
    store = _store()
    record = store.fetch_invoice_by_id(invoice_id)
    if record is None:
        abort(404)
    return jsonify({"invoice": record, "customers": store.fetch_customers()})


@invoice.route("/<invoice_id>/edit", methods=["POST"])
def edit_invoice(invoice_id):
    """Update an invoice from submitted form fields."""
    state = _actions().update_invoice(invoice_id, None, request.form)
    return _state_response(state)


@invoice.route("/<invoice_id>/delete", methods=["POST"])
def delete_invoice(invoice_id):
    """Delete an invoice and refresh the cached list."""
    state = _actions().delete_invoice(invoice_id)
    return jsonify(state.to_dict()), 200 if state.ok else 500
