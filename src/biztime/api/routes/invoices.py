from flask import Blueprint, current_app, jsonify, request

from biztime.api.errors import ApiError, raise_for_result
from biztime.invoice import InvoiceRepository
from biztime.result import ValidationError
from biztime.validators import validate_numeric_id

bp = Blueprint("invoices", __name__)


def _repo() -> InvoiceRepository:
    return InvoiceRepository(current_app.access)


def _invoice_id(raw: str) -> int:
    try:
        return validate_numeric_id(raw)
    except ValidationError as e:
        raise ApiError(f"Invoice id {e}", 400) from e


@bp.route("", methods=["GET"])
def list_invoices():
    """List all invoices."""
    result = raise_for_result(_repo().list())
    return jsonify({"invoices": result.payload})


@bp.route("/<raw_id>", methods=["GET"])
def get_invoice(raw_id: str):
    """Get an invoice with its company."""
    result = raise_for_result(
        _repo().get(_invoice_id(raw_id)),
        not_found_message=f"Invoice '{raw_id}' was not found.",
    )
    return jsonify({"invoice": result.payload})


@bp.route("", methods=["POST"])
def create_invoice():
    """Create an invoice. comp_code and amt are required."""
    result = raise_for_result(_repo().create(request.get_json(silent=True)))
    return jsonify({"invoice": result.payload}), 201


@bp.route("/<raw_id>", methods=["PUT"])
def update_invoice(raw_id: str):
    """Update comp_code, amt, paid and/or paid_date."""
    invoice_id = _invoice_id(raw_id)
    result = raise_for_result(
        _repo().update(invoice_id, request.get_json(silent=True)),
        not_found_message=f"Invoice '{raw_id}' was not found.",
    )
    return jsonify({"invoice": result.payload})


@bp.route("/<raw_id>", methods=["DELETE"])
def delete_invoice(raw_id: str):
    """Delete an invoice."""
    result = raise_for_result(
        _repo().delete(_invoice_id(raw_id)),
        not_found_message=f"Invoice '{raw_id}' was not found.",
    )
    return jsonify({"deleted": result.payload, "status": result.status})
