from flask import Blueprint, current_app, jsonify, request

from biztime.api.errors import raise_for_result
from biztime.company import CompanyRepository

bp = Blueprint("companies", __name__)


def _repo() -> CompanyRepository:
    return CompanyRepository(current_app.access)


@bp.route("", methods=["GET"])
def list_companies():
    """List all companies."""
    result = raise_for_result(_repo().list())
    return jsonify({"companies": result.payload})


@bp.route("/<code>", methods=["GET"])
def get_company(code: str):
    """Get a company with the ids of its invoices."""
    result = raise_for_result(
        _repo().get_with_invoices(code),
        not_found_message=f"Company '{code}' was not found.",
    )
    return jsonify({"company": result.payload})


@bp.route("", methods=["POST"])
def create_company():
    """Create a company. code and name are required."""
    result = raise_for_result(_repo().create(request.get_json(silent=True)))
    return jsonify({"company": result.payload}), 201


@bp.route("/<code>", methods=["PUT"])
def update_company(code: str):
    """Update a company's name and/or description."""
    result = raise_for_result(
        _repo().update(code, request.get_json(silent=True)),
        not_found_message=f"Company '{code}' was not found.",
    )
    return jsonify({"company": result.payload})


@bp.route("/<code>", methods=["DELETE"])
def delete_company(code: str):
    """Delete a company."""
    result = raise_for_result(
        _repo().delete(code),
        not_found_message=f"Company '{code}' was not found.",
    )
    return jsonify({"deleted": result.payload, "status": result.status})
