from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from biztime.log import get_logger
from biztime.result import ErrorKind, Result, ValidationError

logger = get_logger(__name__)

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.QUERY: 400,
}


class ApiError(Exception):
    """An error that becomes a JSON response with the given status."""

    def __init__(self, message: str, status: int = 400):
        self.message = message
        self.status = status
        super().__init__(message)


def raise_for_result(result: Result, not_found_message: str = None) -> Result:
    """Return `result` if it succeeded, else raise the matching ApiError."""
    if result.success:
        return result
    status = STATUS_BY_KIND[result.error.kind]
    if result.is_not_found and not_found_message:
        raise ApiError(not_found_message, status)
    raise ApiError(result.error.message, status)


def _error_body(message: str, status: int):
    return jsonify({"error": {"message": message, "status": status}}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ApiError)
    def handle_api_error(e: ApiError):
        return _error_body(e.message, e.status)

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        return _error_body(str(e), 400)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        return _error_body(e.description, e.code)
