from flask import jsonify
from constructor_pages.domain.exceptions import (
    NotFoundError,
    TransactionError,
    TypeMismatchError,
    ValidationError,
)
from constructor_pages.domain.invariants.exceptions import InvariantViolation

STATUS_BY_ERROR = {
    ValidationError: 400,
    InvariantViolation: 400,
    NotFoundError: 404,
    TransactionError: 409,
    TypeMismatchError: 422,
}


def register_error_handlers(app):
    def handle_domain_error(error):
        response = jsonify({
            "error": type(error).__name__,
            "message": str(error)
        })
        response.status_code = STATUS_BY_ERROR[type(error)]
        return response

    for error_class in STATUS_BY_ERROR:
        app.register_error_handler(error_class, handle_domain_error)
