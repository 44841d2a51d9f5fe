from flask import jsonify
from subpage.domain.exceptions import (
    CapacityExceededError,
    InvariantViolation,
    NotFoundError,
)

def _error_response(error, status_code):
    response = jsonify({
        "error": type(error).__name__,
        "message": str(error)
    })
    response.status_code = status_code
    return response

def register_error_handlers(app):
    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        return _error_response(error, 400)

    @app.errorhandler(NotFoundError)
    def handle_not_found(error):
        return _error_response(error, 404)

    @app.errorhandler(CapacityExceededError)
    def handle_capacity_exceeded(error):
        return _error_response(error, 409)
