"""Exception hierarchy and JSON error envelopes for the BrainBoost API."""

from typing import Any, Dict, Optional

from flask import current_app, jsonify, request
from werkzeug.exceptions import HTTPException


class BrainBoostError(Exception):
    """Base exception; rendered as ``{success, message, code, details}``."""

    def __init__(
        self,
        message: str,
        code: str = 'UNKNOWN_ERROR',
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            'success': False,
            'message': self.message,
            'code': self.code,
            'details': self.details
        }


class NotFoundError(BrainBoostError):
    def __init__(self, message: str = 'Resource not found', resource: str = None):
        super().__init__(message, 'NOT_FOUND', 404, {'resource': resource} if resource else None)


class ValidationError(BrainBoostError):
    """Rejected input; ``errors`` maps a dotted field path to its message."""

    def __init__(self, message: str = 'Validation failed', errors: Dict = None):
        self.errors = errors or {}
        super().__init__(message, 'VALIDATION_ERROR', 400, {'errors': errors} if errors else None)


class PersistenceError(BrainBoostError):
    """Reading or writing the storage blob failed."""

    def __init__(self, message: str = 'Storage write failed', key: str = None):
        self.key = key
        super().__init__(message, 'PERSISTENCE_ERROR', 503, {'key': key} if key else None)


class StoreClosedError(BrainBoostError):
    """The quiz store was used before init() or after dispose()."""

    def __init__(self, message: str = 'Quiz store is not initialized'):
        super().__init__(message, 'STORE_CLOSED', 503)


# HTTP status -> (message, code) for errors raised by routing rather than by our code
_HTTP_ERRORS = {
    404: ('Endpoint not found', 'NOT_FOUND'),
    405: ('Method not allowed', 'METHOD_NOT_ALLOWED'),
    500: ('Internal server error', 'SERVER_ERROR'),
}


def error_response(message: str, code: str = 'ERROR', status_code: int = 400) -> tuple:
    return jsonify({'success': False, 'message': message, 'code': code}), status_code


def success_response(data: Any = None, message: str = None, warning: str = None) -> dict:
    """Create a standardized success response."""
    response = {'success': True}
    if data is not None:
        response['data'] = data
    if message:
        response['message'] = message
    if warning:
        response['warning'] = warning
    return response


def register_error_handlers(app):
    """Render BrainBoostError, and HTTP errors under ``/api/``, as JSON envelopes."""

    @app.errorhandler(BrainBoostError)
    def handle_brainboost_error(error):
        if error.status_code >= 500:
            current_app.logger.error("%s: %s", error.code, error.message)
        else:
            current_app.logger.info("%s: %s", error.code, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if '/api/' not in request.path:
            return error
        if error.code >= 500:
            current_app.logger.error("HTTP %s on %s", error.code, request.path)
        message, code = _HTTP_ERRORS.get(error.code, (error.name, 'HTTP_ERROR'))
        return error_response(message, code, error.code)
