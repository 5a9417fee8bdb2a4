"""Error types and the JSON error handlers registered on the app."""

import logging

from flask import jsonify, request
from werkzeug.exceptions import InternalServerError, MethodNotAllowed, NotFound

logger = logging.getLogger(__name__)


class PulseError(Exception):
    """Base class for errors that map onto a JSON response."""

    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message=None, payload=None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        self.payload = payload or {}

    def to_dict(self):
        body = {"error": self.message}
        body.update(self.payload)
        return body


class InvalidRate(PulseError):
    """Client supplied an error rate that isn't a finite number in [0, 1]."""

    status_code = 400
    message = "Rate must be 0~1"


class SimulatedFailure(PulseError):
    """Deliberate 500 produced by the random or forced fault endpoints."""

    status_code = 500
    message = "Internal Server Error"


class UnknownMetric(LookupError):
    """A metric was used without being registered first."""


class DuplicateMetric(ValueError):
    """A metric name was registered twice."""


def register_error_handlers(app):
    """
    Render PulseError and routing errors as JSON (mutates the app passed in).

    :param app: Flask application instance
    :return: None
    """

    @app.errorhandler(PulseError)
    def handle_pulse_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(NotFound)
    def handle_not_found(error):
        return jsonify({"error": "Not Found", "path": request.path}), 404

    @app.errorhandler(MethodNotAllowed)
    def handle_method_not_allowed(error):
        logger.info(
            "Method not allowed",
            extra={"method": request.method, "path": request.path},
        )
        return (
            jsonify({"error": "Method Not Allowed", "path": request.path}),
            405,
            {"Allow": ", ".join(error.valid_methods or [])},
        )

    @app.errorhandler(InternalServerError)
    def handle_internal_error(error):
        return jsonify({"error": "Internal Server Error"}), 500

    return None
