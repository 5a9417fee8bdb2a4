"""Middleware for automatic request/response observability."""

import logging
import time

from flask import current_app, g, request

logger = logging.getLogger(__name__)

UNMATCHED_ROUTE = "<unmatched>"


def _route_label():
    """Matched URL rule, so unknown paths collapse into a single series."""
    rule = request.url_rule
    return rule.rule if rule is not None else UNMATCHED_ROUTE


class ObservabilityMiddleware:
    """Counts every request by method and final status code."""

    def __init__(self, app=None):
        """
        Initialize the observability middleware.

        Args:
            app: Flask application instance
        """
        self.app = app
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """
        Register middleware hooks with Flask app.

        Args:
            app: Flask application instance
        """
        app.before_request(self.before_request)
        app.after_request(self.after_request)
        app.teardown_request(self.teardown_request)

    @staticmethod
    def before_request():
        """Record the start time of the request."""
        g.start_time = time.perf_counter()
        g.request_id = request.headers.get("X-Request-ID", "unknown")

        logger.debug(
            "Request started",
            extra={
                "request_id": g.request_id,
                "method": request.method,
                "path": request.path,
                "remote_addr": request.remote_addr,
            },
        )

    @staticmethod
    def after_request(response):
        """
        Record request completion metrics and logs.

        Flask runs this for responses built by error handlers too, so 404s
        and the simulated 500s are counted exactly once here.

        Args:
            response: Flask response object

        Returns:
            Flask response object
        """
        start_time = getattr(g, "start_time", None)
        latency = time.perf_counter() - start_time if start_time else 0.0
        route = _route_label()

        current_app.extensions["metrics"].record_request(
            method=request.method,
            route=route,
            status_code=response.status_code,
            latency_seconds=latency,
        )

        logger.info(
            "Request completed",
            extra={
                "request_id": getattr(g, "request_id", "unknown"),
                "method": request.method,
                "path": request.path,
                "route": route,
                "status_code": response.status_code,
                "latency_ms": round(latency * 1000, 2),
            },
        )

        response.headers["X-Request-ID"] = getattr(g, "request_id", "unknown")
        response.headers["X-Response-Time"] = str(round(latency * 1000, 2))

        return response

    @staticmethod
    def teardown_request(exception=None):
        """
        Log any exceptions that escaped the error handlers.

        Args:
            exception: Exception that occurred (if any)
        """
        if exception:
            logger.error(
                "Request failed with exception",
                extra={
                    "request_id": getattr(g, "request_id", "unknown"),
                    "method": request.method,
                    "path": request.path,
                    "exception": str(exception),
                    "exception_type": type(exception).__name__,
                },
                exc_info=exception,
            )
