import logging
import socket

from flask import Blueprint, current_app, jsonify

from pulse.errors import SimulatedFailure

logger = logging.getLogger(__name__)

api = Blueprint("api", __name__, url_prefix="/api")

HIDDEN_METHODS = {"HEAD", "OPTIONS"}


def list_endpoints(app):
    """
    Public routes formatted as "METHOD PATH", e.g. "POST /error/rate".

    :param app: Flask application instance
    :return: list of str
    """
    endpoints = []
    for rule in sorted(app.url_map.iter_rules(), key=lambda r: r.rule):
        if rule.endpoint == "static":
            continue
        for method in sorted((rule.methods or set()) - HIDDEN_METHODS):
            endpoints.append(f"{method:<4} {rule.rule}")
    return endpoints


@api.get("")
def index():
    return jsonify(
        {
            "message": "Pulse demo backend",
            "environment": current_app.config["APP_ENV"],
            "version": current_app.config["APP_VERSION"],
            "endpoints": list_endpoints(current_app),
        }
    )


@api.get("/info")
def info():
    return jsonify(
        {
            "environment": current_app.config["APP_ENV"],
            "version": current_app.config["APP_VERSION"],
            "hostname": socket.gethostname(),
            "errorRate": current_app.extensions["fault_controller"].get_rate(),
        }
    )


@api.get("/test")
def random_fault_test():
    """Fail with probability equal to the current error rate."""
    controller = current_app.extensions["fault_controller"]
    environment = current_app.config["APP_ENV"]

    if controller.should_fail():
        error_rate = controller.get_rate()
        current_app.extensions["metrics"].record_error("random")

        logger.error(
            "Random error triggered", extra={"error_rate": error_rate}
        )

        raise SimulatedFailure(
            payload={"environment": environment, "errorRate": error_rate}
        )

    return jsonify(
        {
            "status": "success",
            "environment": environment,
            "errorRate": controller.get_rate(),
        }
    )
