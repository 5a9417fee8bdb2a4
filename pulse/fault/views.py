import logging

from flask import Blueprint, current_app, jsonify, request

from pulse.errors import SimulatedFailure
from pulse.fault.workload import MAX_DURATION_MS, burn_cpu, parse_duration

logger = logging.getLogger(__name__)

fault = Blueprint("fault", __name__, url_prefix="/error")


def _controller():
    return current_app.extensions["fault_controller"]


@fault.post("/rate")
def set_rate():
    """Change the probability that GET /api/test fails."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        body = request.form
    snapshot = _controller().set_rate(body.get("rate"))

    return jsonify(snapshot.to_dict())


@fault.get("/rate")
def get_rate():
    return jsonify(_controller().snapshot().to_dict())


@fault.get("/500")
def internal_error():
    """Always fail, counted as app_errors_total{type="500"}."""
    current_app.extensions["metrics"].record_error("500")

    logger.error("Intentional 500 error triggered")

    raise SimulatedFailure(
        "Intentional 500 error",
        payload={"environment": current_app.config["APP_ENV"]},
    )


@fault.get("/cpu")
def cpu_spike():
    """Pin this worker thread on CPU for ?duration= milliseconds."""
    duration = parse_duration(
        request.args.get("duration"),
        default=current_app.config.get("CPU_BURN_DEFAULT_MS", 3000),
        maximum=current_app.config.get("CPU_BURN_MAX_MS", MAX_DURATION_MS),
    )

    logger.info("CPU spike started", extra={"duration_ms": duration})
    iterations = burn_cpu(duration)
    logger.info(
        "CPU spike completed",
        extra={"duration_ms": duration, "iterations": iterations},
    )

    return jsonify({"message": "CPU spike completed", "duration": duration})
