from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

up = Blueprint("up", __name__)


def utc_timestamp():
    """ISO-8601 UTC timestamp with millisecond precision, e.g. ...T10:00:00.000Z"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@up.get("/health")
@up.get("/healthz")
def health():
    """Liveness check - returns 200 while the process is serving."""
    return jsonify(
        {
            "status": "ok",
            "environment": current_app.config["APP_ENV"],
            "version": current_app.config["APP_VERSION"],
            "timestamp": utc_timestamp(),
        }
    )
