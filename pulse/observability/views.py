from flask import Blueprint, Response, current_app

observability = Blueprint("observability", __name__)


@observability.get("/metrics")
def metrics():
    """Prometheus scrape endpoint."""
    collector = current_app.extensions["metrics"]
    return Response(collector.export(), content_type=collector.content_type)
