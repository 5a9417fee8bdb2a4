import logging
import random

import click
from flask import Flask
from werkzeug.debug import DebuggedApplication
from werkzeug.middleware.proxy_fix import ProxyFix

from pulse.api.views import api, list_endpoints
from pulse.errors import InvalidRate, register_error_handlers
from pulse.fault.controller import FaultController, RateSnapshot, parse_rate
from pulse.fault.views import fault
from pulse.observability import (
    MetricsCollector,
    ObservabilityMiddleware,
    register_default_metrics,
    setup_logging,
)
from pulse.observability.views import observability
from pulse.up.views import up

logger = logging.getLogger(__name__)


def create_app(settings_override=None):
    """
    Create a Flask application using the app factory pattern.

    :param settings_override: Override settings
    :return: Flask app
    """
    app = Flask(__name__, static_folder=None)

    app.config.from_object("config.settings")

    if settings_override:
        app.config.update(settings_override)

    setup_logging(app)
    middleware(app)
    extensions(app)

    app.register_blueprint(up)
    app.register_blueprint(api)
    app.register_blueprint(fault)
    app.register_blueprint(observability)

    register_error_handlers(app)
    register_cli(app)

    logger.info(
        "Application ready",
        extra={
            "environment": app.config["APP_ENV"],
            "version": app.config["APP_VERSION"],
            "port": app.config["PORT"],
        },
    )

    return app


def extensions(app):
    """
    Build the per-app metrics collector and fault controller and expose
    them through app.extensions (mutates the app passed in).

    :param app: Flask application instance
    :return: None
    """
    metrics = MetricsCollector(
        process_collectors=app.config.get("METRICS_PROCESS_COLLECTORS", False)
    )
    register_default_metrics(metrics)
    app.extensions["metrics"] = metrics

    seed = app.config.get("FAULT_RANDOM_SEED")
    app.extensions["fault_controller"] = FaultController(
        rate=app.config.get("FAULT_INITIAL_RATE", 0.0),
        rng=random.Random(seed),
    )

    ObservabilityMiddleware(app)

    return None


def register_cli(app):
    """Register custom Flask CLI commands."""

    @app.cli.command("endpoints")
    def endpoints_command():
        """List the public endpoints as METHOD PATH."""
        for endpoint in list_endpoints(app):
            click.echo(endpoint)

    @app.cli.command("check-rate")
    @click.argument("rate")
    def check_rate_command(rate):
        """Validate an error rate with the same rules as POST /error/rate."""
        try:
            value = parse_rate(rate)
        except InvalidRate as e:
            raise click.BadParameter(e.message, param_hint="RATE")

        snapshot = RateSnapshot.from_rate(value)
        click.echo(f"{snapshot.error_rate} ({snapshot.percentage})")


def middleware(app):
    """
    Register 0 or more middleware (mutates the app passed in).

    :param app: Flask application instance
    :return: None
    """
    # Enable the Flask interactive debugger in the browser for development.
    if app.debug:
        app.wsgi_app = DebuggedApplication(app.wsgi_app, evalex=True)

    # Set the real IP address into request.remote_addr when behind a proxy.
    app.wsgi_app = ProxyFix(app.wsgi_app)

    return None
