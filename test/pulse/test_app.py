"""Tests for the app factory and its CLI commands."""

from pulse.app import create_app
from pulse.fault.controller import FaultController
from pulse.observability.metrics import MetricsCollector


class TestCreateApp:
    def test_extensions_are_per_app(self, app):
        other = create_app({"TESTING": True, "METRICS_PROCESS_COLLECTORS": False})

        assert isinstance(app.extensions["metrics"], MetricsCollector)
        assert isinstance(app.extensions["fault_controller"], FaultController)
        assert other.extensions["metrics"] is not app.extensions["metrics"]

        app.extensions["fault_controller"].set_rate(0.9)
        assert other.extensions["fault_controller"].get_rate() == 0.0

    def test_initial_rate_from_settings(self):
        app = create_app(
            {
                "TESTING": True,
                "FAULT_INITIAL_RATE": 0.2,
                "METRICS_PROCESS_COLLECTORS": False,
            }
        )

        assert app.extensions["fault_controller"].get_rate() == 0.2

    def test_no_static_route(self, app):
        assert "static" not in {r.endpoint for r in app.url_map.iter_rules()}


class TestCli:
    def test_endpoints(self, app):
        result = app.test_cli_runner().invoke(args=["endpoints"])

        assert result.exit_code == 0
        assert "POST /error/rate" in result.output
        assert "GET  /metrics" in result.output

    def test_check_rate_valid(self, app):
        result = app.test_cli_runner().invoke(args=["check-rate", "0.5"])

        assert result.exit_code == 0
        assert "50.0%" in result.output

    def test_check_rate_invalid(self, app):
        result = app.test_cli_runner().invoke(args=["check-rate", "2"])

        assert result.exit_code != 0
        assert "Rate must be 0~1" in result.output
