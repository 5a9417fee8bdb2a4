"""Tests for the /api blueprint."""

import json
import socket

from lib.test import ViewTestMixin


class TestApiViews(ViewTestMixin):
    def test_index_lists_endpoints(self):
        response = self.client.get("/api")

        assert response.status_code == 200
        data = response.get_json()
        assert data["environment"] == "test"
        assert data["version"] == "9.9.9"
        for endpoint in (
            "GET  /health",
            "GET  /healthz",
            "GET  /api/info",
            "GET  /api/test",
            "POST /error/rate",
            "GET  /error/rate",
            "GET  /error/500",
            "GET  /error/cpu",
            "GET  /metrics",
        ):
            assert endpoint in data["endpoints"]

    def test_info(self):
        self.controller.set_rate(0.3)

        response = self.client.get("/api/info")

        assert response.get_json() == {
            "environment": "test",
            "version": "9.9.9",
            "hostname": socket.gethostname(),
            "errorRate": 0.3,
        }


class TestRandomFault(ViewTestMixin):
    def test_success_when_rate_is_zero(self):
        for _ in range(50):
            response = self.client.get("/api/test")

            assert response.status_code == 200
            assert response.get_json() == {
                "status": "success",
                "environment": "test",
                "errorRate": 0.0,
            }

        assert (
            self.metrics.sample_value("app_errors_total", {"type": "random"})
            is None
        )

    def test_failure_when_rate_is_one(self):
        self.client.post(
            "/error/rate",
            data=json.dumps({"rate": 1}),
            content_type="application/json",
        )

        for expected in (1, 2):
            response = self.client.get("/api/test")

            assert response.status_code == 500
            assert response.get_json() == {
                "error": "Internal Server Error",
                "environment": "test",
                "errorRate": 1.0,
            }
            assert (
                self.metrics.sample_value(
                    "app_errors_total", {"type": "random"}
                )
                == expected
            )

    def test_mixed_outcomes_match_counter(self):
        self.controller.set_rate(0.5)

        statuses = [self.client.get("/api/test").status_code for _ in range(200)]

        failures = statuses.count(500)
        assert 0 < failures < 200
        assert (
            self.metrics.sample_value("app_errors_total", {"type": "random"})
            == failures
        )
