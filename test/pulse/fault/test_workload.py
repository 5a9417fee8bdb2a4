"""Tests for the CPU burn helpers."""

import time

import pytest

from pulse.fault.workload import (
    DEFAULT_DURATION_MS,
    MAX_DURATION_MS,
    burn_cpu,
    parse_duration,
)


class TestParseDuration:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("500", 500),
            ("0", 0),
            ("250ms", 250),
            ("+10", 10),
            (None, DEFAULT_DURATION_MS),
            ("", DEFAULT_DURATION_MS),
            ("abc", DEFAULT_DURATION_MS),
            ("-5", DEFAULT_DURATION_MS),
            ("-0", 0),
            ("007", 7),
            ("9" * 400, MAX_DURATION_MS),
            ("9" * 5000, MAX_DURATION_MS),
            (str(MAX_DURATION_MS + 1), MAX_DURATION_MS),
            (str(MAX_DURATION_MS), MAX_DURATION_MS),
        ],
    )
    def test_parse(self, raw, expected):
        assert parse_duration(raw) == expected

    def test_custom_default(self):
        assert parse_duration("x", default=42) == 42

    def test_custom_maximum(self):
        assert parse_duration("250", maximum=100) == 100
        assert parse_duration("1" + "0" * 50, maximum=100) == 100


class TestBurnCpu:
    def test_runs_until_deadline(self):
        ticks = iter([0.0, 0.0, 0.05, 0.1, 0.15, 0.2])

        iterations = burn_cpu(150, clock=lambda: next(ticks))

        # deadline is 0.15s; samples at 0.0, 0.05 and 0.1 are before it
        assert iterations == 3

    def test_zero_duration_returns_immediately(self):
        assert burn_cpu(0) == 0

    def test_spends_wall_clock_time(self):
        start = time.monotonic()

        burn_cpu(100)

        assert time.monotonic() - start >= 0.1
