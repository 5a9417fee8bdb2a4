"""CPU burn used by /error/cpu to drive CPU utilisation telemetry."""

import math
import random
import re
import time

DEFAULT_DURATION_MS = 3000
MAX_DURATION_MS = 120000

_LEADING_INT = re.compile(r"^\s*([+-]?)(\d+)")


def parse_duration(raw, default=DEFAULT_DURATION_MS, maximum=MAX_DURATION_MS):
    """
    Turn the ``duration`` query parameter into milliseconds.

    A leading integer is honoured ("500ms" -> 500) and clamped to
    ``maximum``. Missing, non-numeric and negative values fall back to
    ``default``.

    :param raw: Query string value or None
    :param default: Fallback duration in milliseconds
    :param maximum: Longest burn allowed, in milliseconds
    :return: int
    """
    if raw is None:
        return default

    match = _LEADING_INT.match(str(raw))
    if not match:
        return default

    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"

    if sign == "-" and digits != "0":
        return default

    # Compare lengths first so huge digit strings never reach int().
    if len(digits) > len(str(maximum)):
        return maximum

    return min(int(digits), maximum)


def burn_cpu(duration_ms, clock=time.monotonic):
    """
    Busy-loop on floating point work until ``duration_ms`` have elapsed.

    This intentionally does not sleep. It returns the number of loop
    iterations so callers (and tests) can see work was actually done.

    :param duration_ms: Minimum wall-clock time to spend, in milliseconds
    :param clock: Monotonic clock returning seconds
    :return: int
    """
    deadline = clock() + duration_ms / 1000.0
    iterations = 0

    while clock() < deadline:
        math.sqrt(random.random())
        iterations += 1

    return iterations
