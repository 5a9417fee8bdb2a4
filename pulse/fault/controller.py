"""Process-wide error-injection rate shared by the fault endpoints.

One ``FaultController`` is built per app in ``create_app`` and stored in
``app.extensions["fault_controller"]``. Views look it up from there instead
of importing a module-level instance, so every test app gets a fresh rate and
its own seeded random generator.
"""

from __future__ import annotations

import logging
import math
import numbers
import random
import threading
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from pulse.errors import InvalidRate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateSnapshot:
    """Error rate as a fraction plus its one-decimal percentage string."""

    error_rate: float
    percentage: str

    @classmethod
    def from_rate(cls, rate: float) -> "RateSnapshot":
        return cls(error_rate=rate, percentage=f"{format_percentage(rate)}%")

    def to_dict(self) -> dict:
        return {"errorRate": self.error_rate, "percentage": self.percentage}


def format_percentage(rate: float) -> str:
    """
    Percentage with one decimal, ties rounded away from zero (0.0025 -> "0.3").

    The exact binary value of ``rate * 100`` is rounded, not its repr.
    """
    percent = Decimal(rate * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return str(percent)


def parse_rate(value) -> float:
    """
    Validate a client supplied error rate.

    Accepts ints, floats and numeric strings. Booleans, ``None``, NaN,
    infinities and values outside [0, 1] raise ``InvalidRate``.

    :param value: Raw value, usually straight from a JSON body
    :return: float
    """
    if isinstance(value, bool) or value is None:
        raise InvalidRate()

    if isinstance(value, numbers.Real):
        try:
            rate = float(value)
        except OverflowError:
            raise InvalidRate() from None
    elif isinstance(value, str):
        try:
            rate = float(value.strip())
        except ValueError:
            raise InvalidRate() from None
    else:
        raise InvalidRate()

    if not math.isfinite(rate) or rate < 0.0 or rate > 1.0:
        raise InvalidRate()

    # -0.0 -> 0.0
    return rate + 0.0


class FaultController:
    """Holds the current error rate and decides whether a request fails."""

    def __init__(self, rate: float = 0.0, rng: random.Random | None = None):
        self._rate = parse_rate(rate)
        self._rng = rng or random.Random()
        self._lock = threading.Lock()

    def get_rate(self) -> float:
        return self._rate

    def snapshot(self) -> RateSnapshot:
        return RateSnapshot.from_rate(self._rate)

    def set_rate(self, value) -> RateSnapshot:
        """
        Replace the error rate.

        The previous rate is kept when ``value`` is rejected.

        :param value: New rate in [0, 1]
        :return: RateSnapshot of the new rate
        """
        rate = parse_rate(value)

        with self._lock:
            self._rate = rate

        snapshot = RateSnapshot.from_rate(rate)
        logger.info(
            "Error rate updated",
            extra={
                "error_rate": snapshot.error_rate,
                "percentage": snapshot.percentage,
            },
        )
        return snapshot

    def should_fail(self) -> bool:
        """Draw one sample in [0, 1) and compare it to the current rate."""
        rate = self._rate
        with self._lock:
            sample = self._rng.random()
        return sample < rate
