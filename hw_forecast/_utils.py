from __future__ import annotations
import math
import numbers
from typing import Any

__all__ = [
    "HoltWintersError",
    "InvalidCoefficient",
    "InvalidPeriod",
    "InvalidHorizon",
    "InvalidObservation",
    "InsufficientSeries",
    "DegenerateSeasonalMean",
    "NonFiniteResult",
    "DivisionByZero",
    "validate_coefficient",
    "validate_period",
    "validate_horizon",
    "validate_value",
]


class HoltWintersError(ValueError):
    """Base class for every precondition or computation failure."""
    def __init__(self, message: str, field: str = None, value=None):
        super().__init__(message)
        self.field = field
        self.value = value


class InvalidCoefficient(HoltWintersError):
    """alpha, beta or gamma outside [0, 1]."""


class InvalidPeriod(HoltWintersError):
    """Seasonal period is not a positive integer or exceeds the series."""


class InvalidHorizon(HoltWintersError):
    """Forecast horizon is not a non-negative integer."""


class InvalidObservation(HoltWintersError):
    """An observation value is missing, non-numeric or non-finite."""


class InsufficientSeries(InvalidPeriod):
    """Series has no observation at index ``seasonal_period``."""


class DegenerateSeasonalMean(HoltWintersError):
    """Raw seasonal averages have zero mean; normalization is undefined."""


class NonFiniteResult(HoltWintersError):
    """A recurrence step produced NaN or infinity."""


class DivisionByZero(NonFiniteResult):
    """A recurrence step would divide by zero."""


def _is_int(x: Any) -> bool:
    return isinstance(x, numbers.Integral) and not isinstance(x, bool)


def validate_coefficient(name: str, x: Any) -> float:
    """
    Check a smoothing coefficient.

    Args:
        name: parameter name, echoed in the error
        x: candidate value

    Returns:
        the coefficient as float

    Raises:
        InvalidCoefficient: non-numeric, non-finite or outside [0, 1]
    """
    if isinstance(x, bool) or not isinstance(x, numbers.Real):
        raise InvalidCoefficient(f"{name} must be a real number, got {x!r}", field=name, value=x)
    x = float(x)
    if not (0.0 <= x <= 1.0):
        raise InvalidCoefficient(f"{name} must be in [0, 1], got {x}", field=name, value=x)
    return x


def validate_period(m: Any) -> int:
    if not _is_int(m):
        raise InvalidPeriod(f"seasonal_period must be an integer, got {m!r}", field="seasonal_period", value=m)
    if m <= 0:
        raise InvalidPeriod(f"seasonal_period must be >= 1, got {m}", field="seasonal_period", value=m)
    return int(m)


def validate_horizon(h: Any) -> int:
    if not _is_int(h):
        raise InvalidHorizon(f"forecast_horizon must be an integer, got {h!r}", field="forecast_horizon", value=h)
    if h < 0:
        raise InvalidHorizon(f"forecast_horizon must be >= 0, got {h}", field="forecast_horizon", value=h)
    return int(h)


def validate_value(x: Any, position: int) -> float:
    """Return an observation value as float, rejecting gaps and non-numbers."""
    if isinstance(x, bool) or not isinstance(x, numbers.Real):
        raise InvalidObservation(f"Observation {position} has non-numeric value {x!r}",
                                 field="value", value=x)
    x = float(x)
    if not math.isfinite(x):
        raise InvalidObservation(f"Observation {position} has non-finite value {x}",
                                 field="value", value=x)
    return x
