"""hw_forecast: Holt-Winters triple exponential smoothing.

Fits a multiplicative-seasonality Holt-Winters model to an equally spaced
series with caller-supplied smoothing coefficients and projects it forward.
Includes fit-quality metrics, a CSV series loader and a synthetic sample
generator.
"""
from ._utils import (
    HoltWintersError,
    InvalidCoefficient,
    InvalidPeriod,
    InvalidHorizon,
    InvalidObservation,
    InsufficientSeries,
    DegenerateSeasonalMean,
    NonFiniteResult,
    DivisionByZero,
)
from .forecasting import (
    Observation,
    FittedPoint,
    ForecastPoint,
    HoltWintersResult,
    HoltWintersForecaster,
    holt_winters,
    initial_seasonals,
    initial_level_trend,
)
from .metrics import mae, mape, rmse, train_test_split_chronological, fit_report, holdout_score
from .data_loader import SeriesLoader, generate_sample_data

__version__ = "0.1.0"

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
    "Observation",
    "FittedPoint",
    "ForecastPoint",
    "HoltWintersResult",
    "HoltWintersForecaster",
    "holt_winters",
    "initial_seasonals",
    "initial_level_trend",
    "mae",
    "mape",
    "rmse",
    "train_test_split_chronological",
    "fit_report",
    "holdout_score",
    "SeriesLoader",
    "generate_sample_data",
]
