from __future__ import annotations
import numpy as np
import pandas as pd
from typing import Dict, Sequence, Tuple

from .forecasting import HoltWintersResult, holt_winters

ArrayLike = Sequence[float]

__all__ = ["mae", "mape", "rmse", "train_test_split_chronological", "fit_report", "holdout_score"]

def _to_1d(y: ArrayLike) -> np.ndarray:
    if isinstance(y, (pd.Series, pd.Index)):
        return y.to_numpy(dtype=float)
    arr = np.asarray(y, dtype=float)
    if arr.ndim != 1:
        raise ValueError("Expected 1-D array")
    return arr

def _pair(y_true: ArrayLike, y_pred: ArrayLike) -> Tuple[np.ndarray, np.ndarray]:
    a = _to_1d(y_true)
    b = _to_1d(y_pred)
    if a.size != b.size:
        raise ValueError("Size mismatch")
    if a.size == 0:
        raise ValueError("Empty input")
    return a, b

def mae(y_true: ArrayLike, y_pred: ArrayLike) -> float:
    a, b = _pair(y_true, y_pred)
    return float(np.mean(np.abs(a - b)))

def mape(y_true: ArrayLike, y_pred: ArrayLike, epsilon: float = 1e-8) -> float:
    a, b = _pair(y_true, y_pred)
    denom = np.clip(np.abs(a), epsilon, None)
    return float(np.mean(np.abs((a - b) / denom)))

def rmse(y_true: ArrayLike, y_pred: ArrayLike) -> float:
    a, b = _pair(y_true, y_pred)
    return float(np.sqrt(np.mean((a - b) ** 2)))

def train_test_split_chronological(y: ArrayLike, test_size: int) -> Tuple[np.ndarray, np.ndarray]:
    arr = _to_1d(y)
    if test_size <= 0 or test_size >= arr.size:
        raise ValueError("test_size must be >0 and < len(y)")
    return arr[:-test_size], arr[-test_size:]

def _scores(y_true: ArrayLike, y_pred: ArrayLike) -> Dict[str, float]:
    return {"mae": mae(y_true, y_pred), "rmse": rmse(y_true, y_pred), "mape": mape(y_true, y_pred)}

def fit_report(result: HoltWintersResult) -> Dict[str, float]:
    """In-sample error of the fitted values against the observations."""
    pts = result.fitted_points
    return _scores([p.value for p in pts], [p.fitted for p in pts])

def holdout_score(y: ArrayLike, test_size: int, alpha: float = 0.5, beta: float = 0.4,
                  gamma: float = 0.6, seasonal_period: int = 12) -> Dict[str, float]:
    """Fit on the head of ``y``, forecast ``test_size`` steps and score them against the tail."""
    train, test = train_test_split_chronological(y, test_size)
    res = holt_winters(train.tolist(), alpha, beta, gamma, seasonal_period, test_size)
    return _scores(test, res.forecast_values())
