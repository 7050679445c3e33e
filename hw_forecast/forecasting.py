from __future__ import annotations
from dataclasses import dataclass, field
import math
import numpy as np
import pandas as pd
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ._utils import (
    DegenerateSeasonalMean,
    DivisionByZero,
    InsufficientSeries,
    InvalidObservation,
    NonFiniteResult,
    validate_coefficient,
    validate_horizon,
    validate_period,
    validate_value,
)

__all__ = [
    "Observation",
    "FittedPoint",
    "ForecastPoint",
    "HoltWintersResult",
    "HoltWintersForecaster",
    "holt_winters",
    "initial_seasonals",
    "initial_level_trend",
]

SeriesLike = Union[pd.Series, Sequence[Any]]


@dataclass(frozen=True)
class Observation:
    """One input record. ``value`` is echoed exactly as given; ``payload``
    holds the source mapping, if any, so its other fields survive."""
    value: float
    label: Any = None
    payload: Optional[Mapping[str, Any]] = field(default=None, compare=False)


@dataclass(frozen=True)
class FittedPoint:
    """In-sample reconstruction of one observation."""
    observation: Observation
    fitted: float

    @property
    def label(self):
        return self.observation.label

    @property
    def value(self) -> float:
        return self.observation.value

    @property
    def payload(self) -> Optional[Mapping[str, Any]]:
        return self.observation.payload

    is_forecast = False


@dataclass(frozen=True)
class ForecastPoint:
    """Projected value beyond the observed series; it has no observed value."""
    label: Any
    fitted: float

    @property
    def value(self) -> None:
        return None

    payload = None
    is_forecast = True


@dataclass(frozen=True)
class HoltWintersResult:
    """Output of :func:`holt_winters`.

    ``points`` holds one FittedPoint per observation followed by the
    ForecastPoints. The trained state (``level``, ``trend``, ``seasonals``)
    is the state after the last observation, i.e. the one forecasts are
    projected from.
    """
    points: Tuple[Union[FittedPoint, ForecastPoint], ...]
    level: float
    trend: float
    seasonals: Tuple[float, ...]
    initial_seasonals: Tuple[float, ...]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def __getitem__(self, i):
        return self.points[i]

    @property
    def fitted_points(self) -> List[FittedPoint]:
        return [p for p in self.points if not p.is_forecast]

    @property
    def forecast_points(self) -> List[ForecastPoint]:
        return [p for p in self.points if p.is_forecast]

    def fitted_values(self) -> np.ndarray:
        return np.array([p.fitted for p in self.fitted_points], dtype=float)

    def forecast_values(self) -> np.ndarray:
        return np.array([p.fitted for p in self.forecast_points], dtype=float)

    def to_frame(self) -> pd.DataFrame:
        """One row per point; extra payload fields become trailing columns."""
        base = ['label', 'value', 'fitted', 'is_forecast']
        rows = []
        for p in self.points:
            row = {k: v for k, v in (p.payload or {}).items() if k not in base}
            row.update(label=p.label, value=p.value, fitted=p.fitted, is_forecast=p.is_forecast)
            rows.append(row)
        df = pd.DataFrame(rows)
        extra = [c for c in df.columns if c not in base]
        return df.reindex(columns=base + extra)


def holt_winters(series: SeriesLike,
                 alpha: float = 0.5,
                 beta: float = 0.4,
                 gamma: float = 0.6,
                 seasonal_period: int = 12,
                 forecast_horizon: int = 12,
                 *,
                 label_key: str = 'label',
                 forecast_label: str = 'Forecast {}') -> HoltWintersResult:
    """Triple exponential smoothing with multiplicative seasonality.

    Parameters
    ----------
    series : sequence or pandas.Series
        Equally spaced observations. Items may be :class:`Observation`,
        mappings with a ``'value'`` key, or plain numbers. For a Series the
        index supplies the labels.
    alpha, beta, gamma : float in [0, 1]
        Level, trend and seasonal smoothing weights.
    seasonal_period : int
        Observations per cycle. The series must be longer than this.
    forecast_horizon : int
        Number of steps to project past the end of the series; may be 0.
    label_key : str
        Mapping key holding the label when items are mappings.
    forecast_label : str
        Format string for forecast labels, called with the 1-based step.

    Returns
    -------
    HoltWintersResult

    Raises
    ------
    HoltWintersError
        One of its subclasses, before any output is produced.
    """
    alpha = validate_coefficient('alpha', alpha)
    beta = validate_coefficient('beta', beta)
    gamma = validate_coefficient('gamma', gamma)
    m = validate_period(seasonal_period)
    horizon = validate_horizon(forecast_horizon)
    observations = _to_observations(series, label_key)
    values = np.array([validate_value(o.value, i) for i, o in enumerate(observations)], dtype=float)
    if values.size <= m:
        raise InsufficientSeries(f"Series of length {values.size} is too short for seasonal_period {m}; "
                                 f"need more than {m} observations",
                                 field='series', value=values.size)

    seasonals = initial_seasonals(values, m)
    start = tuple(float(s) for s in seasonals)
    level, trend = initial_level_trend(values, m)

    points: List[Union[FittedPoint, ForecastPoint]] = []
    for i, obs in enumerate(observations):
        k = i % m
        value = float(values[i])
        s = float(seasonals[k])
        if value == 0:
            raise DivisionByZero(f"Observation {i} is zero; multiplicative seasonality is undefined",
                                 field='value', value=value)
        if s == 0:
            raise DivisionByZero(f"Seasonal factor for phase {k} is zero at step {i}",
                                 field='seasonals', value=s)
        last_level = level
        level = alpha * (value / s) + (1 - alpha) * (last_level + trend)
        if level == 0:
            raise DivisionByZero(f"Level collapsed to zero at step {i}", field='level', value=level)
        trend = beta * (level - last_level) + (1 - beta) * trend
        seasonals[k] = gamma * (value / level) + (1 - gamma) * s
        fitted = (level + trend) * seasonals[k]
        _check_finite(i, level=level, trend=trend, seasonal=seasonals[k], fitted=fitted)
        points.append(FittedPoint(observation=obs, fitted=float(fitted)))

    n = len(observations)
    for h in range(1, horizon + 1):
        forecast = (level + trend * h) * seasonals[(n + h - 1) % m]
        _check_finite(n + h - 1, forecast=forecast)
        points.append(ForecastPoint(label=forecast_label.format(h), fitted=float(forecast)))

    return HoltWintersResult(
        points=tuple(points),
        level=float(level),
        trend=float(trend),
        seasonals=tuple(float(s) for s in seasonals),
        initial_seasonals=start,
    )


def initial_seasonals(values: Sequence[float], m: int) -> np.ndarray:
    """Average every m-th observation per phase, normalized to mean 1."""
    arr = np.asarray(values, dtype=float)
    if arr.size < m:
        raise InsufficientSeries(f"Need at least {m} observations to build seasonal averages, got {arr.size}",
                                 field='series', value=arr.size)
    raw = np.array([arr[p::m].mean() for p in range(m)], dtype=float)
    mean = raw.mean()
    if mean == 0:
        raise DegenerateSeasonalMean("Mean of raw seasonal averages is zero", field='seasonals', value=mean)
    return raw / mean


def initial_level_trend(values: Sequence[float], m: int) -> Tuple[float, float]:
    """Seed level with the first observation and trend with the first-cycle slope."""
    arr = np.asarray(values, dtype=float)
    if arr.size <= m:
        raise InsufficientSeries(f"Series of length {arr.size} is too short for seasonal_period {m}; "
                                 f"need more than {m} observations",
                                 field='series', value=arr.size)
    level = float(arr[0])
    trend = float((arr[m] - arr[0]) / m)
    return level, trend


def _check_finite(step: int, **quantities: float) -> None:
    for name, q in quantities.items():
        if not math.isfinite(q):
            raise NonFiniteResult(f"{name} became {q} at step {step}", field=name, value=q)


def _to_observations(series: SeriesLike, label_key: str = 'label') -> List[Observation]:
    if isinstance(series, pd.Series):
        items: Iterable = [Observation(value=v, label=idx) for idx, v in series.items()]
    elif isinstance(series, (str, bytes)) or not isinstance(series, Iterable):
        raise InvalidObservation(f"Expected a sequence of observations, got {type(series).__name__}",
                                 field='series', value=series)
    else:
        items = series
    out = []
    for i, item in enumerate(items):
        if isinstance(item, Observation):
            validate_value(item.value, i)
            out.append(item)
        elif isinstance(item, Mapping):
            if 'value' not in item:
                raise InvalidObservation(f"Observation {i} has no 'value' field", field='value', value=item)
            validate_value(item['value'], i)
            out.append(Observation(value=item['value'], label=item.get(label_key), payload=dict(item)))
        else:
            validate_value(item, i)
            out.append(Observation(value=item, label=i))
    if not out:
        raise InsufficientSeries("Series is empty", field='series', value=0)
    return out


@dataclass
class HoltWintersForecaster:
    """Holt-Winters (multiplicative seasonality) in fit/predict form.

    ``fit`` trains the level/trend/seasonal state over the whole series;
    ``predict`` projects that state forward.
    """
    alpha: float = 0.5
    beta: float = 0.4
    gamma: float = 0.6
    season_length: int = 12
    verbose: bool = False

    result_: Optional[HoltWintersResult] = field(init=False, default=None, repr=False)

    def fit(self, y: SeriesLike):
        res = holt_winters(y, self.alpha, self.beta, self.gamma, self.season_length, 0)
        self.result_ = res
        self.level_ = res.level
        self.trend_ = res.trend
        self.seasonals_ = np.array(res.seasonals, dtype=float)
        self.fitted_ = res.fitted_values()
        self.n_obs_ = len(res.points)
        self.m_ = self.season_length
        if self.verbose:
            print(f"Fitted {self.n_obs_} observations: level={self.level_:.4f}, trend={self.trend_:.4f}")
        return self

    def predict(self, horizon: int):
        if self.result_ is None:
            raise RuntimeError("Call fit first")
        horizon = validate_horizon(horizon)
        steps = np.arange(1, horizon + 1)
        phases = (self.n_obs_ + steps - 1) % self.m_
        with np.errstate(over='ignore', invalid='ignore'):
            out = (self.level_ + self.trend_ * steps) * self.seasonals_[phases]
        bad = np.flatnonzero(~np.isfinite(out))
        if bad.size:
            h = int(bad[0]) + 1
            raise NonFiniteResult(f"forecast became {out[bad[0]]} at step {self.n_obs_ + h - 1}",
                                  field='forecast', value=float(out[bad[0]]))
        return out
