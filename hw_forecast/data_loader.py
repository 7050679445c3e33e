from __future__ import annotations
import os
import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union
import numpy as np
import pandas as pd

from ._utils import InvalidObservation, validate_value
from .forecasting import Observation

__all__ = ["SeriesLoader", "generate_sample_data"]


def generate_sample_data(n: int = 36,
                         noise: float = 10.0,
                         seed: Optional[int] = None) -> List[Dict[str, Any]]:
    """Synthetic monthly series: linear trend, yearly sine and uniform noise.

    ``value = 50 + 2*i + 10*sin(i*pi/6) + U(-noise/2, noise/2)`` with labels
    ``"Month 1" .. "Month n"``. Pass ``seed`` for a reproducible draw and
    ``noise=0`` for the clean curve.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    if noise < 0:
        raise ValueError("noise must be >= 0")
    rng = np.random.default_rng(seed)
    i = np.arange(n)
    trend = i * 2.0
    seasonal = np.sin(i * np.pi / 6) * 10
    jitter = (rng.random(n) - 0.5) * noise
    values = trend + seasonal + jitter + 50
    return [{'label': f"Month {k + 1}", 'value': float(v)} for k, v in enumerate(values)]


@dataclass
class SeriesLoader:
    """Loader for a single equally spaced series stored as CSV.

    Parameters
    ----------
    path : path-like
        CSV file to read.
    value_column : str
        Column holding the numeric observations.
    label_column : str, optional
        Column echoed as the observation label. If None, the 0-based row
        position is used.
    sep : str
        Field separator passed to pandas.
    verbose : bool
        If True, prints progress info.
    """
    path: Union[str, os.PathLike]
    value_column: str = 'value'
    label_column: Optional[str] = 'label'
    sep: str = ','
    verbose: bool = False

    _df: Optional[pd.DataFrame] = field(init=False, default=None, repr=False)

    # ------------------------ Public API ------------------------
    def load(self) -> 'SeriesLoader':
        path = pathlib.Path(self.path)
        if not path.exists():
            raise FileNotFoundError(f"Series file not found: {path}")
        raw = pd.read_csv(path, sep=self.sep)
        if self.verbose:
            print(f"Loaded {path.name}: shape {raw.shape}")
        if self.value_column not in raw.columns:
            raise KeyError(f"Column '{self.value_column}' missing from {path.name}")
        if self.label_column is not None and self.label_column not in raw.columns:
            raise KeyError(f"Column '{self.label_column}' missing from {path.name}")
        values = pd.to_numeric(raw[self.value_column], errors='coerce')
        bad = values.isna()
        if bad.any():
            first = int(np.flatnonzero(bad.to_numpy())[0])
            raise InvalidObservation(
                f"Row {first} of {path.name} has missing or non-numeric value "
                f"{raw[self.value_column].iloc[first]!r}",
                field=self.value_column, value=raw[self.value_column].iloc[first])
        raw[self.value_column] = values.astype(float)
        self._df = raw
        return self

    def observations(self) -> List[Observation]:
        self._ensure_loaded()
        vals = self._df[self.value_column].tolist()
        if self.label_column is None:
            labels = list(range(len(vals)))
        else:
            labels = self._df[self.label_column].tolist()
        return [Observation(value=validate_value(v, i), label=lab)
                for i, (v, lab) in enumerate(zip(vals, labels))]

    def series(self) -> pd.Series:
        self._ensure_loaded()
        s = self._df[self.value_column].copy()
        if self.label_column is not None:
            s.index = pd.Index(self._df[self.label_column], name=self.label_column)
        return s

    # ------------------------ Internal ------------------------
    def _ensure_loaded(self):
        if self._df is None:
            raise RuntimeError("Data not loaded. Call load() first.")
