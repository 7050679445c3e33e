# app/main.py
from __future__ import annotations
import os
import sys
from pathlib import Path
from typing import Any, Optional, Union

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field

# --- import the package without requiring an install ---
APP_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = APP_DIR.parent
sys.path.append(str(PROJECT_ROOT))
from hw_forecast import (  # noqa: E402
    HoltWintersError,
    Observation,
    fit_report,
    generate_sample_data,
    holt_winters,
)

DEFAULT_ALPHA = float(os.getenv("HW_ALPHA", "0.5"))
DEFAULT_BETA = float(os.getenv("HW_BETA", "0.4"))
DEFAULT_GAMMA = float(os.getenv("HW_GAMMA", "0.6"))
DEFAULT_PERIOD = int(os.getenv("HW_SEASONAL_PERIOD", "12"))
DEFAULT_HORIZON = int(os.getenv("HW_FORECAST_HORIZON", "12"))

app = FastAPI(title="Holt-Winters Forecast (hw_forecast powered)", version="1.0")

# ---------- Schemas ----------
class ObservationIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    label: Any = Field(None, description="Opaque label echoed back unchanged")
    value: Union[int, float]

class ForecastIn(BaseModel):
    series: list[ObservationIn] = Field(..., description="Equally spaced observations, oldest first")
    alpha: float = Field(DEFAULT_ALPHA, ge=0.0, le=1.0, description="Level smoothing")
    beta: float = Field(DEFAULT_BETA, ge=0.0, le=1.0, description="Trend smoothing")
    gamma: float = Field(DEFAULT_GAMMA, ge=0.0, le=1.0, description="Seasonal smoothing")
    seasonal_period: int = Field(DEFAULT_PERIOD, ge=1, description="Observations per cycle")
    forecast_horizon: int = Field(DEFAULT_HORIZON, ge=0, description="Steps to forecast ahead")

class PointOut(BaseModel):
    label: Any
    value: Optional[Union[int, float]]
    fitted: float
    is_forecast: bool
    payload: Optional[dict[str, Any]] = None

class ForecastOut(BaseModel):
    points: list[PointOut]
    level: float
    trend: float
    seasonals: list[float]
    metrics: dict[str, float]

# ---------- Routes ----------
@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/sample")
def sample(n: int = Query(36, ge=0, le=10_000),
           noise: float = Query(10.0, ge=0.0),
           seed: Optional[int] = None):
    return {"series": generate_sample_data(n=n, noise=noise, seed=seed)}

@app.post("/forecast", response_model=ForecastOut)
def forecast(body: ForecastIn):
    observations = [Observation(value=o.value, label=o.label, payload=o.model_dump()) for o in body.series]
    try:
        result = holt_winters(
            observations,
            alpha=body.alpha,
            beta=body.beta,
            gamma=body.gamma,
            seasonal_period=body.seasonal_period,
            forecast_horizon=body.forecast_horizon,
        )
    except HoltWintersError as e:
        raise HTTPException(status_code=422, detail={"error": type(e).__name__, "message": str(e)})

    return ForecastOut(
        points=[PointOut(label=p.label, value=p.value, fitted=p.fitted, is_forecast=p.is_forecast,
                         payload=p.payload)
                for p in result.points],
        level=result.level,
        trend=result.trend,
        seasonals=list(result.seasonals),
        metrics=fit_report(result),
    )
