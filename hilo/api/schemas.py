from pydantic import BaseModel, Field
from typing import Optional


class ObservationIn(BaseModel):
    value: int = Field(ge=0, le=9)
    period_id: Optional[str] = None


class SubmitIn(BaseModel):
    # newest first
    observations: list[ObservationIn] = Field(min_length=1)


class PredictionOut(BaseModel):
    record_id: int
    label: str
    synthetic_value: int
    period_id: Optional[str]
    regime: str


class PredictionItem(BaseModel):
    id: int
    record_id: int
    period_id: Optional[str]
    label_pred: str
    synthetic_value: int
    regime: str
    actual_label: Optional[str]
    actual_value: Optional[int]
    correct: Optional[bool]
    ts: str
    resolved_ts: Optional[str]


class SubmitOut(BaseModel):
    duplicate: bool
    logged: bool
    prediction: Optional[PredictionOut]
    resolved: Optional[PredictionItem]


class StatsOut(BaseModel):
    total: int
    correct: int
    accuracy: float
    high_count: int
    low_count: int
    streak: int
    high_wins: int
    low_wins: int
    total_wins: int
    distribution: Optional[int]
    confidence: int
    loss_streak: int
    regime: str
    volatility_index: float
    moving_averages: list[Optional[float]]
    resets: int


class SummaryOut(BaseModel):
    wins: int
    losses: int
    total: int
    winrate: float
