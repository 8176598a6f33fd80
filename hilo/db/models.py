from sqlmodel import SQLModel, Field
from datetime import datetime, timezone


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Observation(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    ts: datetime = Field(default_factory=_now, index=True)
    period_id: str | None = Field(default=None, index=True)
    value: int
    label: str = Field(index=True)  # 'High' | 'Low'
    source: str = "feed"


class Prediction(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    record_id: int = Field(index=True)  # engine-side PredictionRecord.id
    period_id: str | None = Field(default=None, index=True)
    label_pred: str
    synthetic_value: int
    regime: str = "smart"
    ts: datetime = Field(default_factory=_now, index=True)
    # Resolution fields (link to actual outcome)
    observation_id: int | None = None
    actual_label: str | None = None
    actual_value: int | None = None
    correct: bool | None = None
    resolved_ts: datetime | None = None
