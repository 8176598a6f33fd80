from typing import Optional
from sqlmodel import Session, select
from hilo.db.models import Observation, Prediction
from hilo.core.types import PredictionRecord, utcnow


def _save(session: Session, row, commit: bool):
    session.add(row)
    if commit:
        session.commit()
        session.refresh(row)
    else:
        # assigns the primary key, commit is left to the caller
        session.flush()
    return row


def insert_observation(session: Session, value: int, label: str, period_id: str | None = None,
                       commit: bool = True) -> Observation:
    obs = Observation(value=value, label=label, period_id=period_id)
    return _save(session, obs, commit)


def create_prediction(session: Session, record: PredictionRecord, commit: bool = True) -> Prediction:
    pred = Prediction(
        record_id=record.id,
        period_id=record.period_id,
        label_pred=record.predicted.value,
        synthetic_value=record.synthetic_value,
        regime=record.regime,
    )
    return _save(session, pred, commit)


def latest_unresolved_prediction(session: Session) -> Optional[Prediction]:
    return session.exec(
        select(Prediction)
        .where(Prediction.correct.is_(None))
        .order_by(Prediction.id.desc())
        .limit(1)
    ).first()


def resolve_prediction(session: Session, pred: Prediction, obs: Observation, commit: bool = True) -> Prediction:
    pred.observation_id = obs.id
    pred.actual_label = obs.label
    pred.actual_value = obs.value
    pred.correct = (pred.label_pred == obs.label)
    pred.resolved_ts = utcnow()
    return _save(session, pred, commit)


def history(session: Session, limit: int = 50) -> list[Prediction]:
    return session.exec(select(Prediction).order_by(Prediction.id.desc()).limit(limit)).all()
