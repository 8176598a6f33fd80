from dataclasses import asdict
from typing import Optional, Sequence
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session
from hilo.analytics.patterns import runs
from hilo.core.labels import classify
from hilo.core.types import DUPLICATE, PredictionRecord
from hilo.db.crud import (create_prediction, history, insert_observation,
                          latest_unresolved_prediction, resolve_prediction)
from hilo.core.log import get_logger
from hilo.engine import PredictionEngine

logger = get_logger(__name__)


def submit_round(session: Session, engine: PredictionEngine, values: Sequence[int],
                 period_id: Optional[str] = None):
    """Feed newest-first values to the engine and mirror the cycle into the log."""
    out = engine.submit_observations(values, period_id)
    if out is DUPLICATE:
        return {'duplicate': True, 'logged': False, 'prediction': None, 'resolved': None}

    logged, resolved = log_round(session, values[0], period_id, engine.history[-1])
    return {
        'duplicate': False,
        'logged': logged,
        'prediction': {
            'record_id': out.record_id,
            'label': out.predicted.value,
            'synthetic_value': out.synthetic_value,
            'period_id': out.period_id,
            'regime': out.regime,
        },
        'resolved': _to_dict(resolved) if resolved else None,
    }


def log_round(session: Session, value: int, period_id: Optional[str], record: PredictionRecord):
    """Write one cycle to the session log in a single transaction.

    The engine is the source of truth and has already advanced; the log is
    best-effort, so a failed write is rolled back and reported, not raised.
    Returns (logged, resolved prediction row or None).
    """
    try:
        obs = insert_observation(session, value, classify(value).value, period_id, commit=False)
        resolved = None
        pred = latest_unresolved_prediction(session)
        if pred:
            resolved = resolve_prediction(session, pred, obs, commit=False)
        create_prediction(session, record, commit=False)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.error("prediction log write failed", record_id=record.id, exc_info=True)
        return False, None
    if resolved is not None:
        session.refresh(resolved)
    return True, resolved

def get_stats(engine: PredictionEngine):
    stats = asdict(engine.get_statistics())
    m = engine.metrics
    stats.update({
        'loss_streak': m.loss_streak,
        'regime': engine.regime,
        'volatility_index': m.volatility_index,
        'moving_averages': list(m.moving_averages),
        'resets': m.resets,
    })
    return stats


def get_patterns(engine: PredictionEngine, limit: int = 10, min_run: int = 3):
    window = engine.state.codes
    return {
        'window': window,
        'matches': [
            {'pattern': [c.value for c in m.categories], 'count': m.count, 'last_index': m.last_index}
            for m in engine.matches[:limit]
        ],
        'runs': runs(window, k=min_run),
    }


def _to_dict(p):
    return {
        'id': p.id,
        'record_id': p.record_id,
        'period_id': p.period_id,
        'label_pred': p.label_pred,
        'synthetic_value': p.synthetic_value,
        'regime': p.regime,
        'actual_label': p.actual_label,
        'actual_value': p.actual_value,
        'correct': p.correct,
        'ts': p.ts.isoformat(),
        'resolved_ts': p.resolved_ts.isoformat() if p.resolved_ts else None,
    }


def get_history(session: Session, limit: int = 50):
    return [_to_dict(x) for x in history(session, limit=limit)]


def get_summary(session: Session):
    rows = history(session, limit=100000)
    wins = sum(1 for r in rows if r.correct is True)
    losses = sum(1 for r in rows if r.correct is False)
    total = wins + losses
    winrate = (wins / total) if total else 0.0
    return {'wins': wins, 'losses': losses, 'total': total, 'winrate': winrate}
