from fastapi import APIRouter, Depends, HTTPException, Header, Request
from sqlmodel import Session
from hilo.db.base import get_session
from hilo.api.schemas import SubmitIn, SubmitOut, StatsOut, SummaryOut, PredictionItem
from hilo.engine import PredictionEngine
from hilo.services import submit_round, get_stats, get_patterns, get_history, get_summary
from hilo.core.validation import is_valid_period_id

router = APIRouter()


def _auth(request: Request, api_key_header: str | None = Header(default=None, alias="X-API-Key")):
    api_key = request.app.state.settings.api_key
    if api_key and api_key_header != api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")


def _engine(request: Request) -> PredictionEngine:
    return request.app.state.engine


@router.post('/observations', response_model=SubmitOut)
def observations(data: SubmitIn, request: Request, session: Session = Depends(get_session),
                 engine: PredictionEngine = Depends(_engine), ok=Depends(_auth)):
    newest = data.observations[0]
    if newest.period_id is not None and not is_valid_period_id(newest.period_id):
        raise HTTPException(400, detail="period_id must be 1..64 chars of [0-9A-Za-z_-]")
    values = [o.value for o in data.observations]
    with request.app.state.lock:
        return submit_round(session, engine, values, newest.period_id)


@router.get('/stats', response_model=StatsOut)
def stats(request: Request, engine: PredictionEngine = Depends(_engine)):
    with request.app.state.lock:
        return get_stats(engine)


@router.get('/patterns')
def patterns(request: Request, limit: int = 10, min_k: int = 3,
             engine: PredictionEngine = Depends(_engine)):
    with request.app.state.lock:
        return get_patterns(engine, limit=limit, min_run=min_k)


@router.get('/history', response_model=list[PredictionItem])
def prediction_history(limit: int = 50, session: Session = Depends(get_session)):
    return get_history(session, limit=limit)


@router.get('/summary', response_model=SummaryOut)
def summary(session: Session = Depends(get_session)):
    return get_summary(session)
