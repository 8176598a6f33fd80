from contextlib import asynccontextmanager
import threading
from fastapi import FastAPI
from hilo.config import Settings, settings
from hilo.core.log import setup_logging
from hilo.db.base import init_db, make_engine
from hilo.engine import PredictionEngine
from hilo.api.routes import router


def create_app(cfg: Settings = settings) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(cfg.log_level, structured=cfg.log_json)
        init_db(app.state.db)
        yield
        app.state.db.dispose()

    app = FastAPI(title="HiLo Predictor", lifespan=lifespan)
    app.state.settings = cfg
    app.state.db = make_engine(cfg.db_dsn)
    app.state.engine = PredictionEngine(
        pattern_window=cfg.pattern_window,
        trend_window=cfg.trend_window,
        defensive_streak=cfg.defensive_streak,
        seed=cfg.seed,
    )
    # poll cycles must not overlap
    app.state.lock = threading.Lock()
    app.include_router(router)

    @app.get("/")
    def home():
        return {"ok": True, "app": "HiLo Predictor"}

    return app


app = create_app()
