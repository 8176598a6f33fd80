from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session
import os


def make_engine(dsn: str):
    if dsn.startswith("sqlite"):
        if dsn in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise every session sees an empty database
            return create_engine(dsn, echo=False, connect_args={"check_same_thread": False},
                                 poolclass=StaticPool)
        parent = os.path.dirname(make_url(dsn).database or "")
        if parent:
            os.makedirs(parent, exist_ok=True)
        return create_engine(dsn, echo=False, connect_args={"check_same_thread": False})
    return create_engine(dsn, echo=False)


def init_db(engine):
    # import models so SQLModel registers the tables
    from hilo.db import models  # noqa: F401
    SQLModel.metadata.create_all(engine)


def get_session(request: Request):
    with Session(request.app.state.db) as session:
        yield session
