from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from app.config import get_settings
from app.domain import models  # noqa: F401  (registers the tables on SQLModel.metadata)


def build_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite"):
        # FastAPI runs sync endpoints in a threadpool
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(database_url, pool_pre_ping=True)


engine = build_engine(get_settings().database_url)


def init_db(bind: Engine | None = None) -> None:
    SQLModel.metadata.create_all(bind or engine)
