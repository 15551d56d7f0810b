import os

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./fifa_league.db")

Base = declarative_base()


def build_engine(url: str = DATABASE_URL, **kwargs) -> Engine:
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, future=True, connect_args=connect_args, **kwargs)


def build_session_factory(bind: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=bind, autocommit=False, autoflush=False, future=True)


engine = build_engine()
SessionLocal = build_session_factory(engine)


def init_db(bind: Engine = engine) -> None:
    from fifa_league.storage import models  # noqa: F401

    with bind.begin() as conn:
        Base.metadata.create_all(bind=conn)
