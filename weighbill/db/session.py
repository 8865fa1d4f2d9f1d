# weighbill/db/session.py
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from weighbill.core.config import settings
from weighbill.db.base import Base


def make_engine(db_url: str) -> Engine:
    kwargs = {"future": True}
    if db_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs.update(pool_pre_ping=True, pool_recycle=280)
    return create_engine(db_url, **kwargs)


engine: Engine = make_engine(settings.LOCAL_DB_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    future=True,
)


def init_db(bind: Engine = engine) -> None:
    # Import models so metadata is complete for create_all()
    from weighbill.models import attendance, payment_record  # noqa: F401

    Base.metadata.create_all(bind=bind)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
