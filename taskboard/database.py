import logging
import sqlite3

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from taskboard.config.settings import settings

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    if url.startswith("postgresql"):
        # Hosted PostgreSQL (Render and similar) wants sslmode=require
        return {"connect_args": {"sslmode": settings.DB_SSLMODE}, "pool_pre_ping": True}
    return {}


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = None, drop: bool = False) -> None:
    """Create every table known to the models, optionally dropping them first"""
    # Registers the models on Base.metadata
    from taskboard import models  # noqa: F401

    bind = bind or engine
    if drop:
        Base.metadata.drop_all(bind=bind)
        logger.info("Dropped all tables")
    Base.metadata.create_all(bind=bind)
    logger.info("Tables ready on %s", bind.url.render_as_string(hide_password=True))
