import logging
import math

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from app.core.config import settings
from app.db.base import Base

logger = logging.getLogger(__name__)


def _acos(value):
    # MySQL returns NULL outside the domain instead of raising
    if value is None or value < -1 or value > 1:
        return None
    return math.acos(value)


def _unary(fn):
    def wrapper(value):
        if value is None:
            return None
        return fn(value)
    return wrapper


def register_sqlite_functions(engine):
    """Give SQLite connections the trigonometry used by the distance query."""
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, _connection_record):
        dbapi_connection.create_function("acos", 1, _acos)
        dbapi_connection.create_function("cos", 1, _unary(math.cos))
        dbapi_connection.create_function("sin", 1, _unary(math.sin))
        dbapi_connection.create_function("radians", 1, _unary(math.radians))
    return engine


def build_engine(url: str, **kwargs):
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        return register_sqlite_functions(create_engine(url, **kwargs))
    return create_engine(url, pool_pre_ping=True, **kwargs)


engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    bind = bind or engine
    Base.metadata.create_all(bind)
    logger.info("Database tables ensured on %s", bind.url.render_as_string(hide_password=True))
