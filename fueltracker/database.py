"""
Engine and request-scoped sessions for Fuel Tracker.

Services call get_db() to reach the session bound to the current Flask
application context; init_app() removes it again on teardown.
"""

import logging
import time

from flask import g
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from fueltracker.config import Config
from fueltracker.exceptions import ConfigurationError
from fueltracker.models import Base, get_engine

logger = logging.getLogger(__name__)

SLOW_QUERY_MS = 500
MAX_LOGGED_STATEMENT = 200

if not Config.DATABASE_URL:
    raise ConfigurationError("DATABASE_URL must not be empty", config_key="DATABASE_URL")

engine = get_engine(Config.DATABASE_URL)
SessionLocal = scoped_session(sessionmaker(bind=engine))


@event.listens_for(engine, "before_cursor_execute")
def _start_query_timer(conn, cursor, statement, parameters, context, executemany):
    conn.info.setdefault("query_timers", []).append(time.perf_counter())


@event.listens_for(engine, "after_cursor_execute")
def _log_slow_query(conn, cursor, statement, parameters, context, executemany):
    """Warn about statements slower than SLOW_QUERY_MS."""
    elapsed_ms = (time.perf_counter() - conn.info["query_timers"].pop()) * 1000
    if elapsed_ms <= SLOW_QUERY_MS:
        return

    if len(statement) > MAX_LOGGED_STATEMENT:
        statement = statement[:MAX_LOGGED_STATEMENT] + "..."
    logger.warning(f"Slow query ({elapsed_ms:.1f}ms): {statement}", extra={"duration_ms": elapsed_ms})


def create_tables():
    Base.metadata.create_all(engine)


def get_db():
    """Session for the current application context, created on first use."""
    session = g.get("db")
    if session is None:
        session = g.db = SessionLocal()
    return session


def close_db(exception=None):
    if g.pop("db", None) is not None:
        SessionLocal.remove()


def init_app(app):
    """Release the request session when the application context ends."""
    app.teardown_appcontext(close_db)
