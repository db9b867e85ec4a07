from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from load_analytics.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=4)
def get_engine(url: str | None = None):
    settings = get_settings()
    engine = create_engine(url or settings.database_url, pool_pre_ping=True)
    slow_ms = settings.slow_query_ms

    @event.listens_for(engine, "before_cursor_execute")
    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        context._query_start_time = time.perf_counter()

    @event.listens_for(engine, "after_cursor_execute")
    def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        elapsed = (time.perf_counter() - context._query_start_time) * 1000
        if elapsed > slow_ms:
            logger.warning("slow_query", extra={"ctx_elapsed_ms": round(elapsed, 2)})

    return engine


@lru_cache(maxsize=4)
def get_session_factory(url: str | None = None):
    return sessionmaker(bind=get_engine(url), autoflush=False, autocommit=False)


@contextmanager
def db_session(factory=None) -> Iterator[Session]:
    session = (factory or get_session_factory())()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
