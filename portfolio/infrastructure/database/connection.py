"""Database engine and session factory.

``init_engine()`` reads DATABASE_URL, normalises it and builds a pooled
SQLAlchemy engine. Repositories receive a ``ManagedSessionFactory`` and use
it exactly like a sessionmaker:

    with session_factory() as session:
        ...
"""
import logging
import os
import re
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

_log = logging.getLogger("portfolio.db")

_engine = None

# Matches a postgres(ql):// URL anywhere inside a string.
_PG_URL_RE = re.compile(r"(postgres(?:ql)?://\S+)")


def resolve_database_url(raw: str) -> str:
    """Return a clean SQLAlchemy URL from a pasted connection string.

    Strips whitespace and surrounding quotes, extracts the URL from a full
    ``psql`` command and selects the psycopg 3 driver.
    """
    raw = (raw or "").strip()
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in ('"', "'"):
        raw = raw[1:-1].strip()

    match = _PG_URL_RE.search(raw)
    url = match.group(1) if match else raw
    url = url.rstrip("'\"").strip()

    # Render / Heroku / Neon sometimes expose postgres://; the driver is psycopg 3.
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            url = "postgresql+psycopg://" + url[len(prefix):]
            break
    return url


def _masked_host(url: str) -> str:
    return url.split("@")[-1].split("?")[0] if "@" in url else "<no-host>"


def build_engine(url: str):
    if url.startswith("sqlite"):
        return create_engine(url, echo=False)
    return create_engine(
        url,
        pool_size=3,
        max_overflow=5,
        pool_timeout=15,
        pool_recycle=1800,
        pool_pre_ping=True,
        echo=False,
    )


def init_engine(url: str | None = None):
    """Create the global engine from *url* or DATABASE_URL."""
    global _engine
    resolved = resolve_database_url(url if url is not None else os.environ.get("DATABASE_URL", ""))
    if not resolved:
        raise RuntimeError("DATABASE_URL is empty -- cannot initialise the database.")
    _log.info("Initialising engine -> %s", _masked_host(resolved))
    _engine = build_engine(resolved)
    return _engine


def create_tables(engine=None) -> None:
    """Create all tables (idempotent)."""
    from portfolio.infrastructure.database.models import Base

    engine = engine or _engine
    Base.metadata.create_all(bind=engine)
    _log.info("Tables verified.")


def check_health(engine=None) -> bool:
    """Lightweight connectivity probe."""
    engine = engine or _engine
    if engine is None:
        return False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as exc:
        _log.warning("Database health check failed: %s", exc)
        return False


class ManagedSessionFactory:
    """Callable wrapper around a sessionmaker: rollback on error, always close."""

    def __init__(self, engine):
        self._sessionmaker = sessionmaker(bind=engine, expire_on_commit=False)

    def __call__(self):
        return self._managed_session()

    @contextmanager
    def _managed_session(self):
        session = self._sessionmaker()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
