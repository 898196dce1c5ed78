"""
Data store adapter: engine, sessions and column conversions.

- ``get_db`` owns the transaction boundary: repositories flush, the
  dependency commits (or rolls back and re-raises).
- ``TagList`` stores the ordered tag list as JSON text in a single
  column through the explicit ``encode_tags`` / ``decode_tags`` pair.
- ``UTCDateTime`` hands back timezone-aware UTC datetimes even on
  backends that drop the zone (SQLite).
- Opening a connection is retried on transient failures
  (``retry_on_connect_failure``), both at startup and when a request
  session is opened.  Errors raised by queries propagate unchanged.
"""
import asyncio
import json
import logging
from datetime import datetime, timezone

from sqlalchemy import DateTime, Text, text
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator

from blog_api.config import settings

logger = logging.getLogger(__name__)

# Module-level engine variable allows tests to override with a test engine.
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def get_db():
    session = await open_session()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


# ---------------------------------------------------------------------------
# Column conversions
# ---------------------------------------------------------------------------

def encode_tags(tags: list[str] | None) -> str:
    """Serialise *tags* to the JSON text stored in the ``tags`` column."""
    return json.dumps(list(tags or []), ensure_ascii=False)


def decode_tags(raw: str | None) -> list[str]:
    """Inverse of ``encode_tags``; NULL or empty text decodes to ``[]``."""
    if not raw:
        return []
    return list(json.loads(raw))


class TagList(TypeDecorator):
    """A ``list[str]`` persisted as one JSON-encoded TEXT value."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return encode_tags(value)

    def process_result_value(self, value, dialect):
        return decode_tags(value)


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetime column."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Connection retry, request sessions and schema bootstrap
# ---------------------------------------------------------------------------

# Errors raised while the database is still coming up or briefly unreachable.
TRANSIENT_CONNECT_ERRORS = (OperationalError, InterfaceError, OSError)


async def retry_on_connect_failure(
    operation,
    *,
    retries: int | None = None,
    delay: float | None = None,
    max_delay: float | None = None,
):
    """
    Await ``operation()`` and return its result, retrying transient
    connection failures with exponential backoff.

    *retries* is the number of additional attempts after the first one.
    The last failure is re-raised unchanged.
    """
    retries = settings.DB_CONNECT_RETRIES if retries is None else retries
    delay = settings.DB_CONNECT_RETRY_DELAY if delay is None else delay
    max_delay = settings.DB_CONNECT_RETRY_MAX_DELAY if max_delay is None else max_delay

    attempt = 0
    while True:
        try:
            return await operation()
        except TRANSIENT_CONNECT_ERRORS as exc:
            attempt += 1
            if attempt > retries:
                logger.error("Database unreachable after %d attempt(s): %s", attempt, exc)
                raise
            wait = min(delay * 2 ** (attempt - 1), max_delay)
            logger.warning(
                "Database connection failed (attempt %d/%d), retrying in %.1fs: %s",
                attempt, retries + 1, wait, exc,
            )
            await asyncio.sleep(wait)


async def ensure_schema(bind: AsyncEngine | None = None) -> None:
    """
    Create any missing tables.  Idempotent: existing tables are left as
    they are.  The connection step is retried on transient failures.
    """
    target = bind if bind is not None else engine

    async def _create_all() -> None:
        async with target.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    await retry_on_connect_failure(_create_all)
    logger.info("Database schema ensured (%d table(s))", len(Base.metadata.tables))


async def open_session(factory: async_sessionmaker | None = None) -> AsyncSession:
    """
    Return a session that already holds a pooled connection.

    A failed connect discards the session and retries with a fresh one,
    so a database restart after boot is absorbed before the request's
    first query runs.
    """
    factory = factory if factory is not None else async_session

    async def _open() -> AsyncSession:
        session = factory()
        try:
            await session.connection()
        except Exception:
            await session.close()
            raise
        return session

    return await retry_on_connect_failure(_open)


async def verify_connection(bind: AsyncEngine | None = None) -> None:
    """Run ``SELECT 1`` through the retry; raises once retries are exhausted."""
    target = bind if bind is not None else engine

    async def _ping() -> None:
        async with target.connect() as conn:
            await conn.execute(text("SELECT 1"))

    await retry_on_connect_failure(_ping)
    logger.info("Database connection verified")
