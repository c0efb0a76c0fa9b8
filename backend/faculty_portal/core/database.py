from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool
from typing import Any, AsyncGenerator, Dict, Optional

from faculty_portal.core.config import settings

Base = declarative_base()

# Created on first use so tests can set DATABASE_URL before anything connects
_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def get_database_url() -> str:
    """DATABASE_URL with a plain postgresql:// scheme switched to asyncpg"""
    url = settings.DATABASE_URL
    if url.startswith("postgresql://"):
        return "postgresql+asyncpg://" + url[len("postgresql://"):]
    return url


def is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _engine_options(url: str) -> Dict[str, Any]:
    """
    Pooling per backend:
    - SQLite: NullPool, one connection per session
    - PostgreSQL outside production: NullPool
    - PostgreSQL in production: bounded QueuePool with pre-ping
    """
    options: Dict[str, Any] = {"echo": settings.DB_ECHO}
    if is_sqlite(url):
        options.update(poolclass=NullPool, connect_args={"check_same_thread": False})
    elif settings.ENVIRONMENT != "production":
        options.update(poolclass=NullPool)
    else:
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=True,
        )
    return options


def _enforce_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        url = get_database_url()
        _engine = create_async_engine(url, **_engine_options(url))
        if is_sqlite(url):
            _enforce_sqlite_foreign_keys(_engine)
    return _engine


def get_session_local() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    One session per request. Services commit their own writes; anything
    left uncommitted when the handler raises is rolled back.
    """
    async with get_session_local()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create missing tables"""
    import faculty_portal.models  # noqa: F401  (registers the tables on Base.metadata)

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
