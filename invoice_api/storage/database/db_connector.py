from collections.abc import AsyncGenerator
from typing import Any
from sqlalchemy.engine.url import make_url, URL
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool
from invoice_api.core.settings import settings
from invoice_api.core.logger import logger

_PG_SCHEMES = {"postgres", "postgresql", "postgresql+asyncpg", "postgresql+psycopg2"}
_SQLITE_SCHEMES = {"sqlite", "sqlite+aiosqlite"}

def build_async_url(raw: str) -> URL:
    """
    Normalise a configured database URL to an async driver.

    Postgres URLs are rebuilt without their query string so options such as
    sslmode/channel_binding never reach asyncpg; SSL is driven by DB_SSL.
    """
    u = make_url(raw)
    if u.drivername in _PG_SCHEMES:
        return URL.create(
            drivername="postgresql+asyncpg",
            username=u.username,
            password=u.password,
            host=u.host,
            port=u.port,
            database=u.database,
        )
    if u.drivername in _SQLITE_SCHEMES:
        return u.set(drivername="sqlite+aiosqlite")
    raise ValueError(f"Unsupported database driver: {u.drivername}")

def make_engine(raw: str, *, echo: bool = False, ssl: bool = False) -> AsyncEngine:
    url = build_async_url(raw)
    kwargs: dict[str, Any] = {"echo": echo}
    if url.get_backend_name() == "sqlite":
        # in-memory databases live and die with their single connection
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs.update(
            poolclass=NullPool,
            pool_pre_ping=True,
            execution_options={"isolation_level": "READ COMMITTED"},
            connect_args={
                "ssl": ssl,
                "statement_cache_size": 0,
            },
        )
    return create_async_engine(url.render_as_string(hide_password=False), **kwargs)

def make_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=bind, expire_on_commit=False, autoflush=False, class_=AsyncSession)

engine = make_engine(
    settings.DATABASE_URL.get_secret_value(),
    echo=settings.DEBUG,
    ssl=settings.DB_SSL,
)

async_session = make_session_factory(engine)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    session: AsyncSession = async_session()
    try:
        yield session
    finally:
        await session.close()

async def create_schema(bind: AsyncEngine | None = None) -> None:
    from invoice_api.v1_0.models import Base

    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Schema ready: %s", ", ".join(sorted(Base.metadata.tables)))

async def dispose_engine() -> None:
    await engine.dispose()
