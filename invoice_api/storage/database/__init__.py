from .db_connector import (
    async_session,
    build_async_url,
    create_schema,
    dispose_engine,
    engine,
    get_db,
    make_engine,
    make_session_factory,
)

__all__ = [
    "async_session",
    "build_async_url",
    "create_schema",
    "dispose_engine",
    "engine",
    "get_db",
    "make_engine",
    "make_session_factory",
]
