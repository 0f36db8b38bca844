from contextlib import asynccontextmanager
from inspect import isawaitable
from typing import AsyncIterator

from invoice_api.core.settings import settings
from invoice_api.core.logger import logger
from invoice_api.app_containers import ApplicationContainer
from invoice_api.storage.database import async_session, create_schema, dispose_engine


def create_container() -> ApplicationContainer:
    container = ApplicationContainer()
    container.db_session.override(async_session)
    return container


@asynccontextmanager
async def lifespan(container: ApplicationContainer) -> AsyncIterator[ApplicationContainer]:
    ret = container.init_resources()
    if isawaitable(ret):
        await ret
    logger.info(f"{settings.APP_NAME} starting in {settings.APP_ENV}")
    if settings.DB_AUTO_CREATE:
        await create_schema()
    try:
        yield container
    finally:
        logger.info(f"{settings.APP_NAME} shutdown")
        r = container.shutdown_resources()
        if isawaitable(r):
            await r
        await dispose_engine()
