"""
Production FastAPI application.

    uvicorn src.main:app --host 0.0.0.0 --port 8000
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from redis.exceptions import RedisError

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.platform.state.redis_client import redis_client


async def _start_cache(tracing: TracingConfig) -> None:
    if settings.CACHE_BACKEND != 'redis':
        Logger.base.info('🧠 [Startup] Using in-process cache')
        return

    tracing.instrument_redis()
    try:
        await redis_client.initialize()
    except (RedisError, OSError) as e:
        # Cache calls degrade to misses and no-ops until restart
        Logger.base.warning(f'⚠️ [Startup] Redis unavailable, caching disabled: {e}')


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info(f'🚀 [Startup] {settings.PROJECT_NAME} v{settings.VERSION}')

    tracing = TracingConfig()
    tracing.setup()
    container.wire(modules=WIRE_MODULES)

    tracing.instrument_sqlalchemy(engine=get_engine())
    await create_db_and_tables()
    Logger.base.info('🗄️  [Startup] Database schema ready')

    await _start_cache(tracing)
    Logger.base.info('✅ [Startup] Ready to serve requests')

    try:
        yield
    finally:
        await redis_client.disconnect()
        await dispose_engine()
        tracing.shutdown()
        container.unwire()
        Logger.base.info('👋 [Shutdown] Complete')


app = create_app(lifespan=lifespan)


@app.get('/', include_in_schema=False)
async def root() -> RedirectResponse:
    return RedirectResponse(url='/docs')
