"""
FastAPI app assembly.

`create_app` is used by `src/main.py` with the real lifespan and by the API tests
with a no-op one, so both exercise the same routers, middleware and error mapping.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from src.platform.config.core_setting import settings
from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.observability.tracing import TracingConfig
from src.service.concert_booking.driving_adapter.http_controller.booking_controller import (
    router as booking_router,
)
from src.service.concert_booking.driving_adapter.http_controller.concert_controller import (
    router as concert_router,
)


API_ROUTERS: tuple[tuple[APIRouter, str, str], ...] = (
    (concert_router, '/api/concerts', 'concert'),
    (booking_router, '/api/bookings', 'booking'),
)

ops_router = APIRouter(tags=['ops'])


@ops_router.get('/health')
async def health_check() -> dict[str, str]:
    return {'status': 'healthy', 'service': settings.PROJECT_NAME}


@ops_router.get('/metrics')
async def get_metrics() -> PlainTextResponse:
    """Prometheus scrape endpoint."""
    return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
) -> FastAPI:
    """
    Args:
        lifespan: startup/shutdown context manager
        title_suffix: appended to the OpenAPI title, e.g. " (Test)"
    """
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description='Concert listing, seat reservation and cancellation',
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # Must run before routes are mounted
    TracingConfig.instrument_fastapi(app=app)

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )
    register_exception_handlers(app)

    for router, prefix, tag in API_ROUTERS:
        app.include_router(router, prefix=prefix, tags=[tag])
    app.include_router(ops_router)

    return app
