from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger


ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


def _detail(status_code: int, detail: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'detail': detail})


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if isinstance(exc, CustomBaseError):
        return _detail(exc.status_code, exc.message)
    return _detail(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return _detail(status.HTTP_400_BAD_REQUEST, str(exc))


async def request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    return _detail(status.HTTP_400_BAD_REQUEST, jsonable_encoder(errors))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Errors raised through @Logger.io already carry a traceback in the log
    if not getattr(exc, '_has_logged', False):
        Logger.base.exception(f'💥 [HTTP] Unhandled {type(exc).__name__} on {request.url.path}')
    return _detail(status.HTTP_500_INTERNAL_SERVER_ERROR, 'Internal server error')


EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: custom_error_handler,
    ValueError: value_error_handler,
    RequestValidationError: request_validation_handler,
    Exception: unhandled_error_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
