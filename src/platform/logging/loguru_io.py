from collections.abc import Awaitable
from functools import wraps
from inspect import iscoroutinefunction
import types
from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar, cast, overload


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io_config import ExtraField, call_depth_var, custom_logger
from src.platform.logging.loguru_io_utils import (
    build_call_target_func_path,
    get_chain_start_time,
    mask_sensitive,
    normalize_args_kwargs,
    reset_call_depth,
    should_mask_keyword,
    truncate_content,
)


_F = TypeVar('_F', bound=Callable[..., Any])


class LoguruIO:
    """
    Decorator that logs what goes in and out of a call.

    Arguments and return values are logged at debug level (only when DEBUG is on).
    An exception is logged once, by the innermost decorated frame it passes through:
    `CustomBaseError` subclasses are business outcomes and get a one-line error,
    anything else gets a full traceback.
    """

    # caller of the wrapper, seen from the _enter/_leave/_fail hooks
    _CALLER_DEPTH = 2

    def __init__(
        self, custom_logger: 'LoguruLogger', *, reraise: bool = True, truncate_content: bool = False
    ) -> None:
        self._custom_logger = custom_logger
        self.reraise = reraise
        self.truncate_content = truncate_content
        self.extra: dict[str, Any] = {}

    def _emit(self) -> 'LoguruLogger':
        return self._custom_logger.bind(**self.extra).opt(depth=self._CALLER_DEPTH)

    def _enter(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        call_depth_var.set(call_depth_var.get() + 1)
        self.extra[ExtraField.CHAIN_START_TIME] = get_chain_start_time()
        if settings.DEBUG:
            self._emit().debug(f'args: {self._render(args)}, kwargs: {self._render(kwargs)}')

    def _leave(self, return_value: Any) -> Any:
        if settings.DEBUG:
            self._emit().debug(f'return: {self._render(return_value)}')
        return return_value

    def _fail(self, e: Exception) -> None:
        if not getattr(e, '_has_logged', False):
            e._has_logged = True  # type: ignore[attr-defined]
            if isinstance(e, CustomBaseError):
                self._emit().error(f'{type(e).__name__}: {e}')
            else:
                self._emit().exception(f'{type(e).__name__}: {e}')
        if self.reraise:
            raise e

    def _render(self, data: Any) -> Any:
        if isinstance(data, dict):
            rendered: Any = {k: self._render(should_mask_keyword(k, v)) for k, v in data.items()}
        elif isinstance(data, list | tuple):
            rendered = type(data)(self._render(item) for item in data)
        else:
            rendered = mask_sensitive(data)
        return truncate_content(rendered) if self.truncate_content else rendered

    def _hide_from_traceback(self, func: Callable[..., Any]) -> Callable[..., Any]:
        # loguru's own frames are collapsed in its tracebacks; borrow its filename
        func.__code__ = func.__code__.replace(  # type: ignore[attr-defined]
            co_filename=cast(types.FunctionType, self._custom_logger.catch).__code__.co_filename
        )
        return func

    def __call__(self, func: _F) -> _F:
        self.extra[ExtraField.CALL_TARGET] = build_call_target_func_path(func)

        if iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                self._enter(args, kwargs)
                try:
                    args, kwargs = normalize_args_kwargs(func, *args, **kwargs)
                    return self._leave(await cast(Awaitable[Any], func(*args, **kwargs)))
                except Exception as e:
                    self._fail(e)
                    return None
                finally:
                    reset_call_depth()

            return cast(_F, self._hide_from_traceback(async_wrapper))

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            self._enter(args, kwargs)
            try:
                args, kwargs = normalize_args_kwargs(func, *args, **kwargs)
                return self._leave(func(*args, **kwargs))
            except Exception as e:
                self._fail(e)
                return None
            finally:
                reset_call_depth()

        return cast(_F, self._hide_from_traceback(sync_wrapper))


_P = ParamSpec('_P')
_T = TypeVar('_T')


class Logger:
    """
    `Logger.base` for plain log lines, `@Logger.io` (or `@Logger.io(reraise=False)`)
    to trace a call.
    """

    base = custom_logger

    @overload
    @staticmethod
    def io(func: Callable[_P, _T]) -> Callable[_P, _T]: ...

    @overload
    @staticmethod
    def io(func: None = ..., *, reraise: bool = ..., truncate_content: bool = ...) -> LoguruIO: ...

    @staticmethod
    def io(
        func: Callable[_P, _T] | None = None, *, reraise: bool = True, truncate_content: bool = True
    ) -> Callable[_P, _T] | LoguruIO:
        decorator = LoguruIO(custom_logger, reraise=reraise, truncate_content=truncate_content)
        return decorator(func) if func else decorator
