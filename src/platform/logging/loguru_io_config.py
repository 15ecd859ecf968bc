"""
Loguru setup shared by the whole process.

Importing this module replaces loguru's default handler with:
- stdout, always
- an hourly rotating file under `logs/` (or `TEST_LOG_DIR`), only in DEBUG mode

and routes stdlib `logging` (uvicorn, SQLAlchemy, redis) through loguru, so every
line carries the same extra fields.
"""

from contextvars import ContextVar
from datetime import datetime, timezone
from enum import StrEnum
import logging
import os
from pathlib import Path
import sys
from typing import TYPE_CHECKING

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.logging.service_context import get_service_context


PROJECT_ROOT = Path(__file__).resolve().parents[3]
LOG_DIR = Path(os.environ.get('TEST_LOG_DIR') or PROJECT_ROOT / 'logs')

SENSITIVE_KEYWORDS = frozenset({'password', 'password_hash', 'salt'})
MASK = '********'
MAX_CONTENT_LENGTH = 2000

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


# Forwarded from stdlib logging only at INFO and above
_QUIET_LOGGERS = ('asyncio', 'aiosqlite', 'httpx', 'httpcore')

LOG_FORMAT = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)

MIN_LOG_LEVEL = 'DEBUG' if settings.DEBUG else 'INFO'


def _bind_defaults() -> 'LoguruLogger':
    return loguru_logger.bind(
        **{
            ExtraField.SERVICE_CONTEXT: get_service_context(),
            ExtraField.CHAIN_START_TIME: '',
            ExtraField.CALL_TARGET: '',
        }
    )


def _log_file_path() -> Path:
    stamp = datetime.now(timezone.utc).strftime('%Y-%m-%d_%H')
    prefix = 'test_' if os.environ.get('TEST_LOG_DIR') else ''
    return LOG_DIR / f'{prefix}{stamp}.log'


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records to loguru, keeping the original caller location."""

    _bound: 'LoguruLogger | None' = None

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno <= logging.DEBUG and record.name.startswith(_QUIET_LOGGERS):
            return

        try:
            level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        if InterceptHandler._bound is None:
            InterceptHandler._bound = _bind_defaults()
        InterceptHandler._bound.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


loguru_logger.remove()
custom_logger = _bind_defaults()
custom_logger.add(sys.stdout, format=LOG_FORMAT, level=MIN_LOG_LEVEL, enqueue=True)

if settings.DEBUG:
    custom_logger.add(
        str(_log_file_path()),
        format=LOG_FORMAT,
        level=MIN_LOG_LEVEL,
        rotation='1 hour',
        retention='7 days',
        compression='gz',
        enqueue=True,
    )

logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
