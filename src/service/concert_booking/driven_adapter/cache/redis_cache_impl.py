from typing import Any, Optional

import orjson
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.platform.state.redis_client import redis_client
from src.service.concert_booking.app.interface.i_cache import ICache


SCAN_BATCH_SIZE = 500


def _make_key(key: str) -> str:
    return f'{settings.REDIS_KEY_PREFIX}{key}'


class RedisCacheImpl(ICache):
    """
    Redis-backed cache with JSON (orjson) values.

    Every failure is logged and swallowed: `get` returns None, writes do nothing.
    """

    def __init__(self) -> None:
        self.tracer = trace.get_tracer(__name__)

    async def get(self, key: str) -> Optional[Any]:
        with self.tracer.start_as_current_span('cache.get', attributes={'cache.key': key}):
            try:
                raw = await redis_client.get_client().get(_make_key(key))
                return orjson.loads(raw) if raw is not None else None
            except Exception as e:
                Logger.base.warning(f'⚠️ [CACHE] get {key} failed: {type(e).__name__}: {e}')
                return None

    async def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        with self.tracer.start_as_current_span('cache.set', attributes={'cache.key': key}):
            try:
                payload = orjson.dumps(value)
                await redis_client.get_client().set(_make_key(key), payload, ex=ttl_seconds or None)
            except Exception as e:
                Logger.base.warning(f'⚠️ [CACHE] set {key} failed: {type(e).__name__}: {e}')

    async def delete(self, key: str) -> None:
        with self.tracer.start_as_current_span('cache.delete', attributes={'cache.key': key}):
            try:
                await redis_client.get_client().delete(_make_key(key))
            except Exception as e:
                Logger.base.warning(f'⚠️ [CACHE] delete {key} failed: {type(e).__name__}: {e}')

    async def invalidate_pattern(self, pattern: str) -> None:
        with self.tracer.start_as_current_span(
            'cache.invalidate_pattern', attributes={'cache.pattern': pattern}
        ):
            try:
                client = redis_client.get_client()
                # SCAN instead of KEYS so large keyspaces do not block the server
                keys = [
                    key
                    async for key in client.scan_iter(
                        match=_make_key(pattern), count=SCAN_BATCH_SIZE
                    )
                ]
                if keys:
                    await client.delete(*keys)
                Logger.base.debug(f'🧹 [CACHE] Invalidated {len(keys)} keys for {pattern}')
            except Exception as e:
                Logger.base.warning(
                    f'⚠️ [CACHE] invalidate {pattern} failed: {type(e).__name__}: {e}'
                )
