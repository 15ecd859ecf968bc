from fnmatch import fnmatchcase
import time
from typing import Any, Dict, Optional, Tuple

import orjson

from src.platform.logging.loguru_io import Logger
from src.service.concert_booking.app.interface.i_cache import ICache


class InMemoryCacheImpl(ICache):
    """
    Process-local cache with per-entry TTL.

    Values are stored serialized so callers never share mutable state with the
    cache. Expired entries are dropped lazily on read.
    """

    def __init__(self) -> None:
        # key -> (payload, expires_at or None)
        self._entries: Dict[str, Tuple[bytes, Optional[float]]] = {}

    async def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        payload, expires_at = entry
        if expires_at is not None and time.monotonic() >= expires_at:
            self._entries.pop(key, None)
            return None

        try:
            return orjson.loads(payload)
        except orjson.JSONDecodeError as e:
            Logger.base.warning(f'⚠️ [CACHE] Dropping undecodable entry {key}: {e}')
            self._entries.pop(key, None)
            return None

    async def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        try:
            payload = orjson.dumps(value)
        except TypeError as e:
            Logger.base.warning(f'⚠️ [CACHE] set {key} failed: {e}')
            return
        expires_at = time.monotonic() + ttl_seconds if ttl_seconds else None
        self._entries[key] = (payload, expires_at)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    async def invalidate_pattern(self, pattern: str) -> None:
        for key in [key for key in self._entries if fnmatchcase(key, pattern)]:
            self._entries.pop(key, None)
