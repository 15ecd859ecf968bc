from abc import ABC, abstractmethod
from typing import Any, Optional


class ICache(ABC):
    """
    Best-effort key/value cache.

    Implementations must never raise: failures are logged, `get` returns None
    and writes become no-ops. Values must be JSON serializable.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        pass

    @abstractmethod
    async def invalidate_pattern(self, pattern: str) -> None:
        """Delete every key matching a glob pattern, e.g. `concert:123*`"""
        pass
