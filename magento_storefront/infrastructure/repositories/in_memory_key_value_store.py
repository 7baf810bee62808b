"""
In-memory key-value store for tests and throwaway sessions
"""

from typing import Any, Dict, Optional

from magento_storefront.domain.repositories.key_value_store import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store with hit/miss statistics"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._stats = {
            "hits": 0,
            "misses": 0,
            "sets": 0,
            "deletes": 0,
        }

    async def get(self, key: str) -> Optional[str]:
        if key in self._data:
            self._stats["hits"] += 1
            return self._data[key]
        self._stats["misses"] += 1
        return None

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._stats["sets"] += 1

    async def delete(self, key: str) -> bool:
        if key in self._data:
            del self._data[key]
            self._stats["deletes"] += 1
            return True
        return False

    def snapshot(self) -> Dict[str, str]:
        """Copy of the raw contents"""
        return dict(self._data)

    def get_stats(self) -> Dict[str, Any]:
        return {**self._stats, "size": len(self._data)}
