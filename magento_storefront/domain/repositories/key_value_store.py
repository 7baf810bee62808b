"""
Key-value store interface

Durable string storage behind the cart identity persistence.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """Repository interface for namespaced string values"""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the stored value or ``None``"""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Insert or overwrite a value"""

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove a value; returns whether anything was removed"""
