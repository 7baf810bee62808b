"""
Cart identity repository

Stores the single tagged cart identity of one session as JSON under a
namespaced key, e.g. ``42:cart_identity`` -> ``{"scope": "guest", "id": "abc"}``.
"""

import json
import logging
from typing import Optional

from magento_storefront.domain.repositories.key_value_store import KeyValueStore
from magento_storefront.domain.value_objects.cart_identity import (
    CartIdentity,
    PersistedCartSlots,
)
from magento_storefront.infrastructure.utilities.constants import StorageKeys


class CartIdentityRepository:
    """Reads and writes the persisted cart identity of one namespace"""

    def __init__(self, store: KeyValueStore, namespace: Optional[str] = None):
        self._store = store
        self._key = (
            f"{namespace}{StorageKeys.NAMESPACE_SEPARATOR}{StorageKeys.CART_IDENTITY}"
            if namespace
            else StorageKeys.CART_IDENTITY
        )
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def key(self) -> str:
        return self._key

    async def load(self) -> Optional[CartIdentity]:
        """Unreadable values are logged and treated as absent"""
        raw = await self._store.get(self._key)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            self._logger.warning("⚠️ MALFORMED CART IDENTITY at %s: %r", self._key, raw[:100])
            return None

        identity = CartIdentity.from_dict(data)
        if identity is None:
            self._logger.warning("⚠️ MALFORMED CART IDENTITY at %s: %r", self._key, raw[:100])
        return identity

    async def save(self, identity: CartIdentity) -> None:
        await self._store.set(self._key, json.dumps(identity.to_dict()))
        self._logger.debug("💾 CART IDENTITY SAVED: %s -> %s", self._key, identity)

    async def clear(self) -> None:
        await self._store.delete(self._key)

    async def slots(self) -> PersistedCartSlots:
        return PersistedCartSlots.from_identity(await self.load())
