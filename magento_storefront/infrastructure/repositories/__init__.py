"""
Persistence adapters
"""

from magento_storefront.infrastructure.repositories.cart_identity_repository import (
    CartIdentityRepository,
)
from magento_storefront.infrastructure.repositories.in_memory_key_value_store import (
    InMemoryKeyValueStore,
)
from magento_storefront.infrastructure.repositories.sqlalchemy_key_value_store import (
    SQLAlchemyKeyValueStore,
)

__all__ = [
    "CartIdentityRepository",
    "InMemoryKeyValueStore",
    "SQLAlchemyKeyValueStore",
]
