"""
Magento 2 GraphQL storefront SDK with a cart identity store and a Telegram demo bot
"""

from magento_storefront.application.use_cases.cart_identity_store import CartIdentityStore
from magento_storefront.infrastructure.magento.magento_config import MagentoConfig
from magento_storefront.sdk import MagentoSDK

__version__ = "0.1.0"

__all__ = ["CartIdentityStore", "MagentoConfig", "MagentoSDK", "__version__"]
