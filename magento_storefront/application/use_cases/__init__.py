"""
Application use cases
"""

from magento_storefront.application.use_cases.cart_identity_store import CartIdentityStore

__all__ = ["CartIdentityStore"]
