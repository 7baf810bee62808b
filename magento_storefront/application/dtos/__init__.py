"""
Data Transfer Objects
"""

from magento_storefront.application.dtos.cart_dtos import (
    CartLineInfo,
    CartSummary,
    CartSyncResult,
)

__all__ = ["CartLineInfo", "CartSummary", "CartSyncResult"]
