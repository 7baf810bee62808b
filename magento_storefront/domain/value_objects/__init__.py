"""
Domain value objects package

Contains immutable value objects that represent concepts in the storefront domain.
"""

from .cart_identity import CartIdentity, CartScope, PersistedCartSlots
from .money import Money

__all__ = [
    "CartIdentity",
    "CartScope",
    "PersistedCartSlots",
    "Money",
]
