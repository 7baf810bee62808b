"""
Cart DTOs

Data Transfer Objects for cart-related operations.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from magento_storefront.domain.entities.cart_entity import Cart
from magento_storefront.infrastructure.utilities.exceptions import StorefrontError


@dataclass
class CartSyncResult:
    """Outcome of adopting the customer cart after login"""
    success: bool
    cart_id: Optional[str] = None
    error: Optional[StorefrontError] = None
    skipped: bool = False


@dataclass
class CartLineInfo:
    """Cart line prepared for display"""
    item_id: str
    sku: str
    name: str
    quantity: int
    unit_price: Optional[str] = None
    row_total: Optional[str] = None


@dataclass
class CartSummary:
    """Cart summary information"""
    cart_id: str
    lines: List[CartLineInfo] = field(default_factory=list)
    total_quantity: int = 0
    grand_total: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @classmethod
    def from_cart(cls, cart: Cart) -> "CartSummary":
        lines = []
        for item in cart.items:
            prices = item.prices
            lines.append(
                CartLineInfo(
                    item_id=item.id,
                    sku=item.product.sku,
                    name=item.product.name or item.product.sku,
                    quantity=item.quantity,
                    unit_price=str(prices.price) if prices and prices.price else None,
                    row_total=str(prices.row_total) if prices and prices.row_total else None,
                )
            )
        grand_total = cart.prices.grand_total if cart.prices else None
        return cls(
            cart_id=cart.id,
            lines=lines,
            total_quantity=cart.total_quantity,
            grand_total=str(grand_total) if grand_total else None,
        )
