"""
Remote cart API interface

Defines the cart operations the cart identity store needs from the backend.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from magento_storefront.domain.entities.cart_entity import Cart


@dataclass(frozen=True)
class CartItemInput:
    """Product to add, addressed by SKU"""

    sku: str
    quantity: int = 1

    def __post_init__(self):
        if not self.sku or not self.sku.strip():
            raise ValueError("SKU cannot be empty")
        if self.quantity < 1:
            raise ValueError("Quantity must be at least 1")

    def to_input(self) -> Dict[str, Any]:
        return {"sku": self.sku.strip(), "quantity": self.quantity}


@dataclass(frozen=True)
class CartItemUpdate:
    """New quantity for an existing cart line"""

    cart_item_id: str
    quantity: int

    def __post_init__(self):
        if not self.cart_item_id:
            raise ValueError("Cart item id cannot be empty")
        if self.quantity < 1:
            raise ValueError("Quantity must be at least 1")


class RemoteCartApi(ABC):
    """Repository interface for remote cart operations"""

    @abstractmethod
    async def create_cart(self) -> Cart:
        """Create a new cart and return it (empty)"""

    @abstractmethod
    async def get_cart(self, cart_id: str) -> Cart:
        """Fetch a cart by id; raises ``NotFoundError`` when it is gone"""

    @abstractmethod
    async def get_customer_cart(self) -> Optional[Cart]:
        """Fetch the authenticated customer's cart"""

    @abstractmethod
    async def add_products(self, cart_id: str, items: List[CartItemInput]) -> Cart:
        """Add products to a cart and return the updated cart"""

    @abstractmethod
    async def update_items(self, cart_id: str, items: List[CartItemUpdate]) -> Cart:
        """Change line quantities and return the updated cart"""

    @abstractmethod
    async def remove_item(self, cart_id: str, cart_item_id: str) -> Cart:
        """Remove a line and return the updated cart"""
