"""
Cart Entity - contents of a remote cart as returned by the storefront API
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from magento_storefront.domain.value_objects.money import Money
from magento_storefront.infrastructure.utilities.helpers import (
    as_dict,
    as_list,
    to_int_or_none,
    to_str_or_none,
)


@dataclass
class CartProduct:
    """Product reference inside a cart line"""

    sku: str
    name: Optional[str] = None
    url_key: Optional[str] = None
    image_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CartProduct":
        image = as_dict(data.get("small_image") or data.get("image"))
        return cls(
            sku=to_str_or_none(data.get("sku")) or "",
            name=to_str_or_none(data.get("name")),
            url_key=to_str_or_none(data.get("url_key")),
            image_url=to_str_or_none(image.get("url")),
        )


@dataclass
class CartItemPrices:
    """Unit price and row total of a cart line"""

    price: Optional[Money] = None
    row_total: Optional[Money] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CartItemPrices":
        return cls(
            price=Money.from_dict(data.get("price")),
            row_total=Money.from_dict(data.get("row_total")),
        )


@dataclass
class CartItem:
    """A single line of a cart"""

    id: str
    product: CartProduct
    quantity: int
    prices: Optional[CartItemPrices] = None

    def __post_init__(self):
        if self.quantity < 0:
            raise ValueError("Cart item quantity cannot be negative")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CartItem":
        prices = data.get("prices")
        return cls(
            id=to_str_or_none(data.get("id")) or to_str_or_none(data.get("uid")) or "",
            product=CartProduct.from_dict(as_dict(data.get("product"))),
            quantity=to_int_or_none(data.get("quantity")) or 0,
            prices=CartItemPrices.from_dict(prices) if isinstance(prices, dict) else None,
        )


@dataclass
class CartPrices:
    """Aggregate cart totals"""

    grand_total: Optional[Money] = None
    subtotal_excluding_tax: Optional[Money] = None
    subtotal_including_tax: Optional[Money] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CartPrices":
        return cls(
            grand_total=Money.from_dict(data.get("grand_total")),
            subtotal_excluding_tax=Money.from_dict(data.get("subtotal_excluding_tax")),
            subtotal_including_tax=Money.from_dict(data.get("subtotal_including_tax")),
        )


@dataclass
class Cart:
    """
    Snapshot of a remote cart.

    ``total_quantity`` is taken from the server when it reports one and is
    otherwise derived from the item quantities.
    """

    id: str
    items: List[CartItem] = field(default_factory=list)
    prices: Optional[CartPrices] = None
    total_quantity: int = 0

    def __post_init__(self):
        if not self.id:
            raise ValueError("Cart id cannot be empty")
        if self.total_quantity < 0:
            raise ValueError("Cart total quantity cannot be negative")

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def item_count(self) -> int:
        return self.total_quantity

    def find_item(self, item_id: str) -> Optional[CartItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    @classmethod
    def empty(cls, cart_id: str) -> "Cart":
        return cls(id=cart_id)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Cart":
        """Parse a GraphQL ``Cart`` object"""
        items = []
        for raw_item in as_list(data.get("items")):
            # Magento returns null entries for products that were disabled
            if isinstance(raw_item, dict):
                items.append(CartItem.from_dict(raw_item))

        total_quantity = to_int_or_none(data.get("total_quantity"))
        if total_quantity is None:
            total_quantity = sum(item.quantity for item in items)

        prices = data.get("prices")
        return cls(
            id=to_str_or_none(data.get("id")) or "",
            items=items,
            prices=CartPrices.from_dict(prices) if isinstance(prices, dict) else None,
            total_quantity=total_quantity,
        )
