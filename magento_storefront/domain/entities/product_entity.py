# pylint: disable=too-many-instance-attributes
"""
Product Entity - catalog products and paginated product lists
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
class ProductImage:
    """Product image"""

    url: str
    label: Optional[str] = None
    position: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["ProductImage"]:
        url = to_str_or_none(as_dict(data).get("url"))
        if not url:
            return None
        return cls(
            url=url,
            label=to_str_or_none(data.get("label")),
            position=to_int_or_none(data.get("position")),
        )


@dataclass
class ProductPrice:
    """Regular/final price pair with optional discount"""

    regular_price: Optional[Money] = None
    final_price: Optional[Money] = None
    discount: Optional[Money] = None

    @property
    def has_discount(self) -> bool:
        return self.discount is not None and self.discount.amount > 0

    @classmethod
    def from_dict(cls, data: Any) -> Optional["ProductPrice"]:
        if not isinstance(data, dict):
            return None
        regular = Money.from_dict(data.get("regular_price"))
        discount = data.get("discount")
        discount_money = None
        if isinstance(discount, dict) and discount.get("amount_off") is not None:
            # ProductDiscount carries no currency of its own
            discount_money = Money.from_dict(
                {"value": discount.get("amount_off"), "currency": regular.currency if regular else None}
            )
        return cls(
            regular_price=regular,
            final_price=Money.from_dict(data.get("final_price")),
            discount=discount_money,
        )


@dataclass
class PriceRange:
    """Minimum and maximum price of a product"""

    minimum_price: Optional[ProductPrice] = None
    maximum_price: Optional[ProductPrice] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["PriceRange"]:
        if not isinstance(data, dict):
            return None
        return cls(
            minimum_price=ProductPrice.from_dict(data.get("minimum_price")),
            maximum_price=ProductPrice.from_dict(data.get("maximum_price")),
        )


@dataclass
class Product:
    """Product domain entity"""

    sku: str
    name: str
    id: Optional[str] = None
    url_key: Optional[str] = None
    description_html: Optional[str] = None
    short_description_html: Optional[str] = None
    image: Optional[ProductImage] = None
    price_range: Optional[PriceRange] = None
    stock_status: Optional[str] = None

    def __post_init__(self):
        if not self.sku:
            raise ValueError("Product SKU cannot be empty")

    @property
    def is_in_stock(self) -> bool:
        return self.stock_status == "IN_STOCK"

    @property
    def final_price(self) -> Optional[Money]:
        if self.price_range and self.price_range.minimum_price:
            return self.price_range.minimum_price.final_price
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        return cls(
            id=to_str_or_none(data.get("id")) or to_str_or_none(data.get("uid")),
            sku=to_str_or_none(data.get("sku")) or "",
            name=to_str_or_none(data.get("name")) or "",
            url_key=to_str_or_none(data.get("url_key")),
            description_html=to_str_or_none(as_dict(data.get("description")).get("html")),
            short_description_html=to_str_or_none(
                as_dict(data.get("short_description")).get("html")
            ),
            image=ProductImage.from_dict(data.get("image")),
            price_range=PriceRange.from_dict(data.get("price_range")),
            stock_status=to_str_or_none(data.get("stock_status")),
        )


@dataclass
class ProductListResult:
    """One page of a product listing"""

    products: List[Product] = field(default_factory=list)
    total_count: int = 0
    current_page: int = 1
    page_size: int = 20
    total_pages: int = 1

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], page_size: int, current_page: int
    ) -> "ProductListResult":
        """Parse a ``products`` payload, skipping items without a SKU"""
        products = []
        for raw in as_list(data.get("items")):
            if isinstance(raw, dict) and raw.get("sku"):
                products.append(Product.from_dict(raw))

        page_info = as_dict(data.get("page_info"))
        total_count = to_int_or_none(data.get("total_count"))
        return cls(
            products=products,
            total_count=total_count if total_count is not None else len(products),
            current_page=to_int_or_none(page_info.get("current_page")) or current_page,
            page_size=to_int_or_none(page_info.get("page_size")) or page_size,
            total_pages=to_int_or_none(page_info.get("total_pages")) or 1,
        )
