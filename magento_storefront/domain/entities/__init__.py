"""
Domain entities package

Contains the storefront entities parsed from GraphQL payloads.
"""

from .cart_entity import Cart, CartItem, CartItemPrices, CartPrices, CartProduct
from .category_entity import Category
from .customer_entity import Customer, CustomerAddress, CustomerAddressRegion
from .product_entity import (
    PriceRange,
    Product,
    ProductImage,
    ProductListResult,
    ProductPrice,
)
from .store_entity import Country, CountryCity, CountryRegion, Store, StoreConfig

__all__ = [
    "Cart",
    "CartItem",
    "CartItemPrices",
    "CartPrices",
    "CartProduct",
    "Category",
    "Customer",
    "CustomerAddress",
    "CustomerAddressRegion",
    "PriceRange",
    "Product",
    "ProductImage",
    "ProductListResult",
    "ProductPrice",
    "Country",
    "CountryCity",
    "CountryRegion",
    "Store",
    "StoreConfig",
]
