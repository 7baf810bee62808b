"""
Catalog modules: categories, products and search
"""

import logging
from typing import Any, Dict, List, Optional

from magento_storefront.domain.entities.category_entity import Category
from magento_storefront.domain.entities.product_entity import (
    Product,
    ProductListResult,
)
from magento_storefront.infrastructure.magento.graphql_client import (
    MagentoClient,
    response_data,
)
from magento_storefront.infrastructure.magento.queries.catalog_queries import (
    GET_CATEGORY_QUERY,
    GET_CATEGORY_TREE_QUERY,
    GET_PRODUCTS_QUERY,
    SEARCH_PRODUCTS_QUERY,
)
from magento_storefront.infrastructure.utilities.constants import MagentoSettings
from magento_storefront.infrastructure.utilities.exceptions import ValidationError
from magento_storefront.infrastructure.utilities.helpers import (
    as_dict,
    as_list,
    to_int_or_none,
)

SORT_OPTIONS: Dict[str, Dict[str, str]] = {
    "relevance": {"relevance": "DESC"},
    "price_asc": {"price": "ASC"},
    "price_desc": {"price": "DESC"},
    "name_asc": {"name": "ASC"},
    "name_desc": {"name": "DESC"},
    "created_at": {"created_at": "DESC"},
}


def _validate_paging(page_size: int, current_page: int) -> None:
    if page_size < 1:
        raise ValidationError("Page size must be at least 1", "page_size")
    if current_page < 1:
        raise ValidationError("Current page must be at least 1", "current_page")


class MagentoCategories:
    """Category lookups"""

    def __init__(self, client: MagentoClient):
        self._client = client
        self._logger = logging.getLogger(self.__class__.__name__)

    async def get_category_by_id(self, category_id: str) -> Optional[Category]:
        parsed_id = to_int_or_none(category_id)
        if parsed_id is None:
            raise ValidationError(f"Invalid category ID: {category_id}", "category_id")

        response = await self._client.query(GET_CATEGORY_QUERY, {"id": parsed_id})
        category_data = response_data(response).get("category")
        if not isinstance(category_data, dict):
            self._logger.info("📭 CATEGORY NOT FOUND: %s", category_id)
            return None
        return Category.from_dict(category_data)

    async def get_category_tree(self) -> List[Category]:
        """Root categories with three levels of children"""
        response = await self._client.query(GET_CATEGORY_TREE_QUERY)
        categories = as_list(response_data(response).get("categoryList"))
        return [Category.from_dict(c) for c in categories if isinstance(c, dict)]


class MagentoProducts:
    """Product lookups and category listings"""

    def __init__(self, client: MagentoClient):
        self._client = client
        self._logger = logging.getLogger(self.__class__.__name__)

    async def _first_product(self, product_filter: Dict[str, Any]) -> Optional[Product]:
        response = await self._client.query(
            GET_PRODUCTS_QUERY, {"filter": product_filter, "pageSize": 1}
        )
        items = as_list(as_dict(response_data(response).get("products")).get("items"))
        for item in items:
            if isinstance(item, dict) and item.get("sku"):
                return Product.from_dict(item)
        return None

    async def get_product_by_sku(self, sku: str) -> Optional[Product]:
        if not sku or not sku.strip():
            raise ValidationError("SKU is required", "sku")
        return await self._first_product({"sku": {"eq": sku.strip()}})

    async def get_product_by_url_key(self, url_key: str) -> Optional[Product]:
        if not url_key or not url_key.strip():
            raise ValidationError("URL key is required", "url_key")
        return await self._first_product({"url_key": {"eq": url_key.strip()}})

    async def get_products_by_category_id(
        self,
        category_id: str,
        page_size: int = MagentoSettings.DEFAULT_PAGE_SIZE,
        current_page: int = MagentoSettings.DEFAULT_CURRENT_PAGE,
    ) -> ProductListResult:
        _validate_paging(page_size, current_page)
        response = await self._client.query(
            GET_PRODUCTS_QUERY,
            {
                "filter": {"category_id": {"eq": str(category_id)}},
                "pageSize": page_size,
                "currentPage": current_page,
            },
        )
        products = as_dict(response_data(response).get("products"))
        result = ProductListResult.from_dict(products, page_size, current_page)
        self._logger.info(
            "📦 CATEGORY %s: %d products (page %d/%d)",
            category_id,
            len(result.products),
            result.current_page,
            result.total_pages,
        )
        return result


class MagentoSearch:
    """Full-text product search"""

    def __init__(self, client: MagentoClient):
        self._client = client
        self._logger = logging.getLogger(self.__class__.__name__)

    async def search_products(
        self,
        query: str,
        page_size: int = MagentoSettings.DEFAULT_PAGE_SIZE,
        current_page: int = MagentoSettings.DEFAULT_CURRENT_PAGE,
        sort_by: str = MagentoSettings.DEFAULT_SORT,
    ) -> ProductListResult:
        if not query or not query.strip():
            raise ValidationError("Search query cannot be empty", "query")
        _validate_paging(page_size, current_page)

        variables: Dict[str, Any] = {
            "search": query.strip(),
            "pageSize": page_size,
            "currentPage": current_page,
        }
        sort = SORT_OPTIONS.get(sort_by)
        if sort is not None:
            variables["sort"] = sort

        self._logger.info("🔍 SEARCH: %r sort=%s page=%d", query, sort_by, current_page)
        response = await self._client.query(SEARCH_PRODUCTS_QUERY, variables)
        products = as_dict(response_data(response).get("products"))
        return ProductListResult.from_dict(products, page_size, current_page)
