"""
MagentoSDK - single entry point to the storefront modules
"""

import logging
from typing import Optional

import httpx

from magento_storefront.infrastructure.magento.auth_module import MagentoAuth
from magento_storefront.infrastructure.magento.cart_module import MagentoCart
from magento_storefront.infrastructure.magento.catalog_module import (
    MagentoCategories,
    MagentoProducts,
    MagentoSearch,
)
from magento_storefront.infrastructure.magento.custom_module import MagentoCustomQuery
from magento_storefront.infrastructure.magento.graphql_client import MagentoClient
from magento_storefront.infrastructure.magento.interceptor import GraphQLInterceptor
from magento_storefront.infrastructure.magento.magento_config import MagentoConfig
from magento_storefront.infrastructure.magento.profile_module import MagentoProfile
from magento_storefront.infrastructure.magento.store_module import MagentoStore

logger = logging.getLogger(__name__)


class MagentoSDK:
    """
    Bundles one ``MagentoClient`` with every feature module.

    Usage:
        async with MagentoSDK(MagentoConfig(base_url="https://shop.example.com")) as sdk:
            await sdk.auth.login("user@example.com", "secret")
            customer = await sdk.profile.get_profile()
    """

    def __init__(
        self,
        config: MagentoConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        interceptor: Optional[GraphQLInterceptor] = None,
    ):
        self.config = config
        self.client = MagentoClient(config, http_client=http_client, interceptor=interceptor)

        self.auth = MagentoAuth(self.client)
        self.categories = MagentoCategories(self.client)
        self.products = MagentoProducts(self.client)
        self.search = MagentoSearch(self.client)
        self.cart = MagentoCart(self.client)
        self.profile = MagentoProfile(self.client)
        self.store = MagentoStore(self.client)
        self.custom = MagentoCustomQuery(self.client)

        logger.debug("🧩 SDK READY: %s", config.graphql_endpoint)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "MagentoSDK":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
