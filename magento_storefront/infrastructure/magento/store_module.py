"""
Store metadata module
"""

import logging
from typing import List, Optional

from magento_storefront.domain.entities.store_entity import Country, Store, StoreConfig
from magento_storefront.infrastructure.magento.graphql_client import (
    MagentoClient,
    response_data,
)
from magento_storefront.infrastructure.magento.queries.store_queries import (
    AVAILABLE_STORES_QUERY,
    COUNTRIES_QUERY,
    COUNTRY_QUERY,
    STORE_CONFIG_QUERY,
)
from magento_storefront.infrastructure.utilities.exceptions import MagentoError
from magento_storefront.infrastructure.utilities.helpers import as_list


class MagentoStore:
    """Store configuration, store views and the country directory"""

    def __init__(self, client: MagentoClient):
        self._client = client
        self._logger = logging.getLogger(self.__class__.__name__)

    async def get_store_config(self) -> StoreConfig:
        response = await self._client.query(STORE_CONFIG_QUERY)
        config_data = response_data(response).get("storeConfig")
        if not isinstance(config_data, dict):
            raise MagentoError("Store config not found in response", original_error=response)
        return StoreConfig.from_dict(config_data)

    async def get_stores(self) -> List[Store]:
        response = await self._client.query(AVAILABLE_STORES_QUERY)
        stores = as_list(response_data(response).get("availableStores"))
        return [Store.from_dict(store) for store in stores if isinstance(store, dict)]

    async def get_countries(self) -> List[Country]:
        response = await self._client.query(COUNTRIES_QUERY)
        countries = as_list(response_data(response).get("countries"))
        result = [Country.from_dict(c) for c in countries if isinstance(c, dict) and c.get("id")]
        self._logger.debug("🌍 COUNTRIES: %d", len(result))
        return result

    async def get_country(self, country_id: str) -> Optional[Country]:
        response = await self._client.query(COUNTRY_QUERY, {"id": country_id.upper()})
        country_data = response_data(response).get("country")
        if not isinstance(country_data, dict):
            return None
        return Country.from_dict(country_data)
