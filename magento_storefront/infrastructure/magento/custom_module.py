"""
Escape hatch for documents the SDK does not wrap
"""

import logging
from typing import Any, Dict, Optional

from magento_storefront.infrastructure.magento.graphql_client import MagentoClient
from magento_storefront.infrastructure.utilities.exceptions import MagentoError


class MagentoCustomQuery:
    """Run arbitrary GraphQL and get the raw response body back"""

    def __init__(self, client: MagentoClient):
        self._client = client
        self._logger = logging.getLogger(self.__class__.__name__)

    async def query(
        self, document: str, variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        try:
            return await self._client.query(document, variables)
        except MagentoError:
            raise
        except Exception as e:
            self._logger.error("💥 CUSTOM QUERY FAILED: %s", e, exc_info=True)
            raise MagentoError(f"Custom query failed: {e}", original_error=e) from e

    async def mutate(
        self, document: str, variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        try:
            return await self._client.mutate(document, variables)
        except MagentoError:
            raise
        except Exception as e:
            self._logger.error("💥 CUSTOM MUTATION FAILED: %s", e, exc_info=True)
            raise MagentoError(f"Custom mutation failed: {e}", original_error=e) from e
