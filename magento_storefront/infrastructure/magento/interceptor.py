"""
Request/response hooks for the GraphQL client

Subclass ``GraphQLInterceptor`` and override the hooks you need. A hook that
returns ``None`` leaves the value unchanged.
"""

from typing import Any, Dict, Optional

from magento_storefront.infrastructure.utilities.exceptions import MagentoError


class GraphQLInterceptor:
    """No-op interceptor"""

    def intercept_query(
        self, query: str, variables: Optional[Dict[str, Any]]
    ) -> Optional[str]:
        return None

    def intercept_variables(
        self, query: str, variables: Optional[Dict[str, Any]]
    ) -> Optional[Dict[str, Any]]:
        return None

    def intercept_headers(
        self, query: str, variables: Optional[Dict[str, Any]], headers: Dict[str, str]
    ) -> Optional[Dict[str, str]]:
        return None

    def intercept_response(self, response: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return None

    def on_error(self, error: MagentoError) -> None:
        return None
