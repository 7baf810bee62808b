"""
Magento 2 GraphQL storefront SDK
"""

from .graphql_client import MagentoClient
from .interceptor import GraphQLInterceptor
from .magento_config import MagentoConfig

__all__ = ["MagentoClient", "GraphQLInterceptor", "MagentoConfig"]
