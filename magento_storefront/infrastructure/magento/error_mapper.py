"""
Maps HTTP failures and GraphQL ``errors`` arrays to storefront exceptions
"""

import logging
from typing import Any, Dict, List

import httpx

from magento_storefront.infrastructure.utilities.constants import GraphQLErrorCategories
from magento_storefront.infrastructure.utilities.exceptions import (
    AuthenticationError,
    GraphQLError,
    GraphQLErrorDetail,
    MagentoError,
    NetworkError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


class ErrorMapper:
    """Stateless translation of backend failures"""

    @staticmethod
    def map_http_error(status_code: int, body: Any = None) -> MagentoError:
        """Map a non-200 response"""
        logger.warning("💥 HTTP ERROR: status %s", status_code)

        if status_code in (401, 403):
            return AuthenticationError(
                "Authentication failed", code=str(status_code), original_error=body
            )
        if status_code >= 500:
            return NetworkError(
                f"Server error: {status_code}", code=str(status_code), original_error=body
            )
        return NetworkError(
            f"Request failed with status {status_code}",
            code=str(status_code),
            original_error=body,
        )

    @staticmethod
    def map_graphql_error(response: Dict[str, Any]) -> MagentoError:
        """Map a response carrying an ``errors`` array"""
        raw_errors = response.get("errors")
        if not isinstance(raw_errors, list) or not raw_errors:
            return GraphQLError("Unknown GraphQL error", original_error=response)

        details: List[GraphQLErrorDetail] = [
            GraphQLErrorDetail.from_dict(error if isinstance(error, dict) else {"message": str(error)})
            for error in raw_errors
        ]
        message = ", ".join(detail.message for detail in details)

        for detail in details:
            logger.warning(
                "💥 GRAPHQL ERROR: %s (path: %s, category: %s)",
                detail.message,
                detail.path,
                detail.category,
            )

        categories = {detail.category for detail in details}
        if GraphQLErrorCategories.AUTHENTICATION in categories:
            return AuthenticationError(message, code="401", original_error=response)
        if GraphQLErrorCategories.NO_SUCH_ENTITY in categories or any(
            detail.message.startswith(GraphQLErrorCategories.NOT_FOUND_MESSAGE_PREFIX)
            for detail in details
        ):
            return NotFoundError(message, errors=details, original_error=response)
        return GraphQLError(message, errors=details, original_error=response)

    @staticmethod
    def map_network_exception(error: Exception) -> NetworkError:
        """Map a transport level exception"""
        if isinstance(error, httpx.TimeoutException):
            return NetworkError(f"Network error: request timed out ({error})", original_error=error)
        return NetworkError(f"Network error: {error}", original_error=error)
