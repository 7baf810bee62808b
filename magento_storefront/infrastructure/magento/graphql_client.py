"""
GraphQL transport for the Magento storefront API
"""

import logging
import re
from typing import Any, Dict, Optional

import httpx

from magento_storefront.infrastructure.logging.logger_config import PerformanceLogger
from magento_storefront.infrastructure.magento.error_mapper import ErrorMapper
from magento_storefront.infrastructure.magento.interceptor import GraphQLInterceptor
from magento_storefront.infrastructure.magento.magento_config import MagentoConfig
from magento_storefront.infrastructure.utilities.exceptions import (
    MagentoError,
    NetworkError,
)

_OPERATION_RE = re.compile(r"\b(query|mutation)\s+(\w+)")


def operation_name(document: str) -> str:
    """Best-effort name of a GraphQL document, for logs"""
    match = _OPERATION_RE.search(document)
    if match:
        return f"{match.group(1)} {match.group(2)}"
    return "anonymous operation"


class MagentoClient:
    """
    Async GraphQL client.

    One instance carries one customer token. Several clients may share an
    ``httpx.AsyncClient``; a client only closes the HTTP client it created.
    """

    def __init__(
        self,
        config: MagentoConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        interceptor: Optional[GraphQLInterceptor] = None,
    ):
        self.config = config
        self.interceptor = interceptor
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(
            timeout=config.timeout_seconds
        )
        self._auth_token: Optional[str] = None
        self._logger = logging.getLogger(self.__class__.__name__)

    def set_auth_token(self, token: Optional[str]) -> None:
        self._auth_token = token or None

    @property
    def auth_token(self) -> Optional[str]:
        return self._auth_token

    @property
    def is_authenticated(self) -> bool:
        return self._auth_token is not None

    def _build_headers(
        self,
        query: str,
        variables: Optional[Dict[str, Any]],
        additional_headers: Optional[Dict[str, str]],
    ) -> Dict[str, str]:
        headers = dict(self.config.headers)
        if self._auth_token:
            headers["Authorization"] = f"Bearer {self._auth_token}"
        if additional_headers:
            headers.update(additional_headers)
        if self.interceptor:
            headers = self.interceptor.intercept_headers(query, variables, headers) or headers
        return headers

    def _fail(self, error: MagentoError) -> MagentoError:
        if self.interceptor:
            self.interceptor.on_error(error)
        return error

    async def query(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        additional_headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """
        Execute a GraphQL document and return the decoded response body.

        Raises:
            AuthenticationError: HTTP 401/403 or an authentication error category
            NotFoundError: the addressed entity does not exist
            GraphQLError: any other ``errors`` entry in the body
            NetworkError: transport failure, timeout or unexpected status
        """
        if self.interceptor:
            query, variables = (
                self.interceptor.intercept_query(query, variables) or query,
                self.interceptor.intercept_variables(query, variables) or variables,
            )
        headers = self._build_headers(query, variables, additional_headers)

        body: Dict[str, Any] = {"query": query}
        if variables:
            body["variables"] = variables

        name = operation_name(query)
        if self.config.enable_debug_logging:
            self._logger.debug("📤 GRAPHQL REQUEST: %s variables=%s", name, variables)

        try:
            with PerformanceLogger(f"graphql {name}"):
                response = await self._http_client.post(
                    self.config.graphql_endpoint,
                    json=body,
                    headers=headers,
                    timeout=self.config.timeout_seconds,
                )
        except httpx.HTTPError as e:
            self._logger.error("💥 NETWORK ERROR during %s: %s", name, e)
            raise self._fail(ErrorMapper.map_network_exception(e)) from e

        if self.config.enable_debug_logging:
            self._logger.debug("📥 GRAPHQL RESPONSE: %s status=%s", name, response.status_code)

        if response.status_code != 200:
            raise self._fail(ErrorMapper.map_http_error(response.status_code, response.text))

        try:
            payload = response.json()
        except ValueError as e:
            raise self._fail(
                NetworkError("Invalid JSON response", original_error=response.text)
            ) from e
        if not isinstance(payload, dict):
            raise self._fail(NetworkError("Invalid JSON response", original_error=payload))

        if self.interceptor:
            payload = self.interceptor.intercept_response(payload) or payload

        if payload.get("errors"):
            raise self._fail(ErrorMapper.map_graphql_error(payload))

        return payload

    async def mutate(
        self,
        mutation: str,
        variables: Optional[Dict[str, Any]] = None,
        additional_headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        return await self.query(mutation, variables, additional_headers)

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http_client.aclose()


def response_data(response: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``response['data']`` or raise when the server sent none"""
    data = response.get("data")
    if not isinstance(data, dict):
        raise MagentoError("Invalid response from server", original_error=response)
    return data
