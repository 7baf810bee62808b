"""
Connection settings for a Magento 2 GraphQL storefront
"""

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Dict, Optional

from magento_storefront.infrastructure.utilities.constants import MagentoSettings

if TYPE_CHECKING:
    from magento_storefront.config import Settings


@dataclass(frozen=True)
class MagentoConfig:
    """Immutable client configuration"""

    base_url: str
    store_code: Optional[str] = None
    custom_headers: Dict[str, str] = field(default_factory=dict)
    timeout_seconds: float = MagentoSettings.DEFAULT_TIMEOUT_SECONDS
    enable_debug_logging: bool = False

    def __post_init__(self):
        if not self.base_url or not self.base_url.strip():
            raise ValueError("Base URL cannot be empty")
        if self.timeout_seconds <= 0:
            raise ValueError("Timeout must be positive")

    @property
    def graphql_endpoint(self) -> str:
        url = self.base_url if self.base_url.endswith("/") else f"{self.base_url}/"
        return f"{url}{MagentoSettings.GRAPHQL_PATH}"

    @property
    def headers(self) -> Dict[str, str]:
        """Default request headers; custom headers win over the defaults"""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.store_code:
            headers["Store"] = self.store_code
        headers.update(self.custom_headers or {})
        return headers

    def copy_with(self, **changes) -> "MagentoConfig":
        return replace(self, **changes)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "MagentoConfig":
        return cls(
            base_url=settings.magento_base_url,
            store_code=settings.magento_store_code or None,
            timeout_seconds=settings.magento_timeout_seconds,
            enable_debug_logging=settings.magento_debug,
        )
