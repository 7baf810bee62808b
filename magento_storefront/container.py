"""
Simplified dependency injection container for the bot.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from magento_storefront.application.use_cases.cart_identity_store import CartIdentityStore
from magento_storefront.config import Settings, get_config
from magento_storefront.domain.repositories.key_value_store import KeyValueStore
from magento_storefront.infrastructure.database.operations import DatabaseManager
from magento_storefront.infrastructure.magento.magento_config import MagentoConfig
from magento_storefront.infrastructure.repositories.cart_identity_repository import (
    CartIdentityRepository,
)
from magento_storefront.infrastructure.repositories.sqlalchemy_key_value_store import (
    SQLAlchemyKeyValueStore,
)
from magento_storefront.sdk import MagentoSDK

logger = logging.getLogger(__name__)


@dataclass
class StorefrontSession:
    """Everything one chat user talks to the store through"""

    user_id: int
    sdk: MagentoSDK
    cart: CartIdentityStore


class Container:
    """Simple dependency injection container"""

    _instance: Optional["Container"] = None

    def __new__(cls) -> "Container":
        if cls._instance is None:
            cls._instance = super(Container, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self) -> None:
        """Initialize the container"""
        self.config: Settings = get_config()
        self.services: Dict[str, Any] = {}
        self.sessions: Dict[int, StorefrontSession] = {}

    def get_config(self) -> Settings:
        return self.config

    def get_magento_config(self) -> MagentoConfig:
        if "magento_config" not in self.services:
            self.services["magento_config"] = MagentoConfig.from_settings(self.config)
        return self.services["magento_config"]

    def get_db_manager(self) -> DatabaseManager:
        if "db_manager" not in self.services:
            self.services["db_manager"] = DatabaseManager(
                self.config.database_url, self.config.environment
            )
        return self.services["db_manager"]

    def get_key_value_store(self) -> KeyValueStore:
        if "key_value_store" not in self.services:
            self.services["key_value_store"] = SQLAlchemyKeyValueStore(self.get_db_manager())
        return self.services["key_value_store"]

    def set_key_value_store(self, store: KeyValueStore) -> None:
        """Swap the persistence backend, e.g. for an in-memory one"""
        self.services["key_value_store"] = store

    def get_http_client(self) -> httpx.AsyncClient:
        """One connection pool shared by every session"""
        if "http_client" not in self.services:
            self.services["http_client"] = httpx.AsyncClient(
                timeout=self.get_magento_config().timeout_seconds
            )
        return self.services["http_client"]

    def get_session(self, user_id: int) -> StorefrontSession:
        """Get or create the storefront session of a chat user"""
        session = self.sessions.get(user_id)
        if session is None:
            sdk = MagentoSDK(self.get_magento_config(), http_client=self.get_http_client())
            repository = CartIdentityRepository(self.get_key_value_store(), str(user_id))
            session = StorefrontSession(
                user_id=user_id,
                sdk=sdk,
                cart=CartIdentityStore(sdk.cart, sdk.auth, repository),
            )
            self.sessions[user_id] = session
            logger.info("👤 SESSION CREATED: user %s", user_id)
        return session

    async def aclose(self) -> None:
        """Release the shared HTTP pool and the database engine"""
        http_client = self.services.pop("http_client", None)
        if http_client is not None:
            await http_client.aclose()
        db_manager = self.services.get("db_manager")
        if db_manager is not None:
            db_manager.close()
        self.sessions.clear()


def get_container() -> Container:
    """Get the global container instance"""
    return Container()


def reset_container() -> None:
    """Forget the global container; the next ``get_container`` builds a new one"""
    Container._instance = None
