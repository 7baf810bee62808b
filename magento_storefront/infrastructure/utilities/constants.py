"""
Application constants for the Magento storefront

Centralizes magic numbers and hard-coded strings used across the SDK,
persistence layer and the demo bot.
"""

from typing import Final


class MagentoSettings:
    """GraphQL client defaults"""

    DEFAULT_TIMEOUT_SECONDS: Final[int] = 30
    GRAPHQL_PATH: Final[str] = "graphql"
    DEFAULT_PAGE_SIZE: Final[int] = 20
    DEFAULT_CURRENT_PAGE: Final[int] = 1
    DEFAULT_SORT: Final[str] = "relevance"
    MAX_STREET_LINES: Final[int] = 2


class GraphQLErrorCategories:
    """Values of ``extensions.category`` returned by Magento"""

    NO_SUCH_ENTITY: Final[str] = "graphql-no-such-entity"
    AUTHENTICATION: Final[str] = "graphql-authentication"

    NOT_FOUND_MESSAGE_PREFIX: Final[str] = "Could not find"


class StorageKeys:
    """Key-value store layout"""

    CART_IDENTITY: Final[str] = "cart_identity"
    NAMESPACE_SEPARATOR: Final[str] = ":"
    MAX_KEY_LENGTH: Final[int] = 255


# Database configuration constants
class DatabaseSettings:
    """Database connection and pool configuration"""

    POOL_RECYCLE_SECONDS: Final[int] = 3600  # 1 hour

    PRODUCTION_POOL_SIZE: Final[int] = 20
    PRODUCTION_MAX_OVERFLOW: Final[int] = 30

    DEVELOPMENT_POOL_SIZE: Final[int] = 5
    DEVELOPMENT_MAX_OVERFLOW: Final[int] = 10

    SQLITE_TIMEOUT_SECONDS: Final[int] = 30


# Logging configuration constants
class LoggingSettings:
    """Logging file sizes and rotation settings"""

    MAX_LOG_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT: Final[int] = 5

    MAIN_LOG_FILE: Final[str] = "storefront.log"
    ERROR_LOG_FILE: Final[str] = "errors.log"
    JSON_LOG_FILE: Final[str] = "storefront.json.log"
    PERFORMANCE_LOG_FILE: Final[str] = "performance.log"

    NOISY_LOGGERS: Final[tuple] = ("httpx", "httpcore", "sqlalchemy", "telegram")


class PerformanceSettings:
    """Performance thresholds"""

    SLOW_REQUEST_THRESHOLD_MS: Final[int] = 2000
    SLOW_QUERY_THRESHOLD_MS: Final[int] = 1000


class ErrorCodes:
    """Error codes carried by StorefrontError subclasses"""

    GENERAL_ERROR: Final[str] = "GENERAL_ERROR"
    MAGENTO_ERROR: Final[str] = "MAGENTO_ERROR"
    AUTHENTICATION_ERROR: Final[str] = "AUTHENTICATION_ERROR"
    GRAPHQL_ERROR: Final[str] = "GRAPHQL_ERROR"
    NOT_FOUND_ERROR: Final[str] = "NOT_FOUND_ERROR"
    NETWORK_ERROR: Final[str] = "NETWORK_ERROR"
    VALIDATION_ERROR: Final[str] = "VALIDATION_ERROR"
    STORAGE_ERROR: Final[str] = "STORAGE_ERROR"

    GENERIC_ERROR_MESSAGE: Final[str] = "An error occurred. Please try again."
    AUTHENTICATION_MESSAGE: Final[str] = "Please log in with /login and try again."
    NETWORK_MESSAGE: Final[str] = (
        "The store is not reachable right now. Please try again in a moment."
    )
    STORAGE_MESSAGE: Final[str] = (
        "Sorry, there was a problem with our system. Please try again in a moment."
    )
    UNEXPECTED_MESSAGE: Final[str] = (
        "Sorry, something went wrong. Please try again in a few minutes."
    )


class TelegramSettings:
    """Telegram limits used by the demo bot"""

    MAX_MESSAGE_LENGTH: Final[int] = 4096
    CALLBACK_DATA_MAX_LENGTH: Final[int] = 64
    PRODUCTS_PER_PAGE: Final[int] = 8
    ALLOWED_UPDATE_TYPES: Final[list] = ["message", "callback_query"]
