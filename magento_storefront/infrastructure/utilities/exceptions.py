"""
Custom exceptions and error handling for the Magento storefront
"""

import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from telegram import Update
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from magento_storefront.infrastructure.utilities.constants import ErrorCodes

logger = logging.getLogger(__name__)


class StorefrontError(Exception):
    """Base exception for the storefront SDK and bot"""

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.user_message = user_message or ErrorCodes.GENERIC_ERROR_MESSAGE
        self.error_code = error_code or ErrorCodes.GENERAL_ERROR


class ValidationError(StorefrontError):
    """Input validation errors"""

    def __init__(self, message: str, field_name: Optional[str] = None):
        super().__init__(
            message, message, ErrorCodes.VALIDATION_ERROR  # Validation errors are user-friendly
        )
        self.field = field_name


class StorageError(StorefrontError):
    """Key-value persistence errors"""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(
            message, ErrorCodes.STORAGE_MESSAGE, ErrorCodes.STORAGE_ERROR
        )
        self.operation = operation


class MagentoError(StorefrontError):
    """Any failure reported by, or while talking to, the Magento backend"""

    default_user_message = ErrorCodes.GENERIC_ERROR_MESSAGE
    default_error_code = ErrorCodes.MAGENTO_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        original_error: Any = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(
            message,
            user_message or self.default_user_message,
            self.default_error_code,
        )
        self.code = code
        self.original_error = original_error

    def __str__(self) -> str:
        if self.code:
            return f"{self.message} (code: {self.code})"
        return self.message


class AuthenticationError(MagentoError):
    """Missing, invalid or expired customer token"""

    default_user_message = ErrorCodes.AUTHENTICATION_MESSAGE
    default_error_code = ErrorCodes.AUTHENTICATION_ERROR


class NetworkError(MagentoError):
    """Transport failure, timeout or unexpected HTTP status"""

    default_user_message = ErrorCodes.NETWORK_MESSAGE
    default_error_code = ErrorCodes.NETWORK_ERROR


@dataclass
class GraphQLErrorDetail:
    """A single entry of a GraphQL ``errors`` array"""

    message: str
    locations: List[Any] = field(default_factory=list)
    path: List[Any] = field(default_factory=list)
    extensions: Dict[str, Any] = field(default_factory=dict)

    @property
    def category(self) -> Optional[str]:
        return self.extensions.get("category")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GraphQLErrorDetail":
        return cls(
            message=str(data.get("message") or "Unknown GraphQL error"),
            locations=list(data.get("locations") or []),
            path=list(data.get("path") or []),
            extensions=dict(data.get("extensions") or {}),
        )


class GraphQLError(MagentoError):
    """The server rejected the operation at the schema or resolver level"""

    default_error_code = ErrorCodes.GRAPHQL_ERROR

    def __init__(
        self,
        message: str,
        errors: Optional[List[GraphQLErrorDetail]] = None,
        code: Optional[str] = None,
        original_error: Any = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message, code, original_error, user_message or message)
        self.errors = errors or []

    @property
    def category(self) -> Optional[str]:
        for error in self.errors:
            if error.category:
                return error.category
        return None


class NotFoundError(GraphQLError):
    """The addressed entity (usually a cart) no longer exists"""

    default_error_code = ErrorCodes.NOT_FOUND_ERROR


async def handle_error(
    update: Update,
    error: Exception,
    operation: str = "unknown",
) -> None:
    """
    Central error handler for all bot operations
    """
    user_id = update.effective_user.id if update.effective_user else "unknown"

    error_context = {
        "operation": operation,
        "user_id": user_id,
        "error_type": type(error).__name__,
        "error_message": str(error),
    }

    if isinstance(error, StorefrontError):
        logger.warning("Storefront error in %s: %s", operation, error, extra=error_context)
        reply = error.user_message
    else:
        logger.error(
            "Unexpected error in %s: %s",
            operation,
            error,
            extra=error_context,
            exc_info=error,
        )
        reply = ErrorCodes.UNEXPECTED_MESSAGE

    try:
        if update.callback_query and update.callback_query.message:
            await update.callback_query.message.reply_text(reply)
        elif update.message:
            await update.message.reply_text(reply)
    except TelegramError as reply_error:
        logger.error("Failed to send error message: %s", reply_error)


def error_handler(operation: str = "unknown"):
    """
    Decorator for handler methods: storefront errors become a chat reply
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(
            self, update: Update, context: ContextTypes.DEFAULT_TYPE, *args, **kwargs
        ):
            try:
                return await func(self, update, context, *args, **kwargs)
            except StorefrontError as e:
                await handle_error(update, e, operation)
                return None

        return wrapper

    return decorator


async def application_error_handler(
    update: object, context: ContextTypes.DEFAULT_TYPE
) -> None:
    """Last-resort handler registered on the telegram Application"""
    if isinstance(update, Update):
        await handle_error(update, context.error, "application")
    else:
        logger.error("Error outside of an update: %s", context.error, exc_info=context.error)
