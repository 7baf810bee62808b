"""
Test configuration and fixtures for the Magento storefront
"""

import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from telegram import CallbackQuery, Message, Update, User

from magento_storefront.config import reset_config
from magento_storefront.container import reset_container
from magento_storefront.infrastructure.database.operations import reset_db_manager
from magento_storefront.infrastructure.repositories.in_memory_key_value_store import (
    InMemoryKeyValueStore,
)


@pytest.fixture(autouse=True)
def mock_env():
    """Mock environment variables for testing"""
    test_env = {
        "MAGENTO_BASE_URL": "https://shop.example.com",
        "MAGENTO_STORE_CODE": "default",
        "BOT_TOKEN": "test_bot_token_123456789",
        "DATABASE_URL": "sqlite:///:memory:",
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "DEBUG",
    }

    with patch.dict(os.environ, test_env, clear=True):
        reset_config()
        reset_db_manager()
        reset_container()
        yield test_env
        reset_container()
        reset_db_manager()
        reset_config()


@pytest.fixture
def kv_store():
    """Empty in-memory key-value store"""
    return InMemoryKeyValueStore()


@pytest.fixture
def mock_update():
    """Command update from user 123456789"""
    update = MagicMock(spec=Update)
    update.effective_user = MagicMock(spec=User)
    update.effective_user.id = 123456789
    update.callback_query = None
    update.message = MagicMock(spec=Message)
    update.message.reply_text = AsyncMock()
    update.message.delete = AsyncMock()
    update.effective_message = update.message
    return update


@pytest.fixture
def mock_callback_update():
    """Button press update from user 123456789"""
    update = MagicMock(spec=Update)
    update.effective_user = MagicMock(spec=User)
    update.effective_user.id = 123456789
    update.message = None
    query = MagicMock(spec=CallbackQuery)
    query.answer = AsyncMock()
    query.edit_message_text = AsyncMock()
    query.message = MagicMock(spec=Message)
    query.message.reply_text = AsyncMock()
    query.data = ""
    update.callback_query = query
    update.effective_message = query.message
    return update


@pytest.fixture
def mock_context():
    """Mock context for testing"""
    context = MagicMock()
    context.args = []
    context.user_data = {}
    context.bot_data = {}
    context.chat_data = {}
    return context
