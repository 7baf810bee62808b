"""
Telegram Bot Handlers

Central registration point for all handlers.
"""

from telegram.ext import Application

from magento_storefront.infrastructure.utilities.exceptions import application_error_handler

from .account_handler import register_account_handlers
from .cart_handler import register_cart_handlers
from .catalog_handler import register_catalog_handlers
from .menu_handler import register_menu_handlers
from .store_handler import register_store_handlers


def register_handlers(application: Application):
    """Register all bot handlers"""
    register_menu_handlers(application)
    register_catalog_handlers(application)
    register_cart_handlers(application)
    register_account_handlers(application)
    register_store_handlers(application)
    application.add_error_handler(application_error_handler)
