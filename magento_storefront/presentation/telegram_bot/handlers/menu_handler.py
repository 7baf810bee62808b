"""
Menu Handler

Handles /start, /help and navigation back to the main menu.
"""

import html
import logging

from telegram import Update
from telegram.ext import Application, CallbackQueryHandler, CommandHandler, ContextTypes

from magento_storefront.container import StorefrontSession, get_container
from magento_storefront.infrastructure.utilities.exceptions import MagentoError, error_handler
from magento_storefront.infrastructure.utilities.i18n import tr
from magento_storefront.presentation.telegram_bot.handlers.common import respond
from magento_storefront.presentation.telegram_bot.keyboards.menu import (
    get_back_to_menu_keyboard,
    get_main_menu_keyboard,
)

logger = logging.getLogger(__name__)

DEFAULT_STORE_NAME = "our store"


class MenuHandler:
    """Handler for the main menu"""

    def __init__(self):
        self._logger = logging.getLogger(self.__class__.__name__)
        self._container = get_container()

    async def _store_name(self, session: StorefrontSession) -> str:
        try:
            config = await session.sdk.store.get_store_config()
        except MagentoError as e:
            self._logger.warning("⚠️ STORE CONFIG UNAVAILABLE: %s", e)
            return DEFAULT_STORE_NAME
        return config.store_name or DEFAULT_STORE_NAME

    @error_handler("start")
    async def start_command(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        user_id = update.effective_user.id
        self._logger.info("🚀 START: user %s", user_id)
        session = self._container.get_session(user_id)

        store_name = await self._store_name(session)
        await respond(
            update,
            tr("WELCOME").format(store=html.escape(store_name)),
            get_main_menu_keyboard(session.cart.item_count),
        )

    @error_handler("help")
    async def help_command(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        await respond(update, tr("HELP"), get_back_to_menu_keyboard())

    @error_handler("main_menu")
    async def handle_main_menu(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        query = update.callback_query
        await query.answer()
        session = self._container.get_session(update.effective_user.id)
        await respond(update, tr("MAIN_MENU"), get_main_menu_keyboard(session.cart.item_count))

    @error_handler("search_help")
    async def handle_search_help(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        await update.callback_query.answer()
        await respond(update, tr("SEARCH_PROMPT"), get_back_to_menu_keyboard())


def register_menu_handlers(application: Application):
    """Register main menu handlers"""
    handler = MenuHandler()

    application.add_handler(CommandHandler("start", handler.start_command))
    application.add_handler(CommandHandler("help", handler.help_command))
    application.add_handler(CallbackQueryHandler(handler.handle_main_menu, pattern="^menu_main$"))
    application.add_handler(
        CallbackQueryHandler(handler.handle_search_help, pattern="^search_help$")
    )

    logger.info("🏠 Menu handlers registered")
