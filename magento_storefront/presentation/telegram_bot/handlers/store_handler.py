"""
Store Handler
"""

import html
import logging

from telegram import Update
from telegram.ext import Application, CallbackQueryHandler, CommandHandler, ContextTypes

from magento_storefront.container import get_container
from magento_storefront.infrastructure.utilities.exceptions import error_handler
from magento_storefront.infrastructure.utilities.i18n import tr
from magento_storefront.presentation.telegram_bot.handlers.common import respond
from magento_storefront.presentation.telegram_bot.keyboards.menu import get_back_to_menu_keyboard

logger = logging.getLogger(__name__)


class StoreHandler:
    """Store configuration and store views"""

    def __init__(self):
        self._logger = logging.getLogger(self.__class__.__name__)
        self._container = get_container()

    @error_handler("store_info")
    async def store_command(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        if update.callback_query:
            await update.callback_query.answer()
        session = self._container.get_session(update.effective_user.id)

        config = await session.sdk.store.get_store_config()
        stores = await session.sdk.store.get_stores()

        lines = [
            tr("STORE_TITLE").format(
                name=html.escape(config.store_name or "-"),
                code=html.escape(config.code or "-"),
                currency=html.escape(
                    config.default_display_currency_code or config.base_currency_code or "-"
                ),
                locale=html.escape(config.locale or "-"),
            )
        ]
        if stores:
            lines.append("")
            lines.append(tr("STORE_LIST"))
            lines.extend(
                tr("STORE_LINE").format(name=html.escape(store.name), code=html.escape(store.code))
                for store in stores
            )
        await respond(update, "\n".join(lines), get_back_to_menu_keyboard())


def register_store_handlers(application: Application):
    handler = StoreHandler()

    application.add_handler(CommandHandler("store", handler.store_command))
    application.add_handler(CallbackQueryHandler(handler.store_command, pattern="^store_info$"))

    logger.info("🏪 Store handlers registered")
