"""
Helpers shared by the bot handlers
"""

import logging
from typing import Optional

from telegram import InlineKeyboardMarkup, Update
from telegram.constants import ParseMode
from telegram.error import BadRequest

from magento_storefront.infrastructure.utilities.constants import TelegramSettings
from magento_storefront.infrastructure.utilities.helpers import truncate_text

logger = logging.getLogger(__name__)


async def respond(
    update: Update, text: str, reply_markup: Optional[InlineKeyboardMarkup] = None
) -> None:
    """Edit the message behind a button press, or reply to a command"""
    text = truncate_text(text, TelegramSettings.MAX_MESSAGE_LENGTH)
    query = update.callback_query
    if query is not None:
        try:
            await query.edit_message_text(text, parse_mode=ParseMode.HTML, reply_markup=reply_markup)
        except BadRequest as e:
            # Editing to identical content is rejected; nothing to show then
            if "not modified" not in str(e).lower():
                raise
        return
    if update.effective_message is not None:
        await update.effective_message.reply_text(
            text, parse_mode=ParseMode.HTML, reply_markup=reply_markup
        )
