"""
Cart Handler

Shows the cart and changes line quantities through the cart identity store.
"""

import html
import logging
from typing import Optional

from telegram import Update
from telegram.ext import Application, CallbackQueryHandler, CommandHandler, ContextTypes

from magento_storefront.application.dtos.cart_dtos import CartSummary
from magento_storefront.container import StorefrontSession, get_container
from magento_storefront.domain.entities.cart_entity import Cart
from magento_storefront.infrastructure.utilities.exceptions import error_handler
from magento_storefront.infrastructure.utilities.i18n import tr
from magento_storefront.presentation.telegram_bot.handlers.common import respond
from magento_storefront.presentation.telegram_bot.keyboards.menu import (
    get_cart_keyboard,
    get_clear_cart_confirmation_keyboard,
)

logger = logging.getLogger(__name__)


def format_cart(summary: Optional[CartSummary]) -> str:
    if summary is None or summary.is_empty:
        return tr("CART_EMPTY")

    lines = [tr("CART_TITLE"), ""]
    for line in summary.lines:
        lines.append(
            tr("CART_LINE").format(
                name=html.escape(line.name),
                quantity=line.quantity,
                total=line.row_total or tr("PRICE_UNKNOWN"),
            )
        )
    lines.append("")
    lines.append(tr("CART_ITEM_COUNT").format(count=summary.total_quantity))
    if summary.grand_total:
        lines.append(tr("CART_TOTAL").format(total=summary.grand_total))
    return "\n".join(lines)


class CartHandler:
    """Handler for cart operations"""

    def __init__(self):
        self._logger = logging.getLogger(self.__class__.__name__)
        self._container = get_container()

    async def _current_cart(self, session: StorefrontSession) -> Optional[Cart]:
        """Re-read the remote cart; start one when there is nothing to show"""
        cart = await session.cart.refresh()
        if cart is None:
            await session.cart.resolve_active_cart()
            cart = session.cart.snapshot
        return cart

    async def _show(self, update: Update, cart: Optional[Cart], notice: Optional[str] = None) -> None:
        summary = CartSummary.from_cart(cart) if cart else None
        text = format_cart(summary)
        if notice:
            text = f"{notice}\n\n{text}"
        await respond(update, text, get_cart_keyboard(summary))

    @error_handler("view_cart")
    async def handle_view_cart(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        if update.callback_query:
            await update.callback_query.answer()
        user_id = update.effective_user.id
        session = self._container.get_session(user_id)

        cart = await self._current_cart(session)
        self._logger.info(
            "🛒 VIEW CART: user %s cart %s items %d",
            user_id,
            session.cart.active_cart_id,
            session.cart.item_count,
        )
        await self._show(update, cart)

    async def _change_quantity(self, update: Update, delta: int) -> None:
        query = update.callback_query
        await query.answer()
        item_id = query.data.split(":", 1)[1]
        session = self._container.get_session(update.effective_user.id)

        cart = session.cart.snapshot or await self._current_cart(session)
        item = cart.find_item(item_id) if cart else None
        if item is None:
            await self._show(update, cart, tr("CART_ITEM_GONE"))
            return

        new_quantity = item.quantity + delta
        if new_quantity < 1:
            cart = await session.cart.remove_item(item_id)
        else:
            cart = await session.cart.update_item(item_id, new_quantity)
        await self._show(update, cart)

    @error_handler("increase_item")
    async def handle_increase(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        await self._change_quantity(update, 1)

    @error_handler("decrease_item")
    async def handle_decrease(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        await self._change_quantity(update, -1)

    @error_handler("remove_item")
    async def handle_remove(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        query = update.callback_query
        await query.answer()
        item_id = query.data.split(":", 1)[1]
        session = self._container.get_session(update.effective_user.id)

        cart = await session.cart.remove_item(item_id)
        await self._show(update, cart)

    @error_handler("clear_cart_confirm")
    async def handle_clear_cart_confirm(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        await update.callback_query.answer()
        await respond(update, tr("CART_CLEAR_CONFIRM"), get_clear_cart_confirmation_keyboard())

    @error_handler("clear_cart")
    async def handle_clear_cart(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        """Remove every line; the cart itself stays active"""
        query = update.callback_query
        await query.answer()
        user_id = update.effective_user.id
        session = self._container.get_session(user_id)

        cart = await self._current_cart(session)
        for item in list(cart.items if cart else []):
            cart = await session.cart.remove_item(item.id)

        self._logger.info("🗑️ CART CLEARED: user %s", user_id)
        await self._show(update, cart, tr("CART_CLEARED"))


def register_cart_handlers(application: Application):
    """Register all cart-related handlers"""
    cart_handler = CartHandler()

    application.add_handler(CommandHandler("cart", cart_handler.handle_view_cart))
    application.add_handler(
        CallbackQueryHandler(cart_handler.handle_view_cart, pattern="^cart_view$")
    )
    application.add_handler(
        CallbackQueryHandler(cart_handler.handle_increase, pattern="^cart_inc:")
    )
    application.add_handler(
        CallbackQueryHandler(cart_handler.handle_decrease, pattern="^cart_dec:")
    )
    application.add_handler(
        CallbackQueryHandler(cart_handler.handle_remove, pattern="^cart_rm:")
    )
    application.add_handler(
        CallbackQueryHandler(cart_handler.handle_clear_cart_confirm, pattern="^cart_clear_confirm$")
    )
    application.add_handler(
        CallbackQueryHandler(cart_handler.handle_clear_cart, pattern="^cart_clear_yes$")
    )

    logger.info("🛒 Cart handlers registered")
