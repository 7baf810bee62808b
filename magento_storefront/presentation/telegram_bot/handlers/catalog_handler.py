"""
Catalog Handler

Category browsing, product details, search and "add to cart".
"""

import html
import logging
from typing import List

from telegram import Update
from telegram.ext import Application, CallbackQueryHandler, CommandHandler, ContextTypes

from magento_storefront.container import get_container
from magento_storefront.domain.entities.category_entity import Category
from magento_storefront.domain.entities.product_entity import Product, ProductListResult
from magento_storefront.infrastructure.utilities.constants import TelegramSettings
from magento_storefront.infrastructure.utilities.exceptions import error_handler
from magento_storefront.infrastructure.utilities.i18n import tr
from magento_storefront.presentation.telegram_bot.handlers.common import respond
from magento_storefront.presentation.telegram_bot.keyboards.menu import (
    get_back_to_menu_keyboard,
    get_categories_keyboard,
    get_main_menu_keyboard,
    get_product_keyboard,
    get_products_keyboard,
)

logger = logging.getLogger(__name__)

LAST_SEARCH_KEY = "last_search"


def _top_level(tree: List[Category]) -> List[Category]:
    """Skip a lone root category such as "Default Category" """
    if len(tree) == 1 and tree[0].has_children:
        return tree[0].children
    return tree


def _listing_text(title_key: str, result: ProductListResult, **extra: str) -> str:
    if not result.products:
        return tr("PRODUCTS_EMPTY")
    return tr(title_key).format(
        page=result.current_page, pages=result.total_pages, total=result.total_count, **extra
    )


def format_product(product: Product) -> str:
    price = product.final_price
    return tr("PRODUCT_DETAILS").format(
        name=html.escape(product.name),
        sku=html.escape(product.sku),
        price=price if price else tr("PRICE_UNKNOWN"),
        stock=tr("IN_STOCK") if product.is_in_stock else tr("OUT_OF_STOCK"),
    )


class CatalogHandler:
    """Handler for catalog browsing"""

    def __init__(self):
        self._logger = logging.getLogger(self.__class__.__name__)
        self._container = get_container()

    @error_handler("catalog")
    async def handle_catalog(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        if update.callback_query:
            await update.callback_query.answer()
        session = self._container.get_session(update.effective_user.id)

        categories = _top_level(await session.sdk.categories.get_category_tree())
        if not categories:
            await respond(update, tr("CATALOG_EMPTY"), get_back_to_menu_keyboard())
            return
        await respond(update, tr("CATALOG_TITLE"), get_categories_keyboard(categories))

    @error_handler("category")
    async def handle_category(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        query = update.callback_query
        await query.answer()
        category_id = query.data.split(":", 1)[1]
        session = self._container.get_session(update.effective_user.id)

        category = await session.sdk.categories.get_category_by_id(category_id)
        if category is None:
            await respond(update, tr("CATEGORY_NOT_FOUND"), get_back_to_menu_keyboard())
            return

        self._logger.info("📂 CATEGORY: %s (%s)", category.name, category.id)
        await respond(
            update,
            tr("CATEGORY_TITLE").format(name=html.escape(category.name)),
            get_categories_keyboard(category.children, parent=category),
        )

    @error_handler("category_products")
    async def handle_category_products(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        query = update.callback_query
        await query.answer()
        _, category_id, page = query.data.split(":")
        session = self._container.get_session(update.effective_user.id)

        result = await session.sdk.products.get_products_by_category_id(
            category_id,
            page_size=TelegramSettings.PRODUCTS_PER_PAGE,
            current_page=int(page),
        )
        await respond(
            update,
            _listing_text("PRODUCTS_TITLE", result),
            get_products_keyboard(result, f"catp:{category_id}", back_data=f"cat:{category_id}"),
        )

    @error_handler("product")
    async def handle_product(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        query = update.callback_query
        await query.answer()
        sku = query.data.split(":", 1)[1]
        session = self._container.get_session(update.effective_user.id)

        product = await session.sdk.products.get_product_by_sku(sku)
        if product is None:
            await respond(update, tr("PRODUCT_NOT_FOUND"), get_back_to_menu_keyboard())
            return
        await respond(update, format_product(product), get_product_keyboard(product))

    @error_handler("add_to_cart")
    async def handle_add_to_cart(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        query = update.callback_query
        await query.answer()
        user_id = update.effective_user.id
        sku = query.data.split(":", 1)[1]
        self._logger.info("🛒 ADD TO CART: user %s sku %s", user_id, sku)
        session = self._container.get_session(user_id)

        cart = await session.cart.add_item(sku, 1)
        await respond(
            update,
            tr("ADD_SUCCESS").format(sku=html.escape(sku), count=cart.item_count),
            get_main_menu_keyboard(cart.item_count),
        )

    @error_handler("search")
    async def search_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        text = " ".join(context.args or []).strip()
        if not text:
            await respond(update, tr("SEARCH_USAGE"))
            return
        context.user_data[LAST_SEARCH_KEY] = text
        await self._show_search_page(update, text, 1)

    @error_handler("search_page")
    async def handle_search_page(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        query = update.callback_query
        await query.answer()
        text = context.user_data.get(LAST_SEARCH_KEY)
        if not text:
            await respond(update, tr("SEARCH_EXPIRED"), get_back_to_menu_keyboard())
            return
        await self._show_search_page(update, text, int(query.data.split(":", 1)[1]))

    async def _show_search_page(self, update: Update, text: str, page: int) -> None:
        session = self._container.get_session(update.effective_user.id)
        result = await session.sdk.search.search_products(
            text, page_size=TelegramSettings.PRODUCTS_PER_PAGE, current_page=page
        )
        self._logger.info("🔍 SEARCH: %r page %d -> %d results", text, page, result.total_count)
        await respond(
            update,
            _listing_text("SEARCH_RESULTS", result, query=html.escape(text)),
            get_products_keyboard(result, "srch", back_data="menu_main"),
        )


def register_catalog_handlers(application: Application):
    """Register catalog handlers"""
    handler = CatalogHandler()

    application.add_handler(CommandHandler("catalog", handler.handle_catalog))
    application.add_handler(CommandHandler("search", handler.search_command))
    application.add_handler(CallbackQueryHandler(handler.handle_catalog, pattern="^catalog$"))
    application.add_handler(CallbackQueryHandler(handler.handle_category, pattern="^cat:"))
    application.add_handler(
        CallbackQueryHandler(handler.handle_category_products, pattern=r"^catp:\d+:\d+$")
    )
    application.add_handler(CallbackQueryHandler(handler.handle_product, pattern="^prod:"))
    application.add_handler(CallbackQueryHandler(handler.handle_add_to_cart, pattern="^add:"))
    application.add_handler(CallbackQueryHandler(handler.handle_search_page, pattern=r"^srch:\d+$"))

    logger.info("📚 Catalog handlers registered")
