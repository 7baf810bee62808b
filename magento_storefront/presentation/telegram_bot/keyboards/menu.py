"""
Menu keyboards for the storefront bot
"""

import logging
from typing import List, Optional

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from magento_storefront.application.dtos.cart_dtos import CartSummary
from magento_storefront.domain.entities.category_entity import Category
from magento_storefront.domain.entities.product_entity import Product, ProductListResult
from magento_storefront.infrastructure.utilities.constants import TelegramSettings
from magento_storefront.infrastructure.utilities.helpers import truncate_text
from magento_storefront.infrastructure.utilities.i18n import tr

logger = logging.getLogger(__name__)

BUTTON_TEXT_LIMIT = 40


def callback_data(prefix: str, *parts: object) -> Optional[str]:
    """``prefix:part:part``, or ``None`` when Telegram would reject it"""
    data = ":".join([prefix, *(str(part) for part in parts)])
    if len(data.encode("utf-8")) > TelegramSettings.CALLBACK_DATA_MAX_LENGTH:
        logger.warning("⚠️ CALLBACK DATA TOO LONG: %s", data)
        return None
    return data


def get_main_menu_keyboard(cart_count: int = 0) -> InlineKeyboardMarkup:
    keyboard = [
        [
            InlineKeyboardButton(tr("BUTTON_CATALOG"), callback_data="catalog"),
            InlineKeyboardButton(tr("BUTTON_SEARCH"), callback_data="search_help"),
        ],
        [InlineKeyboardButton(tr("BUTTON_VIEW_CART").format(count=cart_count), callback_data="cart_view")],
        [
            InlineKeyboardButton(tr("BUTTON_ACCOUNT"), callback_data="account"),
            InlineKeyboardButton(tr("BUTTON_STORE"), callback_data="store_info"),
        ],
    ]
    return InlineKeyboardMarkup(keyboard)


def get_back_to_menu_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        [[InlineKeyboardButton(tr("BUTTON_MAIN_MENU"), callback_data="menu_main")]]
    )


def get_categories_keyboard(
    categories: List[Category], parent: Optional[Category] = None
) -> InlineKeyboardMarkup:
    """Child categories, plus a products button when a parent is shown"""
    keyboard = []
    for category in categories:
        data = callback_data("cat", category.id)
        if data:
            keyboard.append(
                [InlineKeyboardButton(truncate_text(category.name, BUTTON_TEXT_LIMIT), callback_data=data)]
            )

    if parent is not None:
        keyboard.append(
            [
                InlineKeyboardButton(
                    tr("BUTTON_PRODUCTS").format(name=truncate_text(parent.name, BUTTON_TEXT_LIMIT)),
                    callback_data=f"catp:{parent.id}:1",
                )
            ]
        )
        keyboard.append([InlineKeyboardButton(tr("BUTTON_BACK"), callback_data="catalog")])

    keyboard.append([InlineKeyboardButton(tr("BUTTON_MAIN_MENU"), callback_data="menu_main")])
    return InlineKeyboardMarkup(keyboard)


def _product_label(product: Product) -> str:
    price = product.final_price
    label = f"{product.name} · {price}" if price else product.name
    return truncate_text(label, BUTTON_TEXT_LIMIT)


def get_products_keyboard(
    result: ProductListResult, page_prefix: str, back_data: str = "catalog"
) -> InlineKeyboardMarkup:
    """
    One button per product and pagination; ``page_prefix`` is completed with
    ``:<page>`` for the previous and next buttons.
    """
    keyboard = []
    for product in result.products:
        data = callback_data("prod", product.sku)
        if data:
            keyboard.append([InlineKeyboardButton(_product_label(product), callback_data=data)])

    navigation = []
    if result.current_page > 1:
        navigation.append(
            InlineKeyboardButton(
                tr("BUTTON_PREV_PAGE"), callback_data=f"{page_prefix}:{result.current_page - 1}"
            )
        )
    if result.has_next_page:
        navigation.append(
            InlineKeyboardButton(
                tr("BUTTON_NEXT_PAGE"), callback_data=f"{page_prefix}:{result.current_page + 1}"
            )
        )
    if navigation:
        keyboard.append(navigation)

    keyboard.append([InlineKeyboardButton(tr("BUTTON_BACK"), callback_data=back_data)])
    return InlineKeyboardMarkup(keyboard)


def get_product_keyboard(product: Product) -> InlineKeyboardMarkup:
    keyboard = []
    data = callback_data("add", product.sku)
    if data and product.is_in_stock:
        keyboard.append([InlineKeyboardButton(tr("BUTTON_ADD_TO_CART"), callback_data=data)])
    keyboard.append(
        [
            InlineKeyboardButton(tr("BUTTON_VIEW_CART").format(count="…"), callback_data="cart_view"),
            InlineKeyboardButton(tr("BUTTON_MAIN_MENU"), callback_data="menu_main"),
        ]
    )
    return InlineKeyboardMarkup(keyboard)


def get_cart_keyboard(summary: Optional[CartSummary]) -> InlineKeyboardMarkup:
    """Quantity controls per line, then cart-wide actions"""
    keyboard = []
    if summary is not None:
        for line in summary.lines:
            dec = callback_data("cart_dec", line.item_id)
            inc = callback_data("cart_inc", line.item_id)
            rm = callback_data("cart_rm", line.item_id)
            if not (dec and inc and rm):
                continue
            keyboard.append(
                [
                    InlineKeyboardButton("➖", callback_data=dec),
                    InlineKeyboardButton(
                        truncate_text(f"{line.name} × {line.quantity}", BUTTON_TEXT_LIMIT),
                        callback_data=callback_data("prod", line.sku) or "cart_view",
                    ),
                    InlineKeyboardButton("➕", callback_data=inc),
                    InlineKeyboardButton("✖️", callback_data=rm),
                ]
            )

    actions = [InlineKeyboardButton(tr("BUTTON_REFRESH"), callback_data="cart_view")]
    if summary is not None and not summary.is_empty:
        actions.append(InlineKeyboardButton(tr("BUTTON_CLEAR_CART"), callback_data="cart_clear_confirm"))
    keyboard.append(actions)
    keyboard.append([InlineKeyboardButton(tr("BUTTON_MAIN_MENU"), callback_data="menu_main")])
    return InlineKeyboardMarkup(keyboard)


def get_clear_cart_confirmation_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        [
            [
                InlineKeyboardButton(tr("BUTTON_CONFIRM_CLEAR"), callback_data="cart_clear_yes"),
                InlineKeyboardButton(tr("BUTTON_CANCEL"), callback_data="cart_view"),
            ]
        ]
    )
