"""
Account Handler

Login with guest cart merge, registration, logout, profile and password reset.
"""

import html
import logging
from typing import List

from telegram import Update
from telegram.error import TelegramError
from telegram.ext import Application, CallbackQueryHandler, CommandHandler, ContextTypes

from magento_storefront.container import StorefrontSession, get_container
from magento_storefront.domain.entities.customer_entity import Customer
from magento_storefront.infrastructure.utilities.exceptions import (
    StorefrontError,
    error_handler,
)
from magento_storefront.infrastructure.utilities.i18n import tr
from magento_storefront.presentation.telegram_bot.handlers.common import respond
from magento_storefront.presentation.telegram_bot.keyboards.menu import (
    get_back_to_menu_keyboard,
    get_main_menu_keyboard,
)

logger = logging.getLogger(__name__)


def format_profile(customer: Customer) -> str:
    parts: List[str] = [
        tr("PROFILE_TITLE").format(
            name=html.escape(customer.full_name or "-"),
            email=html.escape(customer.email or ""),
        )
    ]
    addresses = customer.addresses or []
    if not addresses:
        parts.append(tr("PROFILE_NO_ADDRESSES"))
    for index, address in enumerate(addresses, start=1):
        parts.append(
            tr("PROFILE_ADDRESS").format(
                index=index,
                marker=tr("PROFILE_DEFAULT_SHIPPING") if address.default_shipping else "",
                lines="\n".join(html.escape(line) for line in address.format_lines()),
            )
        )
    return "\n\n".join(parts)


class AccountHandler:
    """Handler for customer account commands"""

    def __init__(self):
        self._logger = logging.getLogger(self.__class__.__name__)
        self._container = get_container()

    async def _forget_credentials(self, update: Update) -> None:
        """Delete a message that carried a password"""
        if update.message is None:
            return
        try:
            await update.message.delete()
        except TelegramError as e:
            self._logger.warning("⚠️ COULD NOT DELETE CREDENTIALS MESSAGE: %s", e)

    async def _prepare_merge(self, session: StorefrontSession) -> None:
        """Touch the guest cart before login; a failure only forfeits the merge"""
        try:
            await session.cart.prepare_guest_cart_for_login()
        except StorefrontError as e:
            self._logger.warning(
                "⚠️ GUEST CART NOT PREPARED: user %s: %s", session.user_id, e
            )

    async def _finish_login(self, update: Update, session: StorefrontSession) -> None:
        result = await session.cart.sync_after_login()
        if result.success:
            text = tr("LOGIN_SUCCESS").format(count=session.cart.item_count)
        else:
            self._logger.warning(
                "⚠️ CART MERGE FAILED: user %s: %s", session.user_id, result.error
            )
            error_text = result.error.user_message if result.error else ""
            text = tr("LOGIN_MERGE_WARNING").format(error=html.escape(error_text))
        await respond(update, text, get_main_menu_keyboard(session.cart.item_count))

    @error_handler("login")
    async def login_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        args = context.args or []
        if len(args) != 2:
            await respond(update, tr("LOGIN_USAGE"))
            return

        user_id = update.effective_user.id
        session = self._container.get_session(user_id)
        if session.sdk.auth.is_authenticated:
            await respond(update, tr("LOGIN_ALREADY"))
            return

        email, password = args
        try:
            await self._prepare_merge(session)
            await session.sdk.auth.login(email, password)
        finally:
            await self._forget_credentials(update)

        self._logger.info("🔐 LOGGED IN: user %s", user_id)
        await self._finish_login(update, session)

    @error_handler("register")
    async def register_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        args = context.args or []
        if len(args) < 4:
            await respond(update, tr("REGISTER_USAGE"))
            return

        user_id = update.effective_user.id
        session = self._container.get_session(user_id)
        if session.sdk.auth.is_authenticated:
            await respond(update, tr("LOGIN_ALREADY"))
            return

        email, password, firstname = args[0], args[1], args[2]
        lastname = " ".join(args[3:])
        try:
            await self._prepare_merge(session)
            customer = await session.sdk.auth.register(email, password, firstname, lastname)
        finally:
            await self._forget_credentials(update)

        self._logger.info("📝 REGISTERED: user %s", user_id)
        await respond(
            update, tr("REGISTER_SUCCESS").format(name=html.escape(customer.full_name))
        )
        await self._finish_login(update, session)

    @error_handler("logout")
    async def logout_command(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        user_id = update.effective_user.id
        session = self._container.get_session(user_id)
        if not session.sdk.auth.is_authenticated:
            await respond(update, tr("LOGOUT_NOT_SIGNED_IN"))
            return

        await session.sdk.auth.logout(revoke=True)
        await session.cart.clear()
        self._logger.info("👋 LOGGED OUT: user %s", user_id)
        await respond(update, tr("LOGOUT_SUCCESS"), get_main_menu_keyboard(0))

    @error_handler("profile")
    async def profile_command(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        if update.callback_query:
            await update.callback_query.answer()
        session = self._container.get_session(update.effective_user.id)
        if not session.sdk.auth.is_authenticated:
            await respond(update, tr("LOGIN_REQUIRED") + "\n\n" + tr("HELP"), get_back_to_menu_keyboard())
            return

        customer = await session.sdk.profile.get_profile()
        await respond(update, format_profile(customer), get_back_to_menu_keyboard())

    @error_handler("forgot_password")
    async def forgot_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        args = context.args or []
        if len(args) != 1:
            await respond(update, tr("FORGOT_USAGE"))
            return

        session = self._container.get_session(update.effective_user.id)
        await session.sdk.auth.forgot_password(args[0])
        await respond(update, tr("FORGOT_SENT"))


def register_account_handlers(application: Application):
    """Register account handlers"""
    handler = AccountHandler()

    application.add_handler(CommandHandler("login", handler.login_command))
    application.add_handler(CommandHandler("register", handler.register_command))
    application.add_handler(CommandHandler("logout", handler.logout_command))
    application.add_handler(CommandHandler("profile", handler.profile_command))
    application.add_handler(CommandHandler("forgot", handler.forgot_command))
    application.add_handler(CallbackQueryHandler(handler.profile_command, pattern="^account$"))

    logger.info("👤 Account handlers registered")
