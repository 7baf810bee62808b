#!/usr/bin/env python3
"""
Entry point for the Magento storefront Telegram bot (long polling)
"""

import logging
import sys

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from telegram.ext import Application  # noqa: E402

from magento_storefront.config import get_config  # noqa: E402
from magento_storefront.container import get_container  # noqa: E402
from magento_storefront.infrastructure.logging import (  # noqa: E402
    LoggingConfigOptions,
    get_structured_logger,
    setup_logging,
)
from magento_storefront.infrastructure.utilities.constants import (  # noqa: E402
    TelegramSettings,
)
from magento_storefront.infrastructure.utilities.exceptions import (  # noqa: E402
    StorageError,
)
from magento_storefront.presentation.telegram_bot.handlers import (  # noqa: E402
    register_handlers,
)


async def _shutdown(_: Application) -> None:
    await get_container().aclose()


def setup_bot() -> Application:
    """Setup and configure the bot application"""
    config = get_config()
    setup_logging(LoggingConfigOptions(log_level=config.log_level, log_dir=config.log_dir))
    logger = logging.getLogger(__name__)
    get_structured_logger(__name__).info(
        "bot_starting",
        environment=config.environment,
        magento_base_url=config.magento_base_url,
        store_code=config.magento_store_code,
    )

    if not config.bot_token:
        raise RuntimeError("BOT_TOKEN is not set")

    container = get_container()
    container.get_db_manager().create_tables()
    logger.info("✅ Database ready")

    application = Application.builder().token(config.bot_token).post_shutdown(_shutdown).build()
    register_handlers(application)
    logger.info("✅ Handlers registered")
    return application


def main() -> None:
    try:
        application = setup_bot()
    except (RuntimeError, StorageError) as e:
        logging.getLogger(__name__).critical("💥 STARTUP FAILED: %s", e)
        sys.exit(1)

    logging.getLogger(__name__).info("🤖 Bot is polling for updates")
    application.run_polling(allowed_updates=TelegramSettings.ALLOWED_UPDATE_TYPES)


if __name__ == "__main__":
    main()
