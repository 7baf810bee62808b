"""
Tests for main application module
"""

import os
from unittest.mock import MagicMock, patch

import pytest

from main import main, setup_bot
from magento_storefront.config import reset_config


@pytest.fixture
def mock_application():
    """Patched Application builder returning a mock application"""
    with patch("main.Application") as mock_app_class:
        application = MagicMock()
        builder = mock_app_class.builder.return_value
        builder.token.return_value.post_shutdown.return_value.build.return_value = application
        yield mock_app_class, application


class TestMainApplication:
    """Test main application"""

    def test_setup_bot_success(self, mock_application):
        """Test the application is built with the token and handlers"""
        mock_app_class, application = mock_application

        with patch("main.setup_logging") as mock_logging, patch(
            "main.register_handlers"
        ) as mock_register:
            result = setup_bot()

        assert result is application
        mock_logging.assert_called_once()
        mock_app_class.builder.return_value.token.assert_called_once_with("test_bot_token_123456789")
        mock_register.assert_called_once_with(application)

    def test_setup_bot_without_token(self, mock_application):
        """Test a missing bot token stops startup"""
        with patch.dict(os.environ, {"BOT_TOKEN": ""}):
            reset_config()
            with patch("main.setup_logging"):
                with pytest.raises(RuntimeError, match="BOT_TOKEN"):
                    setup_bot()

    def test_main_runs_polling(self, mock_application):
        """Test main starts long polling"""
        _, application = mock_application

        with patch("main.setup_logging"), patch("main.register_handlers"):
            main()

        application.run_polling.assert_called_once()

    def test_main_exits_on_startup_failure(self):
        """Test startup errors exit with status 1"""
        with patch("main.setup_bot", side_effect=RuntimeError("BOT_TOKEN is not set")):
            with pytest.raises(SystemExit) as exc_info:
                main()

        assert exc_info.value.code == 1
