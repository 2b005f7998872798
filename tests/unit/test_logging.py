"""Tests for logging setup."""

from __future__ import annotations

import logging
from unittest.mock import patch

from fluentsearch.config.settings import ObservabilitySettings
from fluentsearch.observability.logging import setup_logging


class TestSetupLogging:
    def test_configures_root_handler_and_level(self) -> None:
        with patch.object(logging, "basicConfig") as basic_config:
            setup_logging(ObservabilitySettings(log_level="debug", log_format="console"))

        kwargs = basic_config.call_args.kwargs
        assert kwargs["level"] == logging.DEBUG
        assert len(kwargs["handlers"]) == 1

    def test_defaults_without_settings(self) -> None:
        with patch.object(logging, "basicConfig") as basic_config:
            setup_logging()
        assert basic_config.call_args.kwargs["level"] == logging.INFO
