"""Tests for RelayLoggingConfig and configure_logging."""

import logging

import structlog

from relay_metrics.logging import (
    RelayLoggingConfig,
    configure_logging,
    get_logging_config,
    set_logging_config,
)


class TestRelayLoggingConfig:
    """Test suite for RelayLoggingConfig class."""

    def teardown_method(self):
        """Restore default configuration after each test."""
        set_logging_config(RelayLoggingConfig())
        structlog.reset_defaults()

    def test_default_config(self):
        """Test default configuration values."""
        config = RelayLoggingConfig()

        assert config.level == "INFO"
        assert config.json_output is False
        assert config.scrape_debug is False

    def test_level_number(self):
        """Test level names map to stdlib numbers."""
        assert RelayLoggingConfig(level="debug").get_level_number() == logging.DEBUG
        assert RelayLoggingConfig(level="WARNING").get_level_number() == logging.WARNING
        assert RelayLoggingConfig(level="nonsense").get_level_number() == logging.INFO

    def test_dict_round_trip(self):
        """Test to_dict/from_dict preserve every field."""
        config = RelayLoggingConfig(level="DEBUG", json_output=True, scrape_debug=True)

        assert RelayLoggingConfig.from_dict(config.to_dict()) == config

    def test_global_config(self):
        """Test setting and getting global configuration."""
        custom = RelayLoggingConfig(level="DEBUG")

        set_logging_config(custom)

        assert get_logging_config() is custom

    def test_configure_logging_sets_global(self):
        """Test configure_logging installs the given configuration."""
        config = RelayLoggingConfig(level="WARNING", json_output=True)

        configure_logging(config)

        assert get_logging_config() is config
        assert structlog.is_configured()

    def test_configure_logging_filters_level(self, capsys):
        """Test events below the configured level are dropped."""
        configure_logging(RelayLoggingConfig(level="WARNING", json_output=True))
        logger = structlog.get_logger("test")

        logger.info("relay_metrics.test.quiet")
        logger.warning("relay_metrics.test.loud", key="value")

        out = capsys.readouterr().out
        assert "relay_metrics.test.quiet" not in out
        assert '"event": "relay_metrics.test.loud"' in out
        assert '"key": "value"' in out
