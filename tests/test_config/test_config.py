"""
Tests for registry configuration.
"""

import io
import logging

import pytest
from pydantic import ValidationError

from boxer.config import DEFAULT_DEV, DEFAULT_PROD, BoxerConfig
from boxer.logging import LogFormat, LogLevel, TextFormatter


class TestBoxerConfig:
    def test_defaults(self):
        config = BoxerConfig()
        assert config.default_view == "base"
        assert config.strict_results
        assert config.log_shipments
        assert config.log_level == LogLevel.INFO
        assert config.log_format == LogFormat.JSON

    def test_frozen(self):
        config = BoxerConfig()
        with pytest.raises(ValidationError):
            config.default_view = "other"

    def test_empty_default_view_rejected(self):
        with pytest.raises(ValidationError):
            BoxerConfig(default_view="")

    def test_level_and_format_are_case_insensitive(self):
        config = BoxerConfig(log_level="debug", log_format="TEXT")
        assert config.log_level == LogLevel.DEBUG
        assert config.log_format == LogFormat.TEXT

    def test_profiles(self):
        assert DEFAULT_PROD.strict_results
        assert DEFAULT_PROD.log_format == LogFormat.JSON
        assert not DEFAULT_DEV.strict_results
        assert DEFAULT_DEV.log_level == LogLevel.DEBUG


class TestEnvironment:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in (
            "BOXER_DEFAULT_VIEW",
            "BOXER_STRICT_RESULTS",
            "BOXER_LOG_SHIPMENTS",
            "BOXER_LOG_LEVEL",
            "BOXER_LOG_FORMAT",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_empty_environment_gives_defaults(self):
        config = BoxerConfig()
        assert config.default_view == "base"
        assert config.strict_results

    def test_reads_variables(self, monkeypatch):
        monkeypatch.setenv("BOXER_DEFAULT_VIEW", "summary")
        monkeypatch.setenv("BOXER_STRICT_RESULTS", "no")
        monkeypatch.setenv("BOXER_LOG_SHIPMENTS", "0")
        monkeypatch.setenv("BOXER_LOG_LEVEL", "warning")
        monkeypatch.setenv("BOXER_LOG_FORMAT", "text")
        monkeypatch.setenv("UNRELATED", "ignored")

        config = BoxerConfig()
        assert config.default_view == "summary"
        assert not config.strict_results
        assert not config.log_shipments
        assert config.log_level == LogLevel.WARNING
        assert config.log_format == LogFormat.TEXT

    def test_lowercase_variable_names(self, monkeypatch):
        monkeypatch.setenv("boxer_default_view", "compact")
        assert BoxerConfig().default_view == "compact"

    def test_keyword_arguments_beat_environment(self, monkeypatch):
        monkeypatch.setenv("BOXER_DEFAULT_VIEW", "summary")
        assert BoxerConfig(default_view="full").default_view == "full"

    def test_invalid_boolean(self, monkeypatch):
        monkeypatch.setenv("BOXER_STRICT_RESULTS", "maybe")
        with pytest.raises(ValidationError):
            BoxerConfig()

    def test_invalid_level(self, monkeypatch):
        monkeypatch.setenv("BOXER_LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            BoxerConfig()


class TestConfigureLogging:
    def test_installs_handler_with_config_format(self):
        config = BoxerConfig(log_level="warning", log_format="text")
        root = logging.getLogger("boxer")
        try:
            config.configure_logging(output=io.StringIO(), use_colors=False)
            assert root.level == logging.WARNING
            assert isinstance(root.handlers[0].formatter, TextFormatter)
        finally:
            root.handlers.clear()
            root.setLevel(logging.NOTSET)
            root.propagate = True
