"""Tests for logger configuration."""

import pytest

from tilebench.logging import LoggerConfig, LogLevel


class TestLoggerConfig:
    def test_defaults(self):
        config = LoggerConfig()
        assert config.base_level == LogLevel.INFO
        assert config.do_stderr is True
        assert config.flush_interval_s == 1.0
        assert config.buffer_size == 10000
        assert "%(message)s" in config.str_format

    def test_custom_values(self):
        config = LoggerConfig(
            base_level=LogLevel.TRACE,
            do_stderr=False,
            str_format="%(levelname)s %(message)s",
            flush_interval_s=0.5,
            buffer_size=3,
        )
        assert config.base_level == LogLevel.TRACE
        assert config.buffer_size == 3

    @pytest.mark.parametrize("interval", [0.0, -1.0])
    def test_invalid_flush_interval(self, interval):
        with pytest.raises(ValueError):
            LoggerConfig(flush_interval_s=interval)

    def test_invalid_buffer_size(self):
        with pytest.raises(ValueError):
            LoggerConfig(buffer_size=0)

    def test_format_without_message(self):
        with pytest.raises(ValueError):
            LoggerConfig(str_format="%(asctime)s")

    def test_levels_ordered(self):
        assert LogLevel.TRACE < LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARNING < LogLevel.ERROR

    def test_frozen(self):
        config = LoggerConfig()
        with pytest.raises(AttributeError):
            config.base_level = LogLevel.TRACE
