"""Tests for shapeguard.config and shapeguard.logs."""

import threading

import pytest
import structlog

from shapeguard import ShapeValidator, configure_logging
from shapeguard.config import Settings, get_settings
from shapeguard.logs import reset_logging


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    reset_logging()
    get_settings.cache_clear()


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SHAPEGUARD_LOG_LEVEL", raising=False)
        monkeypatch.delenv("SHAPEGUARD_DEBUG", raising=False)
        settings = Settings(_env_file=None)
        assert settings.LOG_LEVEL == "warning"
        assert settings.DEBUG is False

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("SHAPEGUARD_LOG_LEVEL", "debug")
        monkeypatch.setenv("SHAPEGUARD_DEBUG", "true")
        get_settings.cache_clear()
        settings = get_settings()
        assert settings.LOG_LEVEL == "debug"
        assert settings.DEBUG is True

    def test_cached(self):
        assert get_settings() is get_settings()


class TestUnconfiguredLogging:
    """Without configuration the package writes nothing of its own."""

    def test_silent_check_is_quiet(self, capsys):
        structlog.reset_defaults()
        validator = ShapeValidator(silent=True).is_string("a").is_number("b")
        validator.check({"a": "x", "b": 1})
        validator.check({"a": 1, "c": 2})
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_warnings_are_quiet(self, capsys):
        structlog.reset_defaults()
        validator = ShapeValidator(silent=True).is_satisfy("n", lambda x: x > 0).is_object("lock")
        validator.check({"n": "abc", "lock": threading.Lock()})
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""


class TestConfigureLogging:
    def test_debug_events_emitted(self, capsys):
        configure_logging(Settings(_env_file=None, LOG_LEVEL="debug", DEBUG=False))
        ShapeValidator(silent=True).is_string("a").check({"a": "x"})
        out = capsys.readouterr().out
        assert '"event": "rule_registered"' in out
        assert '"event": "check_complete"' in out

    def test_debug_events_filtered_at_warning(self, capsys):
        configure_logging(Settings(_env_file=None, LOG_LEVEL="warning"))
        ShapeValidator(silent=True).is_string("a").check({"a": "x"})
        assert capsys.readouterr().out == ""

    def test_warning_events_emitted_at_warning(self, capsys):
        configure_logging(Settings(_env_file=None, LOG_LEVEL="warning"))
        ShapeValidator(silent=True).is_satisfy("n", lambda x: x > 0).check({"n": "abc"})
        assert '"event": "predicate_failed"' in capsys.readouterr().out

    def test_unknown_level_falls_back_to_warning(self, capsys):
        configure_logging(Settings(_env_file=None, LOG_LEVEL="chatty"))
        ShapeValidator(silent=True).is_string("a").check({"a": "x"})
        assert capsys.readouterr().out == ""

    def test_reconfigure_replaces_handler(self, capsys):
        configure_logging(Settings(_env_file=None, LOG_LEVEL="debug"))
        configure_logging(Settings(_env_file=None, LOG_LEVEL="debug"))
        ShapeValidator(silent=True).is_string("a")
        out = capsys.readouterr().out
        assert out.count('"event": "rule_registered"') == 1
