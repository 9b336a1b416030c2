"""Tests für Konfigurations-Logik (ENV-Overrides, .env-Laden, Logging-Setup)."""

import logging

import pytest

from config import get_bridge_port, get_reconnect_interval
from utils.env import get_env_bool_default, load_environment, parse_bool


class TestBridgeSettings:
    """Tests für get_bridge_port() / get_reconnect_interval()."""

    def test_defaults(self, clean_env):
        assert get_bridge_port() == 9876
        assert get_reconnect_interval() == 5.0

    def test_port_override(self, monkeypatch, clean_env):
        monkeypatch.setenv("CONTEXTBRIDGE_PORT", "10001")
        assert get_bridge_port() == 10001

    @pytest.mark.parametrize("value", ["abc", "0", "70000", "-5"])
    def test_invalid_port_uses_default(self, monkeypatch, clean_env, value):
        monkeypatch.setenv("CONTEXTBRIDGE_PORT", value)
        assert get_bridge_port() == 9876

    def test_interval_override(self, monkeypatch, clean_env):
        monkeypatch.setenv("CONTEXTBRIDGE_RECONNECT_INTERVAL", "1.5")
        assert get_reconnect_interval() == 1.5

    @pytest.mark.parametrize("value", ["soon", "0", "-1"])
    def test_invalid_interval_uses_default(self, monkeypatch, clean_env, value):
        monkeypatch.setenv("CONTEXTBRIDGE_RECONNECT_INTERVAL", value)
        assert get_reconnect_interval() == 5.0


class TestEnvHelpers:
    @pytest.mark.parametrize(
        "value,expected",
        [("1", True), ("Yes", True), (" on ", True), ("0", False), ("off", False), ("maybe", None), (None, None)],
    )
    def test_parse_bool(self, value, expected):
        assert parse_bool(value) is expected

    def test_bool_default(self, monkeypatch, clean_env):
        assert get_env_bool_default("CONTEXTBRIDGE_DEBUG", False) is False
        monkeypatch.setenv("CONTEXTBRIDGE_DEBUG", "true")
        assert get_env_bool_default("CONTEXTBRIDGE_DEBUG", False) is True

    def test_load_environment_precedence(self, tmp_path, monkeypatch, isolated_home, clean_env):
        """Prozess-ENV > User-.env > lokale .env."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text("CONTEXTBRIDGE_PORT=1111\nCONTEXTBRIDGE_DEBUG=1\n")
        isolated_home.mkdir(parents=True, exist_ok=True)
        (isolated_home / ".env").write_text("CONTEXTBRIDGE_PORT=2222\n")
        monkeypatch.setenv("CONTEXTBRIDGE_RECONNECT_INTERVAL", "3")
        # monkeypatch räumt die von load_environment gesetzten Keys wieder ab
        monkeypatch.setenv("CONTEXTBRIDGE_PORT", "placeholder")
        monkeypatch.delenv("CONTEXTBRIDGE_PORT")
        monkeypatch.setenv("CONTEXTBRIDGE_DEBUG", "placeholder")
        monkeypatch.delenv("CONTEXTBRIDGE_DEBUG")

        load_environment()

        assert get_bridge_port() == 2222
        assert get_env_bool_default("CONTEXTBRIDGE_DEBUG", False) is True
        assert get_reconnect_interval() == 3.0


class TestLogging:
    def test_setup_logging_is_idempotent(self, isolated_home):
        from utils.logging import get_logger, setup_logging

        logger = get_logger()
        saved = list(logger.handlers)
        for handler in saved:
            logger.removeHandler(handler)
        try:
            setup_logging(debug=False)
            count = len(logger.handlers)
            setup_logging(debug=True)
            assert len(logger.handlers) == count
            assert logger.level == logging.DEBUG
            assert (isolated_home / "logs" / "contextbridge.log").exists()
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()
            for handler in saved:
                logger.addHandler(handler)

    def test_session_id_is_stable(self):
        from utils.logging import get_session_id

        assert get_session_id() == get_session_id()
        assert len(get_session_id()) == 8
