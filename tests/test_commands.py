"""Tests für die Command-Surface (Payload xor Fehler, nie Exceptions)."""

from unittest.mock import patch

import pytest

from bridge.protocol import Tab, build_context_message
from bridge.server import BridgeServer
from commands import CommandResult, Commands
from routing import ContextRouter


@pytest.fixture
def commands(router):
    return Commands(router)


def _assert_exclusive(result: CommandResult):
    """Genau eins von payload/error ist gesetzt."""
    if result.ok:
        assert result.payload is not None
        assert result.error is None
    else:
        assert result.payload is None
        assert result.error


class TestMappingCommands:
    def test_roundtrip(self, commands):
        result = commands.update_context_mapping("gmail", "chat")
        _assert_exclusive(result)
        assert result.ok
        assert commands.get_context_mappings().payload == [
            {"app_id": "gmail", "context_style": "chat"}
        ]
        assert commands.delete_context_mapping("gmail").ok
        assert commands.get_context_mappings().payload == []

    def test_unknown_style_is_error_payload(self, commands):
        result = commands.update_context_mapping("gmail", "nope")
        _assert_exclusive(result)
        assert not result.ok
        assert "nope" in result.error


class TestStyleCommands:
    def test_list(self, commands):
        result = commands.get_context_style_prompts()
        assert result.ok
        assert result.payload[0]["id"] == "email_pro"
        assert result.payload[0]["is_builtin"] is True

    def test_update_and_reset(self, commands):
        assert commands.update_context_style_prompt("chat", name="Short").ok
        assert commands.get_context_style_prompts().payload[1]["name"] == "Short"
        assert commands.reset_context_style_prompt("chat").ok
        assert commands.get_context_style_prompts().payload[1]["name"] == "Chat / Messaging"

    def test_reset_custom_is_error(self, commands):
        assert commands.add_context_style_prompt("legal", "Legal", "", "L: ${output}").ok
        result = commands.reset_context_style_prompt("legal")
        _assert_exclusive(result)
        assert not result.ok

    def test_add_duplicate_is_error(self, commands):
        result = commands.add_context_style_prompt("chat", "Chat", "", "x")
        assert not result.ok
        assert "already exists" in result.error

    def test_delete_builtin_is_error(self, commands):
        assert not commands.delete_context_style_prompt("email_pro").ok

    def test_update_unknown_is_error(self, commands):
        result = commands.update_context_style_prompt("nope", prompt="x")
        assert not result.ok
        assert "not found" in result.error

    def test_persistence_error_is_payload(self, commands):
        with patch(
            "utils.preferences._atomic_write", side_effect=OSError("read-only file system")
        ):
            result = commands.update_context_style_prompt("chat", name="X")
        _assert_exclusive(result)
        assert not result.ok
        assert commands.get_context_style_prompts().payload[1]["name"] == "Chat / Messaging"


class TestContextCommands:
    def test_current_context_fallback(self, commands):
        result = commands.get_current_context()
        assert result.ok
        assert result.payload["app_id"] == "unknown"
        assert result.payload["source"] == "fallback"

    def test_bridge_status_false_is_payload(self, commands):
        """False ist ein gültiges Ergebnis, kein Fehler."""
        result = commands.get_browser_bridge_status()
        _assert_exclusive(result)
        assert result.ok
        assert result.payload is False

    def test_bridge_context(self, settings):
        server = BridgeServer(port=0)
        commands = Commands(ContextRouter(settings, bridge=server))
        message = build_context_message(Tab(url="https://web.whatsapp.com/", title="WhatsApp"))
        server.handle_message(message.to_json())

        assert commands.get_browser_bridge_status().payload is True
        context = commands.get_current_context().payload
        assert context["app_id"] == "whatsapp_web"
        assert context["context_style"] == "chat"
        assert context["confidence"] == 0.98


class TestCloudCommands:
    def test_providers(self, commands):
        result = commands.get_cloud_stt_providers()
        assert [p["id"] for p in result.payload] == ["gemini", "openai"]

    def test_config_roundtrip(self, commands):
        assert commands.set_cloud_stt_provider("gemini").ok
        assert commands.set_cloud_stt_api_key("gemini", "k1").ok
        assert commands.set_cloud_stt_api_key("openai", "k2").ok
        assert commands.set_cloud_stt_model("gemini", "gemini-1.5-flash").ok
        assert commands.set_cloud_stt_enabled(True).ok

        config = commands.get_cloud_stt_config().payload
        assert config == {
            "enabled": True,
            "active_provider": "gemini",
            "api_keys": {"gemini": "k1", "openai": "k2"},
            "selected_models": {"openai": "whisper-1", "gemini": "gemini-1.5-flash"},
        }

    def test_unknown_provider_is_error(self, commands):
        assert not commands.set_cloud_stt_provider("groq").ok
        assert not commands.set_cloud_stt_api_key("groq", "x").ok
        assert not commands.test_cloud_stt_connection("groq", "x").ok

    def test_unknown_model_is_error(self, commands):
        result = commands.set_cloud_stt_model("openai", "gemini-2.0-flash")
        assert not result.ok

    def test_connection_test_false_is_payload(self, commands):
        result = commands.test_cloud_stt_connection("openai", "")
        _assert_exclusive(result)
        assert result.ok
        assert result.payload is False

    def test_connection_test_does_not_save(self, commands):
        with patch("cloud_stt.openai.test_connection", return_value=True):
            result = commands.test_cloud_stt_connection("openai", "sk-new")
        assert result.payload is True
        assert commands.get_cloud_stt_config().payload["api_keys"] == {}


class TestCommandResult:
    def test_to_dict(self):
        assert CommandResult.success([1]).to_dict() == {"ok": True, "payload": [1]}
        assert CommandResult.failure("x").to_dict() == {"ok": False, "error": "x"}

    def test_unexpected_exception_is_error(self, commands):
        with patch.object(commands.router.mappings, "list", side_effect=RuntimeError("bug")):
            result = commands.get_context_mappings()
        _assert_exclusive(result)
        assert not result.ok
