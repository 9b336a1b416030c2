"""Tests für die Typer-CLI."""

import json
from unittest.mock import patch

from typer.testing import CliRunner

from contextbridge import app

runner = CliRunner()


class TestMappingsCLI:
    """Tests für `mappings`."""

    def test_set_list_delete(self, clean_env):
        result = runner.invoke(app, ["mappings", "set", "gmail", "chat"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["mappings", "list"])
        assert result.exit_code == 0
        assert "gmail\tchat" in result.output

        result = runner.invoke(app, ["mappings", "delete", "gmail"])
        assert result.exit_code == 0
        result = runner.invoke(app, ["mappings", "list", "--format", "json"])
        assert json.loads(result.output) == []

    def test_unknown_style_fails(self, clean_env):
        result = runner.invoke(app, ["mappings", "set", "gmail", "nope"])
        assert result.exit_code == 1
        assert "Fehler" in result.output

    def test_resolve_shows_custom_flag(self, clean_env):
        result = runner.invoke(app, ["resolve", "gmail"])
        assert result.output.strip() == "gmail\temail_pro\tdefault"

        runner.invoke(app, ["mappings", "set", "gmail", "chat"])
        result = runner.invoke(app, ["resolve", "gmail"])
        assert result.output.strip() == "gmail\tchat\tcustom"

    def test_settings_written_to_isolated_home(self, clean_env, isolated_home):
        runner.invoke(app, ["mappings", "set", "slack", "notes"])
        data = json.loads((isolated_home / "settings.json").read_text())
        assert data["context_mappings"] == [{"app_id": "slack", "context_style": "notes"}]


class TestStylesCLI:
    """Tests für `styles`."""

    def test_list(self, clean_env):
        result = runner.invoke(app, ["styles", "list"])
        assert result.exit_code == 0
        assert result.output.splitlines()[0].startswith("email_pro\t")

    def test_show(self, clean_env):
        result = runner.invoke(app, ["styles", "show", "code"])
        assert result.exit_code == 0
        assert json.loads(result.output)["id"] == "code"

    def test_show_unknown(self, clean_env):
        result = runner.invoke(app, ["styles", "show", "nope"])
        assert result.exit_code == 1

    def test_update_and_reset(self, clean_env):
        result = runner.invoke(app, ["styles", "update", "chat", "--name", "Kurz"])
        assert result.exit_code == 0
        assert "Kurz" in runner.invoke(app, ["styles", "show", "chat"]).output

        result = runner.invoke(app, ["styles", "reset", "chat"])
        assert result.exit_code == 0
        assert "Kurz" not in runner.invoke(app, ["styles", "show", "chat"]).output

    def test_update_requires_field(self, clean_env):
        result = runner.invoke(app, ["styles", "update", "chat"])
        assert result.exit_code != 0

    def test_add_and_delete_custom(self, clean_env):
        result = runner.invoke(
            app, ["styles", "add", "legal", "Legal", "--prompt", "Legal: ${output}"]
        )
        assert result.exit_code == 0
        assert "legal\tLegal\tcustom" in runner.invoke(app, ["styles", "list"]).output

        assert runner.invoke(app, ["styles", "reset", "legal"]).exit_code == 1
        assert runner.invoke(app, ["styles", "delete", "legal"]).exit_code == 0

    def test_delete_builtin_fails(self, clean_env):
        result = runner.invoke(app, ["styles", "delete", "chat"])
        assert result.exit_code == 1


class TestCloudCLI:
    """Tests für `cloud`."""

    def test_providers(self, clean_env):
        result = runner.invoke(app, ["cloud", "providers"])
        assert result.exit_code == 0
        assert result.output.splitlines()[0].startswith("gemini\t")

    def test_config_masks_keys(self, clean_env):
        runner.invoke(app, ["cloud", "key", "openai", "sk-verysecret"])
        runner.invoke(app, ["cloud", "provider", "openai"])
        runner.invoke(app, ["cloud", "enable"])
        result = runner.invoke(app, ["cloud", "config"])
        assert result.exit_code == 0
        assert "sk-verysecret" not in result.output
        config = json.loads(result.output)
        assert config["enabled"] is True
        assert config["active_provider"] == "openai"

    def test_invalid_provider_choice(self, clean_env):
        result = runner.invoke(app, ["cloud", "provider", "groq"])
        assert result.exit_code != 0

    def test_invalid_model(self, clean_env):
        result = runner.invoke(app, ["cloud", "model", "openai", "gemini-2.0-flash"])
        assert result.exit_code == 1

    def test_connection_ok(self, clean_env):
        with patch("cloud_stt.gemini.test_connection", return_value=True):
            result = runner.invoke(app, ["cloud", "test", "gemini", "AIza"])
        assert result.exit_code == 0
        assert "ok" in result.output

    def test_connection_failed(self, clean_env):
        with patch("cloud_stt.gemini.test_connection", return_value=False):
            result = runner.invoke(app, ["cloud", "test", "gemini", "AIza"])
        assert result.exit_code == 1


class TestPushCLI:
    """Tests für `push` ohne laufenden Server."""

    def test_url_without_host(self, clean_env):
        result = runner.invoke(app, ["push", "about:blank"])
        assert result.exit_code == 1

    def test_unreachable_bridge(self, clean_env):
        result = runner.invoke(app, ["push", "https://mail.google.com/", "--port", "1", "--timeout", "0.2"])
        assert result.exit_code == 1
        assert "nicht erreichbar" in result.output

    def test_help(self, clean_env):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("serve", "push", "resolve", "mappings", "styles", "cloud"):
            assert command in result.output
