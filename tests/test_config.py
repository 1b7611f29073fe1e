"""Settings loading from the environment and .env files."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from triage_wizard.core.config.env import find_env_file
from triage_wizard.core.config.loader import load_settings
from triage_wizard.core.config.models import BackendMode
from triage_wizard.core.exceptions import ConfigError


def test_defaults_from_empty_environment():
    settings = load_settings(environ={})
    assert settings.claude_mode is BackendMode.CLI
    assert settings.claude_model == "claude-sonnet-4-5-20250929"
    assert settings.agent_binary == "claude"
    assert settings.agent_timeout_seconds is None
    assert settings.port == 3000
    assert settings.no_open is False


def test_values_from_environment():
    settings = load_settings(environ={
        "CLAUDE_BACKEND_MODE": "api",
        "ANTHROPIC_API_KEY": "sk-test",
        "CLAUDE_MODEL": "claude-haiku",
        "CLAUDE_CLI_PATH": "/opt/claude/bin/claude",
        "AGENT_TIMEOUT_SECONDS": "90",
        "PORT": "8080",
        "GEMINI_API_KEY": "",
        "NO_OPEN": "",
    })
    assert settings.claude_mode is BackendMode.API
    assert settings.anthropic_api_key == "sk-test"
    assert settings.claude_model == "claude-haiku"
    assert settings.agent_binary == "/opt/claude/bin/claude"
    assert settings.agent_timeout_seconds == 90
    assert settings.port == 8080
    assert settings.gemini_api_key is None
    assert settings.no_open is True


@pytest.mark.parametrize("environ", [
    {"CLAUDE_BACKEND_MODE": "grpc"},
    {"PORT": "not-a-port"},
    {"AGENT_TIMEOUT_SECONDS": "-5"},
])
def test_invalid_values_raise_config_error(environ):
    with pytest.raises(ConfigError):
        load_settings(environ=environ)


def test_settings_are_frozen():
    settings = load_settings(environ={})
    with pytest.raises(ValidationError):
        settings.claude_model = "other"


def test_env_file_is_loaded_without_overriding(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("CLAUDE_MODEL=from-dotenv\nPORT=4000\n")
    # register both vars with monkeypatch so whatever load_dotenv sets is undone
    for name in ("CLAUDE_MODEL", "PORT"):
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    monkeypatch.setenv("PORT", "5000")

    settings = load_settings(".env", project_root=tmp_path)
    assert settings.claude_model == "from-dotenv"
    assert settings.port == 5000


def test_env_file_lookup_prefers_project_root_then_cwd(tmp_path, monkeypatch):
    root = tmp_path / "root"
    cwd = tmp_path / "cwd"
    root.mkdir()
    cwd.mkdir()
    (cwd / ".env").write_text("PORT=1\n")
    monkeypatch.chdir(cwd)
    assert find_env_file(".env", project_root=root) == cwd / ".env"

    (root / ".env").write_text("PORT=2\n")
    assert find_env_file(".env", project_root=root) == root / ".env"
    assert find_env_file(str(cwd / ".env"), project_root=root) == cwd / ".env"
    assert find_env_file("missing.env", project_root=root) is None
    assert find_env_file(None) is None
