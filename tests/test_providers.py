"""Provider routing: only Claude via the CLI reaches the agent."""

from __future__ import annotations

import pytest

from triage_wizard.agent.providers import Provider, ensure_cli_backend
from triage_wizard.core.config.models import BackendMode, Settings
from triage_wizard.core.exceptions import CallerInputError, ProviderNotImplemented


def test_claude_cli_is_accepted_for_every_task():
    settings = Settings()
    for task in ("classify", "customize", "suggest", "generate", "refine", "testpage"):
        assert ensure_cli_backend("claude", task, settings) is Provider.CLAUDE


def test_unknown_provider_is_caller_error():
    with pytest.raises(CallerInputError, match="Unknown provider: mistral"):
        ensure_cli_backend("mistral", "classify", Settings())


@pytest.mark.parametrize("provider,env_name", [("gemini", "GEMINI_API_KEY"), ("openai", "OPENAI_API_KEY")])
def test_other_providers_need_key_then_are_not_implemented(provider, env_name):
    with pytest.raises(CallerInputError, match=f"{env_name} not configured"):
        ensure_cli_backend(provider, "classify", Settings())
    with pytest.raises(ProviderNotImplemented):
        ensure_cli_backend(provider, "classify", Settings(gemini_api_key="g", openai_api_key="o"))


def test_non_claude_rejected_for_other_tasks():
    with pytest.raises(ProviderNotImplemented, match="Only Claude provider supported for refine"):
        ensure_cli_backend("gemini", "refine", Settings(gemini_api_key="g"))


def test_claude_api_mode():
    api = Settings(claude_mode=BackendMode.API)
    with pytest.raises(CallerInputError, match="ANTHROPIC_API_KEY not configured"):
        ensure_cli_backend("claude", "generate", api)
    with pytest.raises(ProviderNotImplemented) as exc_info:
        ensure_cli_backend("claude", "generate", Settings(claude_mode=BackendMode.API, anthropic_api_key="k"))
    assert exc_info.value.details == "Set CLAUDE_BACKEND_MODE=cli"
