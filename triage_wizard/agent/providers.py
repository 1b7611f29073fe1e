"""Provider routing. Only Claude through the CLI has a real backend; every other
combination ends in a fixed rejection."""
from __future__ import annotations

from enum import Enum

from triage_wizard.core.config.models import BackendMode, Settings
from triage_wizard.core.exceptions import CallerInputError, ProviderNotImplemented


class Provider(str, Enum):
    CLAUDE = "claude"
    GEMINI = "gemini"
    OPENAI = "openai"


API_KEY_ENV = {
    Provider.CLAUDE: "ANTHROPIC_API_KEY",
    Provider.GEMINI: "GEMINI_API_KEY",
    Provider.OPENAI: "OPENAI_API_KEY",
}

_NOT_IMPLEMENTED = {
    Provider.CLAUDE: ("Claude HTTP API mode not yet implemented - use CLI mode", "Set CLAUDE_BACKEND_MODE=cli"),
    Provider.GEMINI: ("Gemini backend proxy not yet implemented - use browser mode", None),
    Provider.OPENAI: ("OpenAI backend proxy not yet implemented", None),
}

TASK_PROVIDERS = {
    "classify": frozenset(Provider),
    "customize": frozenset({Provider.CLAUDE}),
    "suggest": frozenset({Provider.CLAUDE}),
    "generate": frozenset({Provider.CLAUDE}),
    "refine": frozenset({Provider.CLAUDE}),
    "testpage": frozenset({Provider.CLAUDE}),
}


def parse_provider(name: str) -> Provider:
    try:
        return Provider(name)
    except ValueError:
        raise CallerInputError(f"Unknown provider: {name}") from None


def ensure_cli_backend(provider_name: str, task: str, settings: Settings) -> Provider:
    """Return the provider when the request can go to the Claude CLI, otherwise raise."""
    provider = parse_provider(provider_name)
    if provider not in TASK_PROVIDERS[task]:
        raise ProviderNotImplemented(f"Only Claude provider supported for {task}")
    if provider is Provider.CLAUDE and settings.claude_mode is BackendMode.CLI:
        return provider

    env_name = API_KEY_ENV[provider]
    if not settings.api_key_for(env_name):
        hint = "Set ANTHROPIC_API_KEY or use CLI mode" if provider is Provider.CLAUDE else None
        raise CallerInputError(f"{env_name} not configured", details=hint)
    message, hint = _NOT_IMPLEMENTED[provider]
    raise ProviderNotImplemented(message, details=hint)
