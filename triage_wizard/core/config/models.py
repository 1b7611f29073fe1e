from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class BackendMode(str, Enum):
    CLI = "cli"
    API = "api"


class Settings(BaseModel):
    """Process-wide configuration snapshot. Built once at startup, read-only afterwards."""

    model_config = ConfigDict(frozen=True)

    claude_mode: BackendMode = BackendMode.CLI
    anthropic_api_key: str | None = None
    gemini_api_key: str | None = None
    openai_api_key: str | None = None
    claude_model: str = "claude-sonnet-4-5-20250929"
    agent_binary: str = "claude"
    agent_timeout_seconds: float | None = Field(default=None, gt=0)  # None = wait for the agent indefinitely
    frontend_dir: str = "frontend"  # relative paths resolve against the project root
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    no_open: bool = False
    max_error_detail_chars: int = Field(default=8000, ge=0)
    log_level: str = "INFO"

    def api_key_for(self, env_name: str) -> str | None:
        """Return the configured key for an env var name such as ``GEMINI_API_KEY``."""
        return {
            "ANTHROPIC_API_KEY": self.anthropic_api_key,
            "GEMINI_API_KEY": self.gemini_api_key,
            "OPENAI_API_KEY": self.openai_api_key,
        }.get(env_name)

    def get_base_url(self, host: str = "127.0.0.1") -> str:
        return f"http://{host}:{self.port}"
