import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import ValidationError

from triage_wizard.core.config.env import load_env_file
from triage_wizard.core.config.models import Settings
from triage_wizard.core.exceptions import ConfigError

# Settings field -> environment variable
ENV_VARS = {
    "claude_mode": "CLAUDE_BACKEND_MODE",
    "anthropic_api_key": "ANTHROPIC_API_KEY",
    "gemini_api_key": "GEMINI_API_KEY",
    "openai_api_key": "OPENAI_API_KEY",
    "claude_model": "CLAUDE_MODEL",
    "agent_binary": "CLAUDE_CLI_PATH",
    "agent_timeout_seconds": "AGENT_TIMEOUT_SECONDS",
    "frontend_dir": "FRONTEND_DIR",
    "host": "HOST",
    "port": "PORT",
    "max_error_detail_chars": "MAX_ERROR_DETAIL_CHARS",
    "log_level": "LOG_LEVEL",
}


def load_settings(
    env_file_path: str | None = ".env",
    project_root: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build the settings snapshot from ``.env`` (if present) and the environment.

    Empty variables count as unset. ``NO_OPEN`` only needs to be present.
    """
    if environ is None:
        load_env_file(env_file_path, project_root)
        environ = os.environ
    data: dict[str, object] = {
        field: environ[name] for field, name in ENV_VARS.items() if environ.get(name)
    }
    data["no_open"] = "NO_OPEN" in environ
    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
