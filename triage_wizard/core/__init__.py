from triage_wizard.core.config.loader import load_settings
from triage_wizard.core.config.models import BackendMode, Settings
from triage_wizard.core.exceptions import ConfigError, TriageError

__all__ = [
    "load_settings",
    "BackendMode",
    "Settings",
    "ConfigError",
    "TriageError",
]
