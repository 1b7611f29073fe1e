from triage_wizard.core.config.loader import load_settings
from triage_wizard.core.config.models import BackendMode, Settings

__all__ = ["load_settings", "BackendMode", "Settings"]
