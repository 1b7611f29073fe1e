from pathlib import Path

from triage_wizard.core.config.loader import load_settings
from triage_wizard.core.config.models import Settings

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global SETTINGS
    if SETTINGS is None:
        SETTINGS = load_settings(".env", project_root=PROJECT_ROOT)
    return SETTINGS
