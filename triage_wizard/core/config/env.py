import logging
from pathlib import Path

from dotenv import load_dotenv

log = logging.getLogger("config")


def find_env_file(env_file: str | None, project_root: Path | None = None) -> Path | None:
    """Locate the dotenv file: as given if absolute, else under the project root, then the cwd."""
    if not env_file:
        return None
    path = Path(env_file)
    if path.is_absolute():
        return path if path.is_file() else None
    for base in (project_root, Path.cwd()):
        if base is not None and (base / path).is_file():
            return base / path
    return None


def load_env_file(env_file: str | None, project_root: Path | None = None) -> Path | None:
    """Load variables from the dotenv file, if one is found; the real environment wins."""
    path = find_env_file(env_file, project_root)
    if path is None:
        return None
    load_dotenv(path, override=False)
    log.info("Loaded environment from %s", path)
    return path
