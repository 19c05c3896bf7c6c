"""
Fixed constants - values that practically never change

Note: paths must always use pathlib.Path (Windows/Linux cross platform)
"""

from pathlib import Path


# Project root (two levels above this file: core/constants.py -> repo root)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class StrapiEndpoints:
    """ERP (Strapi) REST paths

    All paths are relative to `{url}/api`.
    """

    DEFAULT_URL: str = "http://localhost:1337"
    API_PREFIX: str = "/api"

    LOGIN: str = "/auth/local"

    ACCOUNTS: str = "/chart-of-accounts"
    JOURNAL_ENTRIES: str = "/journal-entries"


class Defaults:
    """Default values"""

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    LOG_LEVEL: str = "INFO"

    REQUEST_TIMEOUT_SEC: float = 30.0
    PAGE_SIZE: int = 100


class EnvVars:
    """Environment variables that override settings.yaml"""

    ERP_URL: str = "REFUELOS_ERP_URL"
    ERP_TOKEN: str = "REFUELOS_ERP_TOKEN"
    SETTINGS_FILE: str = "REFUELOS_SETTINGS"
    WEB_HOST: str = "REFUELOS_WEB_HOST"
    WEB_PORT: str = "REFUELOS_WEB_PORT"


class Paths:
    """Project paths (pathlib, OS independent)"""

    # Directories
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # Settings file
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"
