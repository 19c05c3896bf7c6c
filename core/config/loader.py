"""
Settings loader

Loads settings.yaml and builds the ERP connection / ledger settings.
"""

import logging
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from core.constants import Defaults, EnvVars, Paths, StrapiEndpoints
from core.ledger.types import BALANCE_TOLERANCE, MIN_JOURNAL_LINES
from core.logging import parse_level


@dataclass(frozen=True)
class ErpConfig:
    """ERP (Strapi) connection settings

    Either a static API token or login credentials may be given.
    """

    url: str = StrapiEndpoints.DEFAULT_URL
    api_token: str | None = None
    identifier: str | None = None
    password: str | None = None
    timeout: float = Defaults.REQUEST_TIMEOUT_SEC
    page_size: int = Defaults.PAGE_SIZE

    @property
    def has_credentials(self) -> bool:
        """Whether login credentials are configured"""
        return bool(self.identifier and self.password)


@dataclass(frozen=True)
class LedgerConfig:
    """Accounting engine settings

    Passed explicitly into the validator and report generators.
    """

    balance_tolerance: Decimal = BALANCE_TOLERANCE
    min_lines: int = MIN_JOURNAL_LINES


@dataclass(frozen=True)
class AppConfig:
    """Full application settings"""

    erp: ErpConfig
    ledger: LedgerConfig
    log_level: str = Defaults.LOG_LEVEL


class SettingsLoadError(Exception):
    """Failed to load settings"""

    pass


def load_config(path: Path | None = None) -> AppConfig:
    """Load settings.yaml

    A missing default file yields default settings. An explicitly given
    path must exist. Environment variables override the ERP url/token.

    Args:
        path: settings.yaml path (None = REFUELOS_SETTINGS or default path)

    Returns:
        AppConfig instance

    Raises:
        SettingsLoadError: missing explicit file or malformed YAML
        ValueError: invalid setting value
    """
    explicit = path is not None
    if path is None:
        env_path = os.environ.get(EnvVars.SETTINGS_FILE)
        if env_path:
            path = Path(env_path)
            explicit = True
        else:
            path = Paths.SETTINGS_FILE

    data: dict[str, Any] = {}
    if path.exists():
        try:
            content = path.read_text(encoding="utf-8")
            loaded = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise SettingsLoadError(f"Failed to parse settings file: {e}") from e

        if loaded is not None:
            if not isinstance(loaded, dict):
                raise SettingsLoadError(f"Settings file must contain a mapping: {path}")
            data = loaded
    elif explicit:
        raise SettingsLoadError(f"Settings file not found: {path}")

    erp = _parse_erp(data.get("erp") or {})
    ledger = _parse_ledger(data.get("ledger") or {})
    log_level = _parse_log_level(data.get("log_level", Defaults.LOG_LEVEL))

    return AppConfig(erp=erp, ledger=ledger, log_level=log_level)


def _parse_erp(section: dict[str, Any]) -> ErpConfig:
    url = os.environ.get(EnvVars.ERP_URL) or section.get("url") or StrapiEndpoints.DEFAULT_URL
    api_token = os.environ.get(EnvVars.ERP_TOKEN) or section.get("api_token") or None

    try:
        timeout = float(section.get("timeout", Defaults.REQUEST_TIMEOUT_SEC))
        page_size = int(section.get("page_size", Defaults.PAGE_SIZE))
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid erp settings: {e}") from e

    if timeout <= 0:
        raise ValueError(f"erp.timeout must be positive: {timeout}")
    if page_size < 1:
        raise ValueError(f"erp.page_size must be at least 1: {page_size}")

    return ErpConfig(
        url=str(url).rstrip("/"),
        api_token=api_token,
        identifier=section.get("identifier") or None,
        password=section.get("password") or None,
        timeout=timeout,
        page_size=page_size,
    )


def _parse_log_level(raw: Any) -> str:
    # canonical name ("warn" -> "WARNING")
    return logging.getLevelName(parse_level(str(raw)))


def _parse_ledger(section: dict[str, Any]) -> LedgerConfig:
    raw_tolerance = section.get("balance_tolerance", BALANCE_TOLERANCE)
    try:
        tolerance = Decimal(str(raw_tolerance))
    except InvalidOperation as e:
        raise ValueError(f"Invalid ledger.balance_tolerance: {raw_tolerance!r}") from e

    if not tolerance.is_finite() or tolerance < 0:
        raise ValueError(f"ledger.balance_tolerance must be a non-negative amount: {tolerance}")
    if tolerance > BALANCE_TOLERANCE:
        raise ValueError(
            f"ledger.balance_tolerance must not exceed {BALANCE_TOLERANCE}: {tolerance}"
        )

    try:
        min_lines = int(section.get("min_lines", MIN_JOURNAL_LINES))
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid ledger.min_lines: {e}") from e

    if min_lines < MIN_JOURNAL_LINES:
        raise ValueError(
            f"ledger.min_lines must be at least {MIN_JOURNAL_LINES}: {min_lines}"
        )

    return LedgerConfig(balance_tolerance=tolerance, min_lines=min_lines)


class Settings:
    """Application settings (singleton)

    Loads settings.yaml once and exposes the parsed sections.
    """

    _instance: "Settings | None" = None
    _config: AppConfig | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._config is None:
            self._config = load_config(settings_path)

    @property
    def erp(self) -> ErpConfig:
        """ERP connection settings"""
        assert self._config is not None
        return self._config.erp

    @property
    def ledger(self) -> LedgerConfig:
        """Accounting engine settings"""
        assert self._config is not None
        return self._config.ledger

    @property
    def log_level(self) -> str:
        """Configured log level name"""
        assert self._config is not None
        return self._config.log_level

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton (for tests)"""
        cls._instance = None
        cls._config = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Return the Settings instance

    Args:
        settings_path: settings.yaml path (None = default path)

    Returns:
        Settings singleton
    """
    return Settings(settings_path)
