"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from .models.currency import CurrencyConfig

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "BudgetCast"
    LOG_FILENAME = "budgetcast.log"
    DEFAULT_CURRENCY = CurrencyConfig()

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("BUDGETCAST_DEV_MODE", default=True)
        self.CURRENCY_CODE = os.getenv("BUDGETCAST_CURRENCY_CODE", self.DEFAULT_CURRENCY.code)
        self.CURRENCY_SYMBOL = os.getenv(
            "BUDGETCAST_CURRENCY_SYMBOL", self.DEFAULT_CURRENCY.symbol
        )
        self.CURRENCY_DECIMALS = _env_int(
            "BUDGETCAST_CURRENCY_DECIMALS", self.DEFAULT_CURRENCY.decimal_places
        )
        self.LOCALE = os.getenv("BUDGETCAST_LOCALE", self.DEFAULT_CURRENCY.locale)
        if not 0 <= self.CURRENCY_DECIMALS <= 4:
            raise ValueError("BUDGETCAST_CURRENCY_DECIMALS must be between 0 and 4.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where log files live."""

        data_root = os.getenv("BUDGETCAST_DATA_DIR", "instance")
        return Path(data_root).expanduser().resolve()

    def currency(self) -> CurrencyConfig:
        """Build the display currency configuration."""

        return CurrencyConfig(
            code=self.CURRENCY_CODE,
            symbol=self.CURRENCY_SYMBOL,
            decimal_places=self.CURRENCY_DECIMALS,
            locale=self.LOCALE,
        )


class DevConfig(BaseConfig):
    """Development configuration."""

    DEBUG = True
    TESTING = False
