"""Currency display settings."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CurrencyConfig:
    """How amounts are rendered for display; never used in arithmetic."""

    code: str = "NOK"
    symbol: str = "kr"
    decimal_places: int = 0
    locale: str = "nb-NO"
