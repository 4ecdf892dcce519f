"""Currency display formatting.

Formatting is a presentation concern: engine arithmetic never rounds or
converts, and callers may swap :func:`format_currency` for their own.
"""

from __future__ import annotations

from typing import Optional, Union

from ..models.currency import CurrencyConfig

NBSP = "\u00a0"

# locale -> (group separator, decimal separator, symbol after the number)
_LOCALE_FORMATS: dict[str, tuple[str, str, bool]] = {
    "nb-NO": (NBSP, ",", True),
    "no-NO": (NBSP, ",", True),
    "sv-SE": (NBSP, ",", True),
    "da-DK": (".", ",", True),
    "de-DE": (".", ",", True),
    "en-US": (",", ".", False),
    "en-GB": (",", ".", False),
}
_FALLBACK_FORMAT = _LOCALE_FORMATS["en-US"]

Number = Union[float, int]


def format_currency(amount: Number, config: Optional[CurrencyConfig] = None) -> str:
    """Format ``amount`` for display, e.g. ``'12 000 kr'`` or ``'$1,234.56'``.

    Examples:
        >>> format_currency(1234.5, CurrencyConfig("USD", "$", 2, "en-US"))
        '$1,234.50'
        >>> format_currency(-250, CurrencyConfig("USD", "$", 0, "en-US"))
        '-$250'
    """
    cfg = config or CurrencyConfig()
    group, decimal_sep, symbol_after = _LOCALE_FORMATS.get(cfg.locale, _FALLBACK_FORMAT)

    text = f"{abs(amount):,.{cfg.decimal_places}f}"
    integer, _, fraction = text.partition(".")
    number = integer.replace(",", group)
    if fraction:
        number = f"{number}{decimal_sep}{fraction}"

    body = f"{number}{NBSP}{cfg.symbol}" if symbol_after else f"{cfg.symbol}{number}"
    # Amounts that round to zero never get a minus sign.
    if amount < 0 and set(text) - {"0", ".", ","}:
        return f"-{body}"
    return body


def format_signed(amount: Number, config: Optional[CurrencyConfig] = None) -> str:
    """Format with an explicit +/- sign."""
    if amount < 0:
        return format_currency(amount, config)
    return f"+{format_currency(amount, config)}"
