"""
Display formatting for monetary amounts and contact counts.
"""
from decimal import Decimal
from typing import Optional, Union

from ..config.settings import Settings, get_settings


def _group(text: str, settings: Settings) -> str:
    # Python formats with "," grouping and "." decimals; swap to the configured pair
    return (
        text.replace(",", "\0")
        .replace(".", settings.decimal_separator)
        .replace("\0", settings.thousands_separator)
    )


def format_currency(amount: Union[Decimal, float, int], settings: Optional[Settings] = None) -> str:
    """Render an amount as e.g. 'R$ 1.873,80'."""
    settings = settings or get_settings()
    value = Decimal(str(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}{settings.currency_symbol} {_group(f'{abs(value):,.2f}', settings)}"


def format_volume(volume: int, settings: Optional[Settings] = None) -> str:
    """Render a contact count with thousands grouping, e.g. '10.000'."""
    settings = settings or get_settings()
    return _group(f"{volume:,}", settings)
