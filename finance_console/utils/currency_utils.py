"""
Currency utility functions.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union


class CurrencyUtils:
    """Utility functions for currency operations."""

    # symbol, symbol before amount, minor units, thousands separator, decimal separator
    CURRENCY_FORMATS = {
        'VND': ('₫', False, 0, '.', ','),
        'USD': ('$', True, 2, ',', '.'),
        'EUR': ('€', False, 2, '.', ','),
        'GBP': ('£', True, 2, ',', '.'),
        'JPY': ('¥', True, 0, ',', '.'),
    }

    CURRENCY_SYMBOLS = {code: fmt[0] for code, fmt in CURRENCY_FORMATS.items()}

    @staticmethod
    def to_decimal(value: Union[Decimal, int, str, None]) -> Decimal:
        """Parse a decimal-as-string amount from the API; blanks count as zero."""
        if value is None or value == '':
            return Decimal('0')
        if isinstance(value, Decimal):
            return value
        try:
            return Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValueError(f"Invalid amount: {value!r}") from e

    @staticmethod
    def format_amount(amount: Union[Decimal, int, str, None], currency: str = 'VND', show_symbol: bool = True) -> str:
        """Format amount following the currency's local convention."""
        if amount is None:
            return "N/A"

        code = currency.upper()
        symbol, prefix, places, thousands, decimal_sep = CurrencyUtils.CURRENCY_FORMATS.get(
            code, (code, False, 2, ',', '.')
        )

        value = CurrencyUtils.to_decimal(amount)
        quantum = Decimal(1).scaleb(-places)
        rounded = value.quantize(quantum, rounding=ROUND_HALF_UP)

        # Group with placeholders first so the separators can be swapped safely
        formatted = f"{abs(rounded):,.{places}f}"
        formatted = formatted.replace(',', '\0').replace('.', decimal_sep).replace('\0', thousands)
        sign = '-' if rounded < 0 else ''

        if not show_symbol:
            return f"{sign}{formatted}"
        if prefix:
            return f"{sign}{symbol}{formatted}"
        return f"{sign}{formatted} {symbol}"
