# 💵 vas_catalog/domain/pricing/formatting.py
"""
💵 Форматування цін продуктів для меню.

🔹 Нульова сума → "Free".
🔹 Додатна сума → символ валюти + сума з розділювачем тисяч і двома знаками ("R1,250.00").
🔹 Невідома валюта → "1,250.00 XYZ". Конвертації валют тут немає.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP             # 🔢 Операції з десятковими сумами
from typing import Dict, Final, Union

# 🧩 Внутрішні модулі проєкту
from vas_catalog.config.setup.constants import DEFAULT_CURRENCY

FREE_LABEL: Final[str] = "Free"
_CENTS: Final[Decimal] = Decimal("0.01")
CURRENCY_SYMBOLS: Final[Dict[str, str]] = {                              # 💱 Символи популярних валют
    "ZAR": "R",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "UAH": "₴",
}


def _to_decimal(value: Union[Decimal, int, float, str, None]) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"Not a numeric amount: {value!r}") from exc


def format_price(amount: Union[Decimal, int, float, str, None], currency: str = DEFAULT_CURRENCY) -> str:
    """
    Форматує суму у валюті продукту.

    >>> format_price(0)
    'Free'
    >>> format_price(Decimal("1250"), "ZAR")
    'R1,250.00'
    """
    value = _to_decimal(amount)
    if value == 0:
        return FREE_LABEL
    code = (currency or DEFAULT_CURRENCY).upper().strip()
    quantized = value.quantize(_CENTS, rounding=ROUND_HALF_UP)            # 🔁 Два знаки після коми
    number = f"{quantized:,.2f}"
    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{number} {code}"
    return f"{symbol}{number}"


__all__ = ["format_price", "FREE_LABEL", "CURRENCY_SYMBOLS"]
