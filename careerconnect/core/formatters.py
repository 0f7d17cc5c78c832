"""
Money and number formatting helpers.

Amounts are rendered the way Indonesian readers expect them (``Rp 5.750.000``)
using the CLDR data shipped with Babel.
"""

from __future__ import annotations

import math
from typing import Optional, Union

from babel.numbers import format_currency as babel_format_currency

Number = Union[int, float]

DEFAULT_LOCALE = "id_ID"
DEFAULT_CURRENCY = "IDR"
_CURRENCY_PATTERN = "¤ #,##0"

# (threshold, suffix) from largest to smallest
_SHORT_SUFFIXES = (
    (1_000_000_000_000, "T"),
    (1_000_000_000, "M"),
    (1_000_000, "Jt"),
    (1_000, "Rb"),
)


def format_currency(amount: Number, currency: str = DEFAULT_CURRENCY, locale: str = DEFAULT_LOCALE) -> str:
    """Format ``amount`` as a whole-unit currency string, e.g. ``Rp 1.500.000``."""
    return babel_format_currency(
        amount,
        currency,
        format=_CURRENCY_PATTERN,
        locale=locale,
        currency_digits=False,
    )


def round_salary(amount: Number) -> Number:
    """Floor salaries of one million and above to the nearest thousand."""
    if amount >= 1_000_000:
        return math.floor(amount / 1000) * 1000
    return amount


def format_salary(amount: Number, currency: str = DEFAULT_CURRENCY) -> str:
    return format_currency(round_salary(amount), currency)


def salary_display(salary_min: Optional[Number], salary_max: Optional[Number], currency: str = DEFAULT_CURRENCY) -> str:
    """Human readable salary range used on job cards.

    Zero and ``None`` are both treated as "not given".
    """
    if not salary_min and not salary_max:
        return "Salary not specified"
    if salary_min and salary_max:
        return f"{format_salary(salary_min, currency)} - {format_salary(salary_max, currency)}"
    if salary_min:
        return f"From {format_salary(salary_min, currency)}"
    return f"Up to {format_salary(salary_max or 0, currency)}"


def format_angka_manual(angka: Number) -> str:
    """Abbreviate a number with Indonesian suffixes.

    ``1500`` becomes ``1.5Rb``, ``2_000_000`` becomes ``2Jt``. Values below one
    thousand are returned unchanged.
    """
    if angka < 1000:
        return str(angka)

    for threshold, suffix in _SHORT_SUFFIXES:
        if angka >= threshold:
            num = angka / threshold
            break

    if float(num).is_integer():
        formatted = str(int(num))
    else:
        formatted = f"{num:.1f}"
        if formatted.endswith(".0"):
            formatted = formatted[:-2]
    return f"{formatted}{suffix}"
