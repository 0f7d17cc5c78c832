"""
Hijri calendar helpers used by the Qurban sales reports.

Eid al-Adha falls on 10 Dzulhijjah. Sales of sacrificial animals happen in the
month before it, so the weekly sales report looks at the 30 days leading up to
that date.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Tuple

from hijridate import Gregorian, Hijri

from careerconnect.core.errors import ValidationFailedError

DZULHIJJAH = 12
EID_AL_ADHA_DAY = 10
SALES_WINDOW_DAYS = 30
# Years covered by the Umm al-Qura tables shipped with hijridate
MIN_HIJRI_YEAR = 1343
MAX_HIJRI_YEAR = 1500


def current_hijri_year(today: Optional[date] = None) -> int:
    today = today or date.today()
    return Gregorian(today.year, today.month, today.day).to_hijri().year


def dzulhijjah_10(hijri_year: Optional[int] = None, today: Optional[date] = None) -> date:
    """Gregorian date of 10 Dzulhijjah for ``hijri_year`` (default: the current Hijri year)."""
    year = hijri_year if hijri_year is not None else current_hijri_year(today)
    if not MIN_HIJRI_YEAR <= year <= MAX_HIJRI_YEAR:
        raise ValidationFailedError(f"Hijri year must be between {MIN_HIJRI_YEAR} and {MAX_HIJRI_YEAR}, got {year}")
    gregorian = Hijri(year, DZULHIJJAH, EID_AL_ADHA_DAY).to_gregorian()
    return date(gregorian.year, gregorian.month, gregorian.day)


def weekly_sales_window(hijri_year: Optional[int] = None, today: Optional[date] = None) -> Tuple[date, date]:
    """Return ``(start, end)`` where ``end`` is 10 Dzulhijjah and ``start`` is 30 days earlier."""
    end = dzulhijjah_10(hijri_year, today)
    return end - timedelta(days=SALES_WINDOW_DAYS), end
