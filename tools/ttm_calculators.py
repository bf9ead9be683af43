from datetime import date, datetime
from typing import Optional, Union

from models.session import TTMElement, TTMAgeGroup, TTMSeason, KalaPeriod

DateLike = Union[date, str, None]


def parse_birth_date(value: DateLike) -> Optional[date]:
    """
    Normalize a birth date given as a date or an ISO ``YYYY-MM-DD`` string.

    Returns:
        date, or None if the value cannot be read as a calendar date.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        return None


def parse_onset_hour(value: Optional[str]) -> Optional[int]:
    """
    Extract the hour from an ``HH:MM`` string.

    Only the leading hour field is read; minutes are ignored. The hour is
    not range-checked, so "25:00" yields 25 and falls in the late-night
    Pitta bucket.
    """
    if not value:
        return None
    try:
        hour = int(str(value).split(":")[0])
    except (ValueError, TypeError):
        return None
    return hour


def get_birth_element(birth_date: DateLike) -> TTMElement:
    """
    Thatu Chao Ruean (birth element) from the birth month.

    Buckets are checked in this order: Oct-Dec Earth, Jul-Sep Water,
    Apr-Jun Wind, anything else Fire (Jan-Mar). An unreadable date
    lands in the final Fire branch.
    """
    parsed = parse_birth_date(birth_date)
    month = parsed.month if parsed else None

    if month is not None and 10 <= month <= 12:
        return TTMElement.EARTH
    if month is not None and 7 <= month <= 9:
        return TTMElement.WATER
    if month is not None and 4 <= month <= 6:
        return TTMElement.WIND
    return TTMElement.FIRE


def calc_age_years(birth_date: DateLike, today: Optional[date] = None) -> Optional[int]:
    """
    Whole-year difference between the two calendar years.

    Month and day are ignored, so someone born in December counts a year
    older from January 1st.
    """
    parsed = parse_birth_date(birth_date)
    if parsed is None:
        return None
    today = today or date.today()
    return today.year - parsed.year


def get_age_group(birth_date: DateLike, today: Optional[date] = None) -> TTMAgeGroup:
    """
    Ayu Samutthan age bracket.

    - age <= 16: Pathom Wai
    - age <= 32: Matchima Wai
    - otherwise (including an unreadable date): Patchim Wai
    """
    age = calc_age_years(birth_date, today)
    if age is not None and age <= 16:
        return TTMAgeGroup.PATHOM
    if age is not None and age <= 32:
        return TTMAgeGroup.MATCHIMA
    return TTMAgeGroup.PATCHIM


def get_current_season(today: Optional[date] = None) -> TTMSeason:
    """
    Utu Samutthan season from the month. First match wins.

    The hot and rainy ranges both contain June; the hot season is checked
    first, so June is Kimhanta.
    """
    month = (today or date.today()).month

    # Hot: Feb - June
    if 2 <= month <= 6:
        return TTMSeason.KIMHANTA
    # Rainy: June - Oct
    if 6 <= month <= 10:
        return TTMSeason.WASANTA
    # Cold: Nov - Jan
    return TTMSeason.HIMANTA


def get_kala_factor(time_str: Optional[str] = None, now: Optional[datetime] = None) -> str:
    """
    Kala Samutthan period label for an onset time.

    - 06-10 and 18-22: Semha (Water)
    - 10-14 and 22-02: Pitta (Fire)
    - otherwise: Wata (Wind)

    Without a time the current clock hour is used. A time string that
    cannot be read matches no period and gives Wata.
    """
    if time_str:
        hour = parse_onset_hour(time_str)
    else:
        hour = (now or datetime.now()).hour

    if hour is None:
        return KalaPeriod.WATA.value
    if (6 <= hour < 10) or (18 <= hour < 22):
        return KalaPeriod.SEMHA.value
    if (10 <= hour < 14) or (hour >= 22 or hour < 2):
        return KalaPeriod.PITTA.value
    return KalaPeriod.WATA.value
