"""Unit Tests for the Samutthan 4 calculators.

Every classifier is total: each date / hour lands in exactly one bucket.

Run with: pytest tests/ -v
"""
from datetime import date, datetime, timedelta

import pytest

from models.session import TTMElement, TTMAgeGroup, TTMSeason, KalaPeriod
from tools.ttm_calculators import (
    parse_birth_date,
    parse_onset_hour,
    calc_age_years,
    get_birth_element,
    get_age_group,
    get_current_season,
    get_kala_factor,
)


class TestBirthElement:
    """Thatu Chao Ruean from the birth month."""

    @pytest.mark.parametrize("month, expected", [
        (1, TTMElement.FIRE), (2, TTMElement.FIRE), (3, TTMElement.FIRE),
        (4, TTMElement.WIND), (5, TTMElement.WIND), (6, TTMElement.WIND),
        (7, TTMElement.WATER), (8, TTMElement.WATER), (9, TTMElement.WATER),
        (10, TTMElement.EARTH), (11, TTMElement.EARTH), (12, TTMElement.EARTH),
    ])
    def test_month_buckets(self, month, expected):
        assert get_birth_element(date(1990, month, 15)) == expected

    def test_scenario_february_is_fire(self):
        assert get_birth_element("1990-02-14") == TTMElement.FIRE

    def test_every_day_of_year_resolves(self):
        day = date(2024, 1, 1)
        while day.year == 2024:
            assert get_birth_element(day) in TTMElement
            day += timedelta(days=1)

    def test_only_month_matters(self):
        for year in (1901, 1975, 2000, 2024):
            assert get_birth_element(date(year, 8, 1)) == TTMElement.WATER

    def test_accepts_iso_string_and_datetime(self):
        assert get_birth_element("1985-11-30") == TTMElement.EARTH
        assert get_birth_element(datetime(1985, 5, 1, 12, 0)) == TTMElement.WIND

    def test_unreadable_date_falls_through_to_fire(self):
        assert get_birth_element("not-a-date") == TTMElement.FIRE
        assert get_birth_element(None) == TTMElement.FIRE


class TestAgeGroup:
    """Ayu Samutthan with whole-year subtraction."""

    TODAY = date(2026, 10, 18)

    @pytest.mark.parametrize("age, expected", [
        (0, TTMAgeGroup.PATHOM),
        (16, TTMAgeGroup.PATHOM),
        (17, TTMAgeGroup.MATCHIMA),
        (32, TTMAgeGroup.MATCHIMA),
        (33, TTMAgeGroup.PATCHIM),
        (90, TTMAgeGroup.PATCHIM),
    ])
    def test_thresholds(self, age, expected):
        birth = date(self.TODAY.year - age, 6, 1)
        assert get_age_group(birth, self.TODAY) == expected

    def test_monotonic(self):
        order = [TTMAgeGroup.PATHOM, TTMAgeGroup.MATCHIMA, TTMAgeGroup.PATCHIM]
        ranks = [
            order.index(get_age_group(date(self.TODAY.year - age, 1, 1), self.TODAY))
            for age in range(0, 100)
        ]
        assert ranks == sorted(ranks)

    def test_month_and_day_are_ignored(self):
        # Born late December 2009: not yet 17 by birthday, counted as 17
        assert calc_age_years("2009-12-31", date(2026, 1, 1)) == 17
        assert get_age_group("2009-12-31", date(2026, 1, 1)) == TTMAgeGroup.MATCHIMA

    def test_unreadable_date(self):
        assert calc_age_years("??", self.TODAY) is None
        assert get_age_group("??", self.TODAY) == TTMAgeGroup.PATCHIM


class TestSeason:
    """Utu Samutthan, first match wins."""

    @pytest.mark.parametrize("month, expected", [
        (1, TTMSeason.HIMANTA),
        (2, TTMSeason.KIMHANTA),
        (5, TTMSeason.KIMHANTA),
        (7, TTMSeason.WASANTA),
        (10, TTMSeason.WASANTA),
        (11, TTMSeason.HIMANTA),
        (12, TTMSeason.HIMANTA),
    ])
    def test_months(self, month, expected):
        assert get_current_season(date(2026, month, 1)) == expected

    def test_june_resolves_to_kimhanta(self):
        """June is in both the hot and the rainy range; hot is checked first."""
        for day in (1, 15, 16, 30):
            assert get_current_season(date(2026, 6, day)) == TTMSeason.KIMHANTA

    def test_every_month_has_one_season(self):
        seasons = [get_current_season(date(2026, m, 1)) for m in range(1, 13)]
        assert all(s in TTMSeason for s in seasons)
        assert seasons.count(TTMSeason.KIMHANTA) == 5
        assert seasons.count(TTMSeason.WASANTA) == 4
        assert seasons.count(TTMSeason.HIMANTA) == 3


class TestKalaFactor:
    """Kala Samutthan from the onset hour."""

    @pytest.mark.parametrize("hour, expected", [
        (6, KalaPeriod.SEMHA), (9, KalaPeriod.SEMHA),
        (18, KalaPeriod.SEMHA), (21, KalaPeriod.SEMHA),
        (10, KalaPeriod.PITTA), (13, KalaPeriod.PITTA),
        (22, KalaPeriod.PITTA), (23, KalaPeriod.PITTA),
        (0, KalaPeriod.PITTA), (1, KalaPeriod.PITTA),
        (2, KalaPeriod.WATA), (5, KalaPeriod.WATA),
        (14, KalaPeriod.WATA), (17, KalaPeriod.WATA),
    ])
    def test_hours(self, hour, expected):
        assert get_kala_factor(f"{hour:02d}:00") == expected.value

    def test_scenario_late_night_onset(self):
        assert get_kala_factor("23:30") == "Pitta (Fire) period"

    def test_every_hour_has_one_period(self):
        labels = {p.value for p in KalaPeriod}
        counts = {label: 0 for label in labels}
        for hour in range(24):
            counts[get_kala_factor(f"{hour:02d}:30")] += 1
        assert sum(counts.values()) == 24
        assert counts == {
            KalaPeriod.SEMHA.value: 8,
            KalaPeriod.PITTA.value: 8,
            KalaPeriod.WATA.value: 8,
        }

    def test_uses_clock_without_time(self):
        assert get_kala_factor(None, now=datetime(2026, 1, 1, 7, 0)) == KalaPeriod.SEMHA.value
        assert get_kala_factor("", now=datetime(2026, 1, 1, 15, 0)) == KalaPeriod.WATA.value

    def test_unreadable_time_is_wata(self):
        assert get_kala_factor("noon") == KalaPeriod.WATA.value
        assert get_kala_factor(":30") == KalaPeriod.WATA.value

    def test_out_of_range_hour_uses_raw_value(self):
        assert get_kala_factor("25:00") == KalaPeriod.PITTA.value
        assert get_kala_factor("24:00") == KalaPeriod.PITTA.value


class TestParsing:

    def test_parse_birth_date(self):
        assert parse_birth_date("1990-02-14") == date(1990, 2, 14)
        assert parse_birth_date(" 1990-02-14 ") == date(1990, 2, 14)
        assert parse_birth_date("14/02/1990") is None
        assert parse_birth_date("") is None

    def test_parse_onset_hour(self):
        assert parse_onset_hour("07:45") == 7
        assert parse_onset_hour("23:59") == 23
        assert parse_onset_hour("24:00") == 24
        assert parse_onset_hour("ab:cd") is None
        assert parse_onset_hour(None) is None
