"""Samutthan 4 Calculators.

Deterministic classifiers behind the four causative factors.

Tools:
    get_birth_element: Thatu Chao Ruean from the birth month.
    get_age_group: Ayu Samutthan bracket from the birth year.
    get_current_season: Utu Samutthan season from today's month.
    get_kala_factor: Kala Samutthan period from the onset hour.
"""
from tools.ttm_calculators import (
    parse_birth_date,
    parse_onset_hour,
    calc_age_years,
    get_birth_element,
    get_age_group,
    get_current_season,
    get_kala_factor,
)

__all__ = [
    "parse_birth_date",
    "parse_onset_hour",
    "calc_age_years",
    "get_birth_element",
    "get_age_group",
    "get_current_season",
    "get_kala_factor",
]
