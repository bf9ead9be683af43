"""Wizard Data Models.

This module contains the dataclasses for session state and the validated
diagnosis result.

Models:
    UserProfile: Patient identity and derived birth element.
    SymptomRecord: Selected symptoms, onset time and notes.
    WeatherData: Temperature, condition and current season.
    WizardState: Everything one intake session holds.
    DiagnosisResult: Schema-validated model output.
"""
from models.session import (
    TTMElement,
    TTMAgeGroup,
    TTMSeason,
    KalaPeriod,
    Gender,
    WizardStep,
    UserProfile,
    SymptomRecord,
    WeatherData,
    WizardState,
)
from models.diagnosis import DiagnosisResult, Recommendations, Imbalance

__all__ = [
    "TTMElement",
    "TTMAgeGroup",
    "TTMSeason",
    "KalaPeriod",
    "Gender",
    "WizardStep",
    "UserProfile",
    "SymptomRecord",
    "WeatherData",
    "WizardState",
    "DiagnosisResult",
    "Recommendations",
    "Imbalance",
]
