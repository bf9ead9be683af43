from typing import List, Optional
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from config.settings import (
    DEFAULT_LANGUAGE,
    DEFAULT_BIRTH_DATE,
    DEFAULT_TEMPERATURE_C,
    DEFAULT_WEATHER_CONDITION,
)
from models.diagnosis import DiagnosisResult


class TTMElement(Enum):
    """Thatu Chao Ruean: the birth element."""
    EARTH = "Din (Earth)"
    WATER = "Nam (Water)"
    WIND = "Lom (Wind)"
    FIRE = "Fai (Fire)"


class TTMAgeGroup(Enum):
    PATHOM = "Pathom Wai (0-16 years)"
    MATCHIMA = "Matchima Wai (16-32 years)"
    PATCHIM = "Patchim Wai (32+ years)"


class TTMSeason(Enum):
    HIMANTA = "Himanta (Cold/Dry)"
    KIMHANTA = "Kimhanta (Hot)"
    WASANTA = "Wasanta (Rainy)"


class KalaPeriod(Enum):
    """Time-of-day humor period (Kala Samutthan)."""
    SEMHA = "Semha (Water) period"
    PITTA = "Pitta (Fire) period"
    WATA = "Wata (Wind) period"


class Gender(Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class WizardStep(Enum):
    PROFILE = 1
    SYMPTOMS = 2
    CONTEXT = 3
    RESULTS = 4


def _current_season() -> TTMSeason:
    from tools.ttm_calculators import get_current_season
    return get_current_season()


def _current_time() -> str:
    return datetime.now().strftime("%H:%M")


@dataclass
class UserProfile:
    """Who the patient is. Frozen in practice once the profile step is left."""
    name: str = ""
    birth_date: str = DEFAULT_BIRTH_DATE  # ISO YYYY-MM-DD
    gender: Gender = Gender.MALE
    element_chao_ruean: Optional[TTMElement] = None  # derived from birth_date

    def __post_init__(self):
        if self.element_chao_ruean is None:
            from tools.ttm_calculators import get_birth_element
            self.element_chao_ruean = get_birth_element(self.birth_date)


@dataclass
class SymptomRecord:
    """What the patient feels, and since when."""
    symptoms: List[str] = field(default_factory=list)  # symptom keys (or free labels)
    onset: str = field(default_factory=_current_time)  # HH:MM
    custom_notes: str = ""


@dataclass
class WeatherData:
    temp: int = DEFAULT_TEMPERATURE_C  # °C
    condition: str = DEFAULT_WEATHER_CONDITION
    season: TTMSeason = field(default_factory=_current_season)  # computed once per session


@dataclass
class WizardState:
    """All state owned by the wizard for one intake session."""
    lang: str = DEFAULT_LANGUAGE
    step: WizardStep = WizardStep.PROFILE
    busy: bool = False  # a diagnosis request or report export is in flight
    profile: UserProfile = field(default_factory=UserProfile)
    record: SymptomRecord = field(default_factory=SymptomRecord)
    weather: WeatherData = field(default_factory=WeatherData)
    diagnosis: Optional[DiagnosisResult] = None
    notice: Optional[str] = None  # last user-visible failure message
