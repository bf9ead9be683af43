"""Validated shape of the diagnosis returned by the model.

The payload is untrusted: every key is required, lists must hold strings and
``imbalance`` must be one of the four known values. Anything else is
rejected as a whole, never partially accepted.
"""
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict


class Imbalance(str, Enum):
    PITTA = "Pitta"
    WATA = "Wata"
    SEMHA = "Semha"
    MIXED = "Mixed"


class Recommendations(BaseModel):
    model_config = ConfigDict(frozen=True)

    food: List[str]
    lifestyle: List[str]
    herbs: List[str]


class DiagnosisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary: str
    imbalance: Imbalance
    logic: str
    recommendations: Recommendations
