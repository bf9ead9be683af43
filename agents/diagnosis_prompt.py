"""Diagnosis request assembly.

Merges the patient's profile, symptoms and weather with the four derived
Samutthan factors into one instruction block, and pairs it with the JSON
schema the model must answer in. Pure assembly: nothing here can fail on
well-formed session data.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional

from config.translations import symptom_label
from models.session import UserProfile, SymptomRecord, WeatherData
from tools.ttm_calculators import get_age_group, get_kala_factor

# Response schema in the Gemini (OpenAPI subset) dialect
DIAGNOSIS_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "summary": {"type": "STRING", "description": "A concise TTM diagnosis summary."},
        "imbalance": {
            "type": "STRING",
            "format": "enum",
            "enum": ["Pitta", "Wata", "Semha", "Mixed"],
        },
        "logic": {"type": "STRING", "description": "Detailed logic based on Samutthan 4 factors."},
        "recommendations": {
            "type": "OBJECT",
            "properties": {
                "food": {"type": "ARRAY", "items": {"type": "STRING"}},
                "lifestyle": {"type": "ARRAY", "items": {"type": "STRING"}},
                "herbs": {"type": "ARRAY", "items": {"type": "STRING"}},
            },
            "required": ["food", "lifestyle", "herbs"],
        },
    },
    "required": ["summary", "imbalance", "logic", "recommendations"],
}


@dataclass
class DiagnosisRequest:
    """Everything sent to the model for one diagnosis."""
    prompt: str
    schema: Dict[str, Any] = field(default_factory=lambda: DIAGNOSIS_RESPONSE_SCHEMA)
    lang: str = "th"


def _display(value: Any) -> str:
    return value.value if hasattr(value, "value") else str(value)


def build_diagnosis_prompt(
    profile: UserProfile,
    record: SymptomRecord,
    weather: WeatherData,
    lang: str = "th",
    today: Optional[date] = None,
) -> str:
    """Build the Samutthan 4 instruction block for the model."""
    age_group = get_age_group(profile.birth_date, today)
    kala = get_kala_factor(record.onset)
    symptoms = ", ".join(symptom_label(s, lang) for s in (record.symptoms or []))
    notes = record.custom_notes or ""
    response_language = "THAI" if lang == "th" else "ENGLISH"

    return f"""
Analyze this patient case using Thai Traditional Medicine (TTM) principles "Samutthan 4".
PLEASE PROVIDE THE RESPONSE IN {response_language}.

1. Thatu Samutthan (Elemental Cause):
   - Birth Element (Chao Ruean): {_display(profile.element_chao_ruean)}
   - Current Symptoms: {symptoms}
   - Extra Notes: {notes}

2. Utu Samutthan (Seasonal/Weather Cause):
   - Season: {_display(weather.season)}
   - Current Temp: {weather.temp}°C
   - Condition: {weather.condition}

3. Ayu Samutthan (Age Cause):
   - Age Group: {age_group.value}

4. Kala Samutthan (Time Cause):
   - Onset/Current Time: {record.onset or 'Current time'}
   - Time Factor: {kala}

Use the "Decision Tree" logic from TTM scriptures like Vejjasueksa to determine which Dosha (Pitta, Wata, Semha) is currently imbalanced (aggravated, weakened, or damaged).
Provide a professional diagnosis and holistic self-care recommendations.
"""


def build_diagnosis_request(
    profile: UserProfile,
    record: SymptomRecord,
    weather: WeatherData,
    lang: str = "th",
    today: Optional[date] = None,
) -> DiagnosisRequest:
    """Pair the prompt with the response schema and target language."""
    prompt = build_diagnosis_prompt(profile, record, weather, lang, today)
    return DiagnosisRequest(prompt=prompt, schema=DIAGNOSIS_RESPONSE_SCHEMA, lang=lang)
