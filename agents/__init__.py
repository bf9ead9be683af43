"""Wizard Agent Module.

Agents:
    DiagnosisAgent: Samutthan 4 analysis delegated to Gemini with a strict
        JSON response schema.
"""
from agents.diagnosis_prompt import (
    DIAGNOSIS_RESPONSE_SCHEMA,
    DiagnosisRequest,
    build_diagnosis_prompt,
    build_diagnosis_request,
)
from agents.diagnosis_agent import DiagnosisAgent, analyze_symptoms, parse_diagnosis_response

__all__ = [
    "DIAGNOSIS_RESPONSE_SCHEMA",
    "DiagnosisRequest",
    "build_diagnosis_prompt",
    "build_diagnosis_request",
    "DiagnosisAgent",
    "analyze_symptoms",
    "parse_diagnosis_response",
]
