"""DiagnosisAgent - Samutthan 4 Analysis via Gemini

The agent is a boundary adapter: all diagnostic judgment comes from the
remote model. Locally it only sends the assembled prompt with a strict
response schema and checks that the answer has the promised shape.

Design Decisions:
    1. JSON mode + response schema: the model is asked for structured output
    2. Fail closed: the payload is validated with pydantic and rejected whole
       if any required key is missing or mistyped
    3. One failure type: every problem surfaces as AnalysisFailedError
    4. No retries: the user re-triggers the analysis from the wizard
"""
from typing import Optional
import json
import logging
import re

from pydantic import ValidationError

from config.llm import get_gemini_model
from core.errors import AnalysisFailedError
from core.observability import trace_agent
from agents.diagnosis_prompt import DiagnosisRequest, build_diagnosis_request
from models.diagnosis import DiagnosisResult
from models.session import UserProfile, SymptomRecord, WeatherData

logger = logging.getLogger(__name__)

# Opening ```json (or bare ```) line and closing ``` around the whole answer
_CODE_FENCE = re.compile(r"\A```[A-Za-z]*[ \t]*\n?|\n?```\Z")


def parse_diagnosis_response(text: Optional[str]) -> DiagnosisResult:
    """Decode the model's JSON answer into a validated DiagnosisResult.

    Raises:
        AnalysisFailedError: empty text, invalid JSON or a schema violation.
    """
    if not text or not text.strip():
        raise AnalysisFailedError("Empty response from model")

    cleaned = _CODE_FENCE.sub("", text.strip()).strip()
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise AnalysisFailedError(f"Response is not valid JSON: {e}") from e

    try:
        return DiagnosisResult.model_validate(payload)
    except ValidationError as e:
        raise AnalysisFailedError(f"Response does not match schema: {e.error_count()} error(s)") from e


class DiagnosisAgent:
    """Sends a DiagnosisRequest to Gemini and returns a DiagnosisResult."""

    def __init__(self, model=None):
        self.model = model or get_gemini_model()

    @trace_agent
    def analyze(self, request: DiagnosisRequest) -> DiagnosisResult:
        if not self.model:
            raise AnalysisFailedError("Gemini model is not configured (missing API key)")

        try:
            response = self.model.generate_content(
                request.prompt,
                generation_config={
                    "response_mime_type": "application/json",
                    "response_schema": request.schema,
                },
            )
            # .text raises when the candidate was blocked or is empty
            text = response.text
        except Exception as e:
            logger.error(f"Gemini request failed: {e}")
            raise AnalysisFailedError(f"Gemini request failed: {e}") from e

        result = parse_diagnosis_response(text)
        logger.info(f"DiagnosisAgent: {result.imbalance.value} imbalance ({request.lang})")
        return result


def analyze_symptoms(
    profile: UserProfile,
    record: SymptomRecord,
    weather: WeatherData,
    lang: str = "th",
    agent: Optional[DiagnosisAgent] = None,
) -> DiagnosisResult:
    """Build the request for this session and run it through the agent."""
    request = build_diagnosis_request(profile, record, weather, lang)
    return (agent or DiagnosisAgent()).analyze(request)
