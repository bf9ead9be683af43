"""LLM Configuration for the Samutthan 4 Wizard.

This module handles Gemini model initialization with appropriate safety settings.
"""
import logging
from typing import Optional
import google.generativeai as genai
from config.settings import GOOGLE_API_KEY, GEMINI_MODEL_NAME

logger = logging.getLogger(__name__)


def get_gemini_model(model_name: Optional[str] = None):
    """
    Configures and returns a Gemini model instance.

    Args:
        model_name: Gemini model to use (default: GEMINI_MODEL_NAME from settings)

    Returns:
        GenerativeModel instance or None if API key is missing.
    """
    if not GOOGLE_API_KEY:
        logger.warning("GOOGLE_API_KEY not set. Diagnosis requests will fail until a key is configured.")
        return None

    genai.configure(api_key=GOOGLE_API_KEY)

    # Health content: block clearly harmful output, keep herbal/medical advice
    safety_settings = [
        {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
        {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
        {"category": "HARM_CATEGORY_SEXUALLY_EXPLICIT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
        {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    ]

    model = genai.GenerativeModel(
        model_name=model_name or GEMINI_MODEL_NAME,
        safety_settings=safety_settings,
    )
    return model
