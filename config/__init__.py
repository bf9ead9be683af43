"""Wizard Configuration Module.

This module handles LLM configuration, environment settings and the
bilingual string tables.

Functions:
    get_gemini_model: Initialize and return a configured Gemini model.
    t: Look up a UI string for a language.
    symptom_label: Resolve a symptom key to its localized label.
"""
from config.llm import get_gemini_model
from config.translations import t, symptom_label

__all__ = ["get_gemini_model", "t", "symptom_label"]
