"""Samutthan 4 Intake Wizard - Terminal Edition

Four-step linear intake: Profile → Symptoms → Context → Results.

- Temporal factors (birth element, age group, season, time period) are
  derived locally and deterministically
- The diagnosis itself is delegated to Gemini through DiagnosisAgent
- The results can be exported as a one-page PDF named after the patient
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from agents.diagnosis_agent import DiagnosisAgent, analyze_symptoms
from config.settings import DEFAULT_LANGUAGE, GOOGLE_API_KEY, REPORT_OUTPUT_PATH
from config.translations import COMMON_SYMPTOMS, SUPPORTED_LANGUAGES, symptom_label, t
from core.errors import AnalysisFailedError, ReportExportError
from core.observability import Tracer, get_metrics_summary
from models.diagnosis import DiagnosisResult
from models.session import Gender, WizardState, WizardStep
from services.report_service import export_report, render_report
from tools.ttm_calculators import get_birth_element, parse_birth_date

logger = logging.getLogger(__name__)

# Allowed backward moves; everything else goes forward or resets
BACK_TRANSITIONS = {
    WizardStep.SYMPTOMS: WizardStep.PROFILE,
    WizardStep.CONTEXT: WizardStep.SYMPTOMS,
}


class TTMWizard:
    """
    Controller for one intake session.

    Owns the WizardState exclusively; rendering and request building read it
    through this object. Transitions:
    - PROFILE → SYMPTOMS when a name is entered
    - SYMPTOMS → CONTEXT when at least one symptom is selected
    - CONTEXT → RESULTS only through a successful run_diagnosis()
    - SYMPTOMS → PROFILE and CONTEXT → SYMPTOMS going back
    - RESULTS → PROFILE through reset(), discarding everything

    Attributes:
        state: The session state (profile, symptoms, weather, diagnosis).
        agent: DiagnosisAgent used for the analysis call.
    """

    def __init__(self, lang: str = DEFAULT_LANGUAGE, agent: Optional[DiagnosisAgent] = None):
        self.agent = agent or DiagnosisAgent()
        self.state = WizardState(lang=lang if lang in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE)
        logger.info(f"New intake session ({self.state.lang}), season {self.state.weather.season.value}")

    @property
    def step(self) -> WizardStep:
        return self.state.step

    # === Step 1: Profile ===

    def set_name(self, name: str) -> bool:
        if self.state.step != WizardStep.PROFILE:
            return False
        self.state.profile.name = name or ""
        return True

    def set_birth_date(self, value: str) -> bool:
        """Update the birth date and its element. Unreadable dates are ignored."""
        if self.state.step != WizardStep.PROFILE:
            return False
        parsed = parse_birth_date(value)
        if parsed is None:
            logger.debug(f"Ignoring unreadable birth date: {value!r}")
            return False
        self.state.profile.birth_date = parsed.isoformat()
        self.state.profile.element_chao_ruean = get_birth_element(parsed)
        return True

    def set_gender(self, value: Union[Gender, str]) -> bool:
        if self.state.step != WizardStep.PROFILE:
            return False
        try:
            self.state.profile.gender = value if isinstance(value, Gender) else Gender(str(value).strip().capitalize())
        except ValueError:
            return False
        return True

    # === Step 2: Symptoms ===

    def _symptom_key(self, symptom: str) -> str:
        symptom = symptom.strip()
        if symptom in COMMON_SYMPTOMS:
            return symptom
        for key, labels in COMMON_SYMPTOMS.items():
            if symptom in labels.values():
                return key
        return symptom

    def toggle_symptom(self, symptom: str) -> bool:
        """Select or deselect a symptom (by key, or by label in either language)."""
        if self.state.step != WizardStep.SYMPTOMS:
            return False
        if not symptom or not symptom.strip():
            return False
        key = self._symptom_key(symptom)
        symptoms = self.state.record.symptoms
        if key in symptoms:
            symptoms.remove(key)
        else:
            symptoms.append(key)
        return True

    def set_notes(self, notes: str) -> bool:
        if self.state.step != WizardStep.SYMPTOMS:
            return False
        self.state.record.custom_notes = notes or ""
        return True

    # === Step 3: Context ===

    def set_onset(self, value: str) -> bool:
        """Set the onset time (HH:MM). Unreadable times are ignored."""
        if self.state.step != WizardStep.CONTEXT:
            return False
        try:
            parsed = datetime.strptime((value or "").strip(), "%H:%M")
        except ValueError:
            return False
        self.state.record.onset = parsed.strftime("%H:%M")
        return True

    def set_temperature(self, value: Union[int, str]) -> bool:
        if self.state.step == WizardStep.RESULTS:
            return False
        try:
            self.state.weather.temp = int(value)
        except (ValueError, TypeError):
            return False
        return True

    def set_condition(self, condition: str) -> bool:
        if self.state.step == WizardStep.RESULTS or not condition:
            return False
        self.state.weather.condition = condition.strip()
        return True

    # === Navigation ===

    def can_advance(self) -> bool:
        """Whether the forward control of the current step is enabled."""
        step = self.state.step
        if step == WizardStep.PROFILE:
            return bool(self.state.profile.name.strip())
        if step == WizardStep.SYMPTOMS:
            return len(self.state.record.symptoms) > 0
        if step == WizardStep.CONTEXT:
            return not self.state.busy
        return False

    def next_step(self) -> bool:
        """Advance PROFILE → SYMPTOMS → CONTEXT. CONTEXT moves on via run_diagnosis()."""
        step = self.state.step
        if step not in (WizardStep.PROFILE, WizardStep.SYMPTOMS) or not self.can_advance():
            return False
        self.state.step = WizardStep(step.value + 1)
        self.state.notice = None
        return True

    def back(self) -> bool:
        target = BACK_TRANSITIONS.get(self.state.step)
        if target is None or self.state.busy:
            return False
        self.state.step = target
        self.state.notice = None
        return True

    def reset(self):
        """Start a new intake, discarding every field (language is kept)."""
        self.state = WizardState(lang=self.state.lang)
        logger.info("Session reset")

    def toggle_language(self) -> str:
        self.state.lang = "en" if self.state.lang == "th" else "th"
        return self.state.lang

    # === Actions ===

    def run_diagnosis(self) -> Optional[DiagnosisResult]:
        """
        Request the diagnosis for the current session.

        On success the result is stored and the wizard enters RESULTS. On
        failure the wizard stays on CONTEXT and ``state.notice`` holds the
        localized "analysis failed" message.
        """
        state = self.state
        if state.step != WizardStep.CONTEXT or state.busy:
            return None
        if not state.record.symptoms:
            logger.warning("Diagnosis requested with no symptoms selected")
            state.notice = t(state.lang, "symptomRequired")
            return None

        state.busy = True
        state.notice = None
        try:
            result = analyze_symptoms(state.profile, state.record, state.weather, state.lang, agent=self.agent)
        except AnalysisFailedError as e:
            logger.error(f"Diagnosis failed: {e}")
            state.notice = t(state.lang, "analysisFailed")
            return None
        finally:
            state.busy = False

        state.diagnosis = result
        state.step = WizardStep.RESULTS
        return result

    def render_report(self) -> Optional[str]:
        if self.state.diagnosis is None:
            return None
        return render_report(self.state)

    def export_report(self, directory: Union[str, Path] = REPORT_OUTPUT_PATH) -> Optional[Path]:
        """Write the report file. On failure ``state.notice`` holds the localized message."""
        state = self.state
        if state.step != WizardStep.RESULTS or state.busy:
            return None

        state.busy = True
        state.notice = None
        try:
            with Tracer("ReportExport"):
                return export_report(state, directory)
        except ReportExportError as e:
            logger.error(f"Report export failed: {e}")
            state.notice = t(state.lang, "exportFailed")
            return None
        finally:
            state.busy = False

    def get_metrics(self) -> dict:
        """Get observability metrics for this process."""
        return get_metrics_summary()


BACK_COMMAND = "<"
LANGUAGE_COMMAND = "!"
QUIT_COMMANDS = ("q", "quit", "exit")


class QuitWizard(Exception):
    """Raised by the terminal prompts when the user asks to leave."""


def _ask(prompt: str, default: str = "") -> str:
    suffix = f" [{default}]" if default else ""
    answer = input(f"{prompt}{suffix}: ").strip()
    return answer or default


def _prompt(wizard: TTMWizard, prompt: str, default: str = "") -> Optional[str]:
    """
    Ask for a field value, handling the navigation commands.

    Returns None when the answer was a command, so the caller redraws the
    current step (which may have changed).
    """
    answer = _ask(prompt, default)
    if answer.lower() in QUIT_COMMANDS:
        raise QuitWizard()
    if answer == BACK_COMMAND:
        if not wizard.back():
            print(t(wizard.state.lang, "navHint"))
        return None
    if answer == LANGUAGE_COMMAND:
        wizard.toggle_language()
        return None
    return answer


def _profile_step(wizard: TTMWizard):
    lang = wizard.state.lang
    profile = wizard.state.profile
    print(f"\n== 1. {t(lang, 'patientProfile')} ==")
    print(t(lang, "navHint"))

    name = _prompt(wizard, t(lang, "fullName"), profile.name)
    if name is None:
        return
    wizard.set_name(name)
    if not wizard.can_advance():
        print(t(lang, "nameRequired"))
        return

    birth_date = _prompt(wizard, t(lang, "birthDate"), profile.birth_date)
    if birth_date is None:
        return
    wizard.set_birth_date(birth_date)

    options = "/".join(g.value for g in Gender)
    gender = _prompt(wizard, f"{t(lang, 'gender')} ({options})", profile.gender.value)
    if gender is None:
        return
    wizard.set_gender(gender)
    print(f"{t(lang, 'birthElementDesc')} {profile.element_chao_ruean.value}")
    wizard.next_step()


def _symptom_step(wizard: TTMWizard):
    lang = wizard.state.lang
    record = wizard.state.record
    keys = list(COMMON_SYMPTOMS)
    print(f"\n== 2. {t(lang, 'currentSymptoms')} ==")
    print(t(lang, "symptomsSubtitle"))
    for i, key in enumerate(keys, start=1):
        mark = "x" if key in record.symptoms else " "
        print(f"  [{mark}] {i}. {symptom_label(key, lang)}")

    picks = _prompt(wizard, "#, #, ...", ", ".join(str(keys.index(k) + 1) for k in record.symptoms if k in keys))
    if picks is None:
        return
    chosen = {keys[int(p) - 1] for p in picks.replace(",", " ").split() if p.isdigit() and 1 <= int(p) <= len(keys)}
    for key in keys:
        if (key in chosen) != (key in record.symptoms):
            wizard.toggle_symptom(key)
    if not wizard.can_advance():
        print(t(lang, "symptomRequired"))
        return

    notes = _prompt(wizard, t(lang, "additionalNotes"), record.custom_notes)
    if notes is None:
        return
    wizard.set_notes(notes)
    wizard.next_step()


def _context_step(wizard: TTMWizard):
    lang = wizard.state.lang
    weather = wizard.state.weather
    print(f"\n== 3. {t(lang, 'envSamutthan')} ==")
    print(f"{t(lang, 'currentSeason')}: {weather.season.value}")

    fields = [
        (t(lang, "kalaDesc"), wizard.state.record.onset, wizard.set_onset),
        (f"{t(lang, 'temperature')} (°C)", str(weather.temp), wizard.set_temperature),
        (t(lang, "condition"), weather.condition, wizard.set_condition),
    ]
    for label, default, setter in fields:
        answer = _prompt(wizard, label, default)
        if answer is None:
            return
        setter(answer)

    print(f"\n{t(lang, 'analyzing')}")
    if wizard.run_diagnosis() is None:
        # Stay on this step; the next pass offers the entered values again
        print(wizard.state.notice)


def _results_step(wizard: TTMWizard):
    lang = wizard.state.lang
    print("\n" + wizard.render_report())

    if _ask("export? (y/n)", "y").lower() == "y":
        path = wizard.export_report()
        print(f"{t(lang, 'reportSaved')}: {path}" if path else wizard.state.notice)

    if _ask("new session? (y/n)", "n").lower() != "y":
        raise QuitWizard()
    wizard.reset()


STEP_HANDLERS = {
    WizardStep.PROFILE: _profile_step,
    WizardStep.SYMPTOMS: _symptom_step,
    WizardStep.CONTEXT: _context_step,
    WizardStep.RESULTS: _results_step,
}


def main():
    print("=== Samutthan 4 Intake Wizard ===")

    if not GOOGLE_API_KEY:
        print("Error: GOOGLE_API_KEY not found.")
        return

    lang = _ask("Language / ภาษา (th/en)", DEFAULT_LANGUAGE)
    wizard = TTMWizard(lang=lang)
    print(f"\n{t(wizard.state.lang, 'appTitle')} - {t(wizard.state.lang, 'appSubtitle')}")

    try:
        while True:
            STEP_HANDLERS[wizard.step](wizard)
    except (QuitWizard, EOFError, KeyboardInterrupt):
        print()

    logger.info(f"Session metrics: {wizard.get_metrics()}")


if __name__ == "__main__":
    main()
