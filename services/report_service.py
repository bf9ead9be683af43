"""Report Service

Renders the printable patient report and exports it as a one-page PDF.

The report mirrors the results screen: patient header, diagnosis summary,
imbalance, the three deterministic factors, the model's reasoning, the three
recommendation lists and the safety notice. Labels follow the session
language.
"""
import logging
import re
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import List, Optional, Tuple, Union

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from config.settings import BASE_DIR, REPORT_FONT_PATH
from config.translations import t
from core.errors import ReportExportError
from models.session import Gender, WizardState
from tools.ttm_calculators import get_age_group

logger = logging.getLogger(__name__)

REPORT_PREFIX = "ThaiMed_Report_"
ANONYMOUS_NAME = "Anonymous"

REPORT_FONT_NAME = "TTMReportFont"
FALLBACK_FONT = "Helvetica"

# Thai-capable fonts first; DejaVu still covers Latin text well
FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/tlwg/Garuda.ttf",
    "/usr/share/fonts/truetype/noto/NotoSansThai-Regular.ttf",
    "/usr/share/fonts/truetype/thai/Garuda.ttf",
    r"C:\Windows\Fonts\tahoma.ttf",
    "/Library/Fonts/Tahoma.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
]

_GENDER_KEYS = {
    Gender.MALE: "male",
    Gender.FEMALE: "female",
    Gender.OTHER: "other",
}

# (kind, text): "title", "heading" or "body"
ReportLine = Tuple[str, str]

_UNSAFE_FILENAME_CHARS = re.compile(r"[\x00-\x1f\x7f/\\]")

_registered_font: Optional[str] = None


def report_filename(name: str) -> str:
    """Deterministic file name for a patient; blank names become Anonymous."""
    safe = _UNSAFE_FILENAME_CHARS.sub("_", (name or "").strip()).strip("_ ")
    return f"{REPORT_PREFIX}{safe or ANONYMOUS_NAME}.pdf"


def _font_paths() -> List[str]:
    paths = [REPORT_FONT_PATH] if REPORT_FONT_PATH else []
    paths += [str(p) for p in sorted((BASE_DIR / "fonts").glob("*.ttf"))]
    return paths + FONT_CANDIDATES


def report_font() -> str:
    """Register the first usable TTF once; Helvetica if none is found."""
    global _registered_font
    if _registered_font:
        return _registered_font

    _registered_font = FALLBACK_FONT
    for path in _font_paths():
        if not Path(path).exists():
            continue
        try:
            pdfmetrics.registerFont(TTFont(REPORT_FONT_NAME, path))
        except Exception:
            logger.exception(f"Failed to register report font {path}")
            continue
        logger.info(f"Registered report font: {path}")
        _registered_font = REPORT_FONT_NAME
        break
    else:
        logger.warning("No Thai-capable TTF found; Thai text will not render in PDF reports")
    return _registered_font


def report_lines(state: WizardState, generated_at: Optional[datetime] = None) -> List[ReportLine]:
    """Report content as typed lines, shared by the terminal and the PDF."""
    diagnosis = state.diagnosis
    if diagnosis is None:
        raise ReportExportError("No diagnosis to report")

    lang = state.lang
    profile = state.profile
    generated_at = generated_at or datetime.now()
    age_group = get_age_group(profile.birth_date, generated_at.date())
    recs = diagnosis.recommendations

    def bullets(items):
        return [("body", f"\u2022 {item}") for item in items] or [("body", "-")]

    return [
        ("title", t(lang, "reportTitle")),
        ("body", f"{t(lang, 'fullName')}: {profile.name}"),
        ("body", f"{t(lang, 'gender')}: {t(lang, _GENDER_KEYS.get(profile.gender, 'other'))}"),
        ("body", f"{t(lang, 'birthDate')}: {profile.birth_date}"),
        ("body", f"{t(lang, 'reportTime')}: {generated_at.strftime('%Y-%m-%d %H:%M')}"),
        ("heading", t(lang, "diagnosisSummary")),
        ("body", diagnosis.summary),
        ("body", f"{diagnosis.imbalance.value} {t(lang, 'imbalanceSuffix')}"),
        ("heading", t(lang, "elementLabel")),
        ("body", profile.element_chao_ruean.value),
        ("heading", t(lang, "seasonFactor")),
        ("body", state.weather.season.value),
        ("heading", t(lang, "ageFactor")),
        ("body", age_group.value),
        ("heading", t(lang, "aiLogic")),
        ("body", f"\"{diagnosis.logic}\""),
        ("heading", t(lang, "dietaryCare")),
        *bullets(recs.food),
        ("heading", t(lang, "lifestyle")),
        *bullets(recs.lifestyle),
        ("heading", t(lang, "herbs")),
        *bullets(recs.herbs),
        ("heading", t(lang, "notice")),
        ("body", t(lang, "noticeText")),
    ]


def render_report(state: WizardState, generated_at: Optional[datetime] = None) -> str:
    """Plain-text rendering for the terminal."""
    out = []
    for kind, text in report_lines(state, generated_at):
        if kind == "title":
            out += [text.upper(), "=" * len(text)]
        elif kind == "heading":
            out += ["", text, "-" * len(text)]
        else:
            out.append(text)
    return "\n".join(out) + "\n"


def build_report_pdf(state: WizardState, generated_at: Optional[datetime] = None) -> bytes:
    """
    Lay the report out on a single page.

    The page keeps the A4 width and grows in height with the content, so
    the whole report is always one page.
    """
    lines = report_lines(state, generated_at)
    font = report_font()
    sizes = {"title": 16, "heading": 12, "body": 10}
    left = 20 * mm
    width = A4[0] - 2 * left

    wrapped = []
    for kind, text in lines:
        size = sizes[kind]
        gap = 4 * mm if kind == "heading" else 0
        for i, part in enumerate(simpleSplit(text, font, size, width) or [""]):
            wrapped.append((size, part, gap if i == 0 else 0))

    content_height = sum(size * 1.4 + gap for size, _, gap in wrapped)
    page_height = max(A4[1], content_height + 40 * mm)

    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=(A4[0], page_height))
    c.setTitle(t(state.lang, "reportTitle"))
    y = page_height - 20 * mm
    for size, part, gap in wrapped:
        y -= gap + size * 1.4
        c.setFont(font, size)
        c.drawString(left, y, part)
    c.showPage()
    c.save()
    return buf.getvalue()


def export_report(
    state: WizardState,
    directory: Union[str, Path],
    generated_at: Optional[datetime] = None,
) -> Path:
    """
    Write the PDF report into ``directory`` and return its path.

    Raises:
        ReportExportError: nothing to report, or the PDF could not be
            generated or written.
    """
    path = Path(directory) / report_filename(state.profile.name)
    try:
        data = build_report_pdf(state, generated_at)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except ReportExportError:
        raise
    except Exception as e:
        raise ReportExportError(f"PDF generation failed for {path}: {e}") from e

    logger.info(f"Report written: {path}")
    return path
