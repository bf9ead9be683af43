"""Central Configuration for the Samutthan 4 Wizard."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Base Directory (Root of the project)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load Environment Variables
load_dotenv(BASE_DIR / ".env")

# LLM Settings
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY")
GEMINI_MODEL_NAME = os.getenv("GEMINI_MODEL_NAME", "gemini-2.5-flash")

# Paths
REPORT_OUTPUT_PATH = Path(os.getenv("REPORT_OUTPUT_PATH", BASE_DIR / "reports"))
REPORT_FONT_PATH = os.getenv("REPORT_FONT_PATH")  # TTF with Thai glyphs for the PDF report

# Wizard Defaults
DEFAULT_LANGUAGE = "th"
DEFAULT_BIRTH_DATE = "1990-01-01"
DEFAULT_TEMPERATURE_C = 32
DEFAULT_WEATHER_CONDITION = "Sunny"
