# footprint/config.py
import os

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DB_PATH = os.path.join(BASE_DIR, "data", "footprint.db")

DATABASE_URL = os.environ.get("FOOTPRINT_DATABASE_URL", f"sqlite:///{DB_PATH}")

GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")
GEMINI_URL = os.environ.get(
    "GEMINI_URL",
    "https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-flash:generateContent",
)
# one shared timeout for outbound HTTP, each client can still override it
HTTP_TIMEOUT_SECONDS = os.environ.get("HTTP_TIMEOUT_SECONDS")
OCR_TIMEOUT_SECONDS = float(os.environ.get("OCR_TIMEOUT_SECONDS", HTTP_TIMEOUT_SECONDS or "30"))

OPEN_METEO_URL = os.environ.get("OPEN_METEO_URL", "https://api.open-meteo.com/v1/forecast")
CLIMATE_PAST_DAYS = int(os.environ.get("CLIMATE_PAST_DAYS", "30"))
CLIMATE_TIMEOUT_SECONDS = float(os.environ.get("CLIMATE_TIMEOUT_SECONDS", HTTP_TIMEOUT_SECONDS or "10"))

LOG_LEVEL = os.environ.get("FOOTPRINT_LOG_LEVEL", "INFO")
