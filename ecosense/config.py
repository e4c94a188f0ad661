"""
EcoSense AI - Configuration
Environment-driven settings shared by the Flask app and the API adapters
"""

import os
import logging
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


# ========================
# FLASK
# ========================

SECRET_KEY = os.getenv("SECRET_KEY", "dev-key-please-change-this-in-production")
MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", 25))
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if origin.strip()
]
QUIET_WERKZEUG = _env_flag("QUIET_WERKZEUG", False)

# Artificial inference latency for the showcase features
SIMULATE_LATENCY = _env_flag("SIMULATE_LATENCY", True)

# ========================
# API CONFIGURATIONS
# ========================

# OpenWeather API (Weather, Air Quality, Geocoding)
OPENWEATHER_BASE_URL = os.getenv("OPENWEATHER_BASE_URL", "https://api.openweathermap.org/data/2.5")
OPENWEATHER_GEO_URL = os.getenv("OPENWEATHER_GEO_URL", "https://api.openweathermap.org/geo/1.0")
OPENWEATHER_API_KEY = os.getenv("OPENWEATHER_API_KEY")

# Hugging Face Inference API (free tier works without a key, rate limited)
HUGGINGFACE_BASE_URL = os.getenv("HUGGINGFACE_BASE_URL", "https://api-inference.huggingface.co/models")
HUGGINGFACE_API_KEY = os.getenv("HUGGINGFACE_API_KEY") or os.getenv("HF_TOKEN")

# Google Gemini (structured generation)
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")

HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", 10))


def validate_env():
    """Log missing API keys. Returns True when every key is present."""
    missing = []

    if not GEMINI_API_KEY:
        missing.append('GEMINI_API_KEY')
    if not OPENWEATHER_API_KEY:
        missing.append('OPENWEATHER_API_KEY')

    if missing:
        logger.warning(f"⚠️ Missing environment variables: {', '.join(missing)} - fallback data will be used")

    return len(missing) == 0
