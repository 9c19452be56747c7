# backend/config.py
import os

import pytz
from dotenv import load_dotenv

load_dotenv()

# Gemini
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

# Storage: "memory" or "firestore"
EVENT_STORE = os.getenv("EVENT_STORE", "memory").lower()
FIREBASE_CREDENTIALS = os.getenv("FIREBASE_CREDENTIALS")
SEED_SAMPLE_EVENTS = os.getenv("SEED_SAMPLE_EVENTS", "true").lower() == "true"

# Auth
SECRET_KEY = os.getenv("SECRET_KEY", "local-vibe-dev-secret-change-me")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "480"))  # 8 hours

# Filtering
TIMEZONE = pytz.timezone(os.getenv("TIMEZONE", "Europe/Bucharest"))
DEFAULT_MAX_DISTANCE_KM = float(os.getenv("DEFAULT_MAX_DISTANCE_KM", "200"))

# Geocoding
NOMINATIM_URL = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org")
USER_AGENT = os.getenv("USER_AGENT", "local-vibe/1.0")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
