# config/config.py
import os
from dotenv import load_dotenv

# Load .env file from project root
load_dotenv()

class Config:
    # --- App settings ---
    FLASK_ENV = os.getenv("FLASK_ENV", "production")
    DEBUG = os.getenv("FLASK_DEBUG", "false").lower() in ("1", "true", "yes")
    APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT = int(os.getenv("APP_PORT", 3221))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # --- CORS Settings ---
    # Accept comma-separated values: e.g., "http://localhost:7771,http://127.0.0.1:5500"
    ALLOWED_ORIGINS = [
        o.strip() for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:7771").split(",") if o.strip()
    ]

    # --- Uploads ---
    UPLOAD_DIR = os.getenv("UPLOAD_DIR", os.path.join(os.getcwd(), "uploads"))
    MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", 5 * 1024 * 1024))
    # Four documents plus the form fields
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", 21 * 1024 * 1024))

    # --- Rate limiting (Flask-Limiter) ---
    # Applied per client address to the mutating endpoints
    RATE_LIMIT = os.getenv("RATE_LIMIT", "100 per 15 minutes")
    RATELIMIT_ENABLED = os.getenv("RATELIMIT_ENABLED", "true").lower() in ("1", "true", "yes")
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    # Counted over a rolling window
    RATELIMIT_STRATEGY = os.getenv("RATELIMIT_STRATEGY", "moving-window")

    # --- Database ---
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./applications.db")
