import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent
PUBLIC_DIR = Path(os.getenv("PUBLIC_DIR", BASE_DIR / "public"))
UPLOADS_DIR = Path(os.getenv("UPLOADS_DIR", PUBLIC_DIR / "uploads"))

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

# Fixed ceilings
MAX_UPLOAD_BYTES = 10 * 1024 * 1024
MAX_JSON_BYTES = 10 * 1024

_cors = os.getenv("CORS_ORIGINS", "*")
CORS_ORIGINS = "*" if _cors.strip() == "*" else [o.strip() for o in _cors.split(",") if o.strip()]

# Public invitee routes
RATE_LIMIT_WINDOW = int(os.getenv("RATE_LIMIT_WINDOW", "60"))  # seconds
RATE_LIMIT_MAX = int(os.getenv("RATE_LIMIT_MAX", "30"))  # requests per window

# When enabled an invite can only be answered once
LOCK_RESPONSES = os.getenv("LOCK_RESPONSES", "false").lower() in ("1", "true", "yes")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def as_mapping():
    """Return the settings in the shape Flask's app.config expects."""
    return {
        "PUBLIC_DIR": PUBLIC_DIR,
        "UPLOADS_DIR": UPLOADS_DIR,
        "MAX_UPLOAD_BYTES": MAX_UPLOAD_BYTES,
        "MAX_JSON_BYTES": MAX_JSON_BYTES,
        "CORS_ORIGINS": CORS_ORIGINS,
        "RATE_LIMIT_WINDOW": RATE_LIMIT_WINDOW,
        "RATE_LIMIT_MAX": RATE_LIMIT_MAX,
        "LOCK_RESPONSES": LOCK_RESPONSES,
        "LOG_LEVEL": LOG_LEVEL,
    }
