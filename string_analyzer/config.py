import os
from dotenv import load_dotenv

# Load environment variables only for local development
if os.path.exists(".env"):
    load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# ------------------------------------------------------------------------------
# APPLICATION
# ------------------------------------------------------------------------------

APP_NAME = os.getenv("APP_NAME", "String Analyzer Service")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# ------------------------------------------------------------------------------
# SERVER
# ------------------------------------------------------------------------------

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8000))
RELOAD = _env_bool("RELOAD")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

# ------------------------------------------------------------------------------
# STORE POLICY
# ------------------------------------------------------------------------------

# Empty strings are rejected on create unless explicitly allowed
ALLOW_EMPTY_VALUES = _env_bool("ALLOW_EMPTY_VALUES")
