import os
import logging

try:
    import streamlit as st  # type: ignore
    _HAS_STREAMLIT = True
except Exception:
    _HAS_STREAMLIT = False

logger = logging.getLogger(__name__)


DEFAULT_MISTRAL_MODEL = "mistral-large-latest"
DEFAULT_HTTP_TIMEOUT_SECONDS = 15.0
DEFAULT_HEALTHBUDDY_SPACE = "gauravbhatt9854/healthBuddy"
DEFAULT_LOOKUP_API_URL = "http://localhost:8000/api/find-doctor"


def get_secret(name: str, default: str | None = None) -> str | None:
    # Prefer Streamlit secrets if available
    if _HAS_STREAMLIT:
        try:
            if name in st.secrets:
                return str(st.secrets.get(name))
        except Exception:
            # No secrets.toml outside of `streamlit run`
            pass
    # Fallback to environment variables
    return os.environ.get(name, default)


def _get_float(name: str, default: float) -> float:
    raw = get_secret(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid %s=%r; using %s", name, raw, default)
        return default


class Settings:
    """Process-wide configuration, resolved once and handed to adapters."""

    def __init__(self):
        self.mistral_api_key: str | None = get_secret("MISTRAL_API_KEY")
        self.mistral_model: str = get_secret("MISTRAL_MODEL") or DEFAULT_MISTRAL_MODEL
        self.google_places_api_key: str | None = get_secret("GOOGLE_PLACES_API_KEY")
        self.http_timeout: float = _get_float("HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS)
        self.healthbuddy_space: str = get_secret("HEALTHBUDDY_SPACE") or DEFAULT_HEALTHBUDDY_SPACE
        self.lookup_api_url: str = get_secret("LOOKUP_API_URL") or DEFAULT_LOOKUP_API_URL
        self.host: str = get_secret("HOST") or "0.0.0.0"
        self.port: int = int(_get_float("PORT", 8000))
        self.log_level: str = get_secret("LOG_LEVEL") or "INFO"
