import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
GEMINI_MODEL = "gemini-2.5-flash"


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    return float(value)


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str = ""
    gemini_model: str = GEMINI_MODEL
    gemini_base_url: str = GEMINI_BASE_URL
    # None means the outbound call may block indefinitely
    gemini_timeout: Optional[float] = None
    host: str = "127.0.0.1"
    port: int = 3001
    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY") or "",
            gemini_model=os.getenv("GEMINI_MODEL", GEMINI_MODEL),
            gemini_base_url=os.getenv("GEMINI_BASE_URL", GEMINI_BASE_URL).rstrip("/"),
            gemini_timeout=_optional_float(os.getenv("GEMINI_TIMEOUT")),
            host=os.getenv("HOST", "127.0.0.1"),
            port=int(os.getenv("PORT", "3001")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_json=os.getenv("LOG_JSON", "false").lower() in ("true", "1", "yes"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
