import os
from dataclasses import dataclass


DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_CORS_ORIGINS = ["http://localhost:5173"]


@dataclass(frozen=True)
class Settings:
    youtube_api_key: str | None
    request_timeout: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = "INFO"


def _parse_timeout(raw: str | None) -> float:
    try:
        value = float((raw or "").strip())
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS
    return value if value > 0 else DEFAULT_TIMEOUT_SECONDS


def get_settings() -> Settings:
    """
    Read configuration from the environment on every call, so a key added
    to the environment is picked up without a restart.
    """
    api_key = (os.getenv("YT_API_KEY") or os.getenv("YOUTUBE_API_KEY") or "").strip()
    return Settings(
        youtube_api_key=api_key or None,
        request_timeout=_parse_timeout(os.getenv("YOUTUBE_API_TIMEOUT")),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
    )


def parse_cors_origins() -> tuple[list[str], bool]:
    raw = (os.getenv("CORS_ALLOWED_ORIGINS") or "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS), True
    if raw == "*":
        return ["*"], False
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    if not origins:
        return list(DEFAULT_CORS_ORIGINS), True
    return origins, True
