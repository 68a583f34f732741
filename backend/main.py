import logging

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.app.errors import (
    ConfigurationError,
    SubscriberLookupError,
    UnexpectedError,
    ValidationError,
)
from backend.app.logging_config import configure_logging
from backend.app.services.channel_resolver import resolve_channel_summary
from backend.app.services.youtube_models import ChannelSummary
from backend.app.settings import Settings, get_settings, parse_cors_origins


# ---------------------------
# App setup
# ---------------------------

load_dotenv()
configure_logging(get_settings().log_level)

logger = logging.getLogger(__name__)

# Short CDN cache to save API quota.
CACHE_CONTROL = "s-maxage=20, stale-while-revalidate=60"

app = FastAPI(title="YouTube Subscriber Lookup")

cors_origins, cors_credentials = parse_cors_origins()

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=cors_credentials,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(SubscriberLookupError)
async def subscriber_lookup_error_handler(_request: Request, exc: SubscriberLookupError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/api/subscribers", response_model=ChannelSummary)
def subscribers(
    response: Response,
    q: str | None = Query(default=None),
    settings: Settings = Depends(get_settings),
):
    query = (q or "").strip()
    if not query:
        raise ValidationError("Missing query q")

    if not settings.youtube_api_key:
        logger.error("YT_API_KEY is not configured")
        raise ConfigurationError("Missing YT_API_KEY in server env variables")

    try:
        summary = resolve_channel_summary(query, settings.youtube_api_key, timeout=settings.request_timeout)
    except SubscriberLookupError:
        raise
    except Exception as exc:
        logger.exception("Unexpected failure resolving %r", query)
        raise UnexpectedError(str(exc) or "Unexpected error") from exc

    response.headers["Cache-Control"] = CACHE_CONTROL
    return summary
