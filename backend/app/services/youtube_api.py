import logging
from typing import Any

import requests

from backend.app.errors import UpstreamError


logger = logging.getLogger(__name__)

YOUTUBE_VIDEOS_LIST = "https://www.googleapis.com/youtube/v3/videos"
YOUTUBE_SEARCH_LIST = "https://www.googleapis.com/youtube/v3/search"
YOUTUBE_CHANNELS_LIST = "https://www.googleapis.com/youtube/v3/channels"

DEFAULT_ERROR_MESSAGE = "YouTube API error"


def _json_or_empty(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {}


def _upstream_error_details(payload: Any) -> tuple[str | None, str | None]:
    if not isinstance(payload, dict):
        return None, None
    error = payload.get("error")
    if not isinstance(error, dict):
        return None, None
    message = error.get("message") or None
    reason = None
    errors = error.get("errors")
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        reason = errors[0].get("reason")
    return message, reason


def youtube_api_get(url: str, params: dict[str, Any], timeout: float = 15) -> Any:
    try:
        response = requests.get(url, params=params, timeout=timeout)
    except requests.RequestException as exc:
        logger.warning("YouTube request to %s failed: %s", url, exc.__class__.__name__)
        raise UpstreamError("YouTube is temporarily unavailable. Please try again.") from exc

    payload = _json_or_empty(response)
    if response.ok:
        return payload

    message, reason = _upstream_error_details(payload)
    error = UpstreamError(message or DEFAULT_ERROR_MESSAGE, upstream_status=response.status_code, reason=reason)
    if error.is_quota_exceeded:
        logger.warning("YouTube API quota exceeded (%s)", reason)
    else:
        logger.warning("YouTube API returned %s for %s: %s", response.status_code, url, error.message)
    raise error
