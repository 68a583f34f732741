import re
from urllib.parse import parse_qs, urlparse


CHANNEL_URL_RE = re.compile(r"/channel/(UC[a-zA-Z0-9_-]{20,})")
HANDLE_URL_RE = re.compile(r"youtube\.com/@([a-zA-Z0-9._-]+)", re.IGNORECASE)
VIDEO_PATH_PREFIXES = ("shorts", "live")


def _path_segments(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


def extract_video_id(value: str) -> str | None:
    """
    Supports watch?v=, youtu.be/<id>, /shorts/<id> and /live/<id> links.
    Anything that is not an absolute URL is not a video link.
    """
    try:
        parsed = urlparse(value)
        host = parsed.hostname or ""
    except ValueError:
        return None
    if not parsed.scheme or not host:
        return None

    if host.startswith("www."):
        host = host[4:]

    if host == "youtu.be":
        segments = _path_segments(parsed.path)
        return segments[0] if segments else None

    if host.endswith("youtube.com"):
        if parsed.path == "/watch":
            video_id = (parse_qs(parsed.query).get("v") or [None])[0]
            return video_id or None
        segments = _path_segments(parsed.path)
        if len(segments) >= 2 and segments[0] in VIDEO_PATH_PREFIXES:
            return segments[1]

    return None


def extract_channel_id_from_channel_url(value: str) -> str | None:
    m = CHANNEL_URL_RE.search(value)
    return m.group(1) if m else None


def extract_handle(value: str) -> str | None:
    # Accept plain @handle.
    if value.startswith("@"):
        return value[1:].strip() or None

    m = HANDLE_URL_RE.search(value)
    return m.group(1) if m else None
