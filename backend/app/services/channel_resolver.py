import logging
from collections.abc import Callable

from backend.app.errors import NotFoundError
from backend.app.services.channel_links import (
    extract_channel_id_from_channel_url,
    extract_handle,
    extract_video_id,
)
from backend.app.services.youtube_api import (
    YOUTUBE_CHANNELS_LIST,
    YOUTUBE_SEARCH_LIST,
    YOUTUBE_VIDEOS_LIST,
    youtube_api_get,
)
from backend.app.services.youtube_models import ChannelSummary, ListResponse, build_channel_summary


logger = logging.getLogger(__name__)

VIDEO_NOT_FOUND_MESSAGE = "Could not resolve channel from that video link."
SEARCH_NOT_FOUND_MESSAGE = "Channel not found. Try another name or paste a channel/video URL."
CHANNEL_NOT_FOUND_MESSAGE = "Channel not found by ID."

Strategy = Callable[[str], str | None]


class ChannelResolver:
    """
    Turns a free-form query into a channel summary.

    Strategies run in order and the first one that yields a channel id wins:
    channel URL, then video URL, then a channel search on the handle or the
    raw text. A video link that leads nowhere is terminal and never falls
    through to search.
    """

    def __init__(self, api_key: str, timeout: float = 15):
        self.api_key = api_key
        self.timeout = timeout

    def _list(self, url: str, params: dict) -> ListResponse:
        payload = youtube_api_get(url, {**params, "key": self.api_key}, timeout=self.timeout)
        if not isinstance(payload, dict):
            return ListResponse()
        return ListResponse.model_validate(payload)

    def from_channel_url(self, query: str) -> str | None:
        return extract_channel_id_from_channel_url(query)

    def from_video_url(self, query: str) -> str | None:
        video_id = extract_video_id(query)
        if not video_id:
            return None
        logger.debug("Looking up channel for video %s", video_id)
        item = self._list(YOUTUBE_VIDEOS_LIST, {"part": "snippet", "id": video_id}).first_item()
        channel_id = item.snippet_channel_id if item else None
        if not channel_id:
            raise NotFoundError(VIDEO_NOT_FOUND_MESSAGE, kind="video")
        return channel_id

    def from_search(self, query: str) -> str | None:
        search_text = extract_handle(query) or query
        logger.debug("Searching channels for %r", search_text)
        item = self._list(
            YOUTUBE_SEARCH_LIST,
            {
                "part": "snippet",
                "type": "channel",
                "maxResults": 1,
                "q": search_text,
            },
        ).first_item()
        channel_id = None
        if item:
            channel_id = item.snippet_channel_id
            if not channel_id and not isinstance(item.id, str) and item.id:
                channel_id = item.id.channel_id
        if not channel_id:
            raise NotFoundError(SEARCH_NOT_FOUND_MESSAGE, kind="search")
        return channel_id

    def strategies(self) -> list[Strategy]:
        return [self.from_channel_url, self.from_video_url, self.from_search]

    def resolve_channel_id(self, query: str) -> str:
        channel_id = first_resolved(query, self.strategies())
        if not channel_id:
            raise NotFoundError(SEARCH_NOT_FOUND_MESSAGE, kind="search")
        return channel_id

    def fetch_summary(self, channel_id: str) -> ChannelSummary:
        item = self._list(
            YOUTUBE_CHANNELS_LIST,
            {"part": "snippet,statistics", "id": channel_id},
        ).first_item()
        if not item:
            raise NotFoundError(CHANNEL_NOT_FOUND_MESSAGE, kind="channel_id")
        return build_channel_summary(channel_id, item)

    def resolve(self, query: str) -> ChannelSummary:
        channel_id = self.resolve_channel_id(query)
        return self.fetch_summary(channel_id)


def first_resolved(query: str, strategies: list[Strategy]) -> str | None:
    for strategy in strategies:
        value = strategy(query)
        if value:
            logger.info("Resolved %r to %s via %s", query, value, strategy.__name__)
            return value
    return None


def resolve_channel_summary(query: str, api_key: str, timeout: float = 15) -> ChannelSummary:
    return ChannelResolver(api_key, timeout=timeout).resolve(query)
