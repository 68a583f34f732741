from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


HIDDEN_SUBSCRIBERS = "Hidden"
CHANNEL_URL_TEMPLATE = "https://www.youtube.com/channel/{channel_id}"


class YouTubeModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Thumbnail(YouTubeModel):
    url: str | None = None


class Thumbnails(YouTubeModel):
    default: Thumbnail | None = None
    medium: Thumbnail | None = None
    high: Thumbnail | None = None

    def preferred_url(self) -> str | None:
        for thumb in (self.default, self.medium, self.high):
            if thumb and thumb.url:
                return thumb.url
        return None


class Snippet(YouTubeModel):
    channel_id: str | None = Field(default=None, alias="channelId")
    title: str | None = None
    thumbnails: Thumbnails | None = None


class Statistics(YouTubeModel):
    # Omitted by the API when the owner hides the count.
    subscriber_count: int | None = Field(default=None, alias="subscriberCount")


class SearchResultId(YouTubeModel):
    kind: str | None = None
    channel_id: str | None = Field(default=None, alias="channelId")


class ResourceItem(YouTubeModel):
    id: str | SearchResultId | None = None
    snippet: Snippet | None = None
    statistics: Statistics | None = None

    @property
    def snippet_channel_id(self) -> str | None:
        return self.snippet.channel_id if self.snippet else None


class ListResponse(YouTubeModel):
    items: list[ResourceItem] | None = None

    def first_item(self) -> ResourceItem | None:
        return self.items[0] if self.items else None


class ChannelSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    subscribers: int | Literal["Hidden"]
    thumbnail: str | None = None
    channel_url: str = Field(alias="channelUrl")


def build_channel_summary(channel_id: str, item: ResourceItem) -> ChannelSummary:
    snippet = item.snippet or Snippet()
    stats = item.statistics or Statistics()
    subscribers = stats.subscriber_count if stats.subscriber_count is not None else HIDDEN_SUBSCRIBERS
    return ChannelSummary(
        title=snippet.title or "Channel",
        subscribers=subscribers,
        thumbnail=snippet.thumbnails.preferred_url() if snippet.thumbnails else None,
        channel_url=CHANNEL_URL_TEMPLATE.format(channel_id=channel_id),
    )
