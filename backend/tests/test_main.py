import pytest
from fastapi.testclient import TestClient
from starlette.responses import Response

import backend.main as main_module
import backend.app.services.channel_resolver as resolver_module
from backend.app.errors import ConfigurationError, NotFoundError, UpstreamError, ValidationError
from backend.app.services.youtube_api import YOUTUBE_CHANNELS_LIST, YOUTUBE_SEARCH_LIST, YOUTUBE_VIDEOS_LIST
from backend.app.services.youtube_models import ChannelSummary
from backend.app.settings import Settings

CHANNEL_ID = "UCabcdefghijklmnopqrst"


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("YT_API_KEY", "test-key")
    monkeypatch.delenv("YOUTUBE_API_KEY", raising=False)
    return TestClient(main_module.app)


def make_summary(subscribers=42) -> ChannelSummary:
    return ChannelSummary(
        title="Creator",
        subscribers=subscribers,
        thumbnail="https://img/default.jpg",
        channel_url=f"https://www.youtube.com/channel/{CHANNEL_ID}",
    )


def fake_upstream(responses: dict, calls: list):
    def fake_get(url, params, timeout=15):
        calls.append(url)
        return responses[url]

    return fake_get


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_subscribers_direct_call_sets_cache_header(monkeypatch):
    seen = {}

    def fake_resolve(query, api_key, timeout=15):
        seen.update(query=query, api_key=api_key, timeout=timeout)
        return make_summary()

    monkeypatch.setattr(main_module, "resolve_channel_summary", fake_resolve)
    response = Response()

    summary = main_module.subscribers(response=response, q="  @creator ", settings=Settings(youtube_api_key="k", request_timeout=4))

    assert summary.subscribers == 42
    assert seen == {"query": "@creator", "api_key": "k", "timeout": 4}
    assert response.headers["Cache-Control"] == "s-maxage=20, stale-while-revalidate=60"


def test_subscribers_direct_call_validates_before_config():
    with pytest.raises(ValidationError):
        main_module.subscribers(response=Response(), q="   ", settings=Settings(youtube_api_key=None))
    with pytest.raises(ConfigurationError):
        main_module.subscribers(response=Response(), q="anything", settings=Settings(youtube_api_key=None))


@pytest.mark.parametrize("path", ["/api/subscribers", "/api/subscribers?q=", "/api/subscribers?q=%20%20"])
def test_missing_query_is_400(client, path):
    response = client.get(path)
    assert response.status_code == 400
    assert response.json() == {"error": "Missing query q"}


@pytest.mark.parametrize("query", ["@creator", "https://youtu.be/abc123", "plain text"])
def test_missing_api_key_is_500(client, monkeypatch, query):
    monkeypatch.delenv("YT_API_KEY", raising=False)
    monkeypatch.delenv("YOUTUBE_API_KEY", raising=False)

    response = client.get("/api/subscribers", params={"q": query})

    assert response.status_code == 500
    assert response.json() == {"error": "Missing YT_API_KEY in server env variables"}


def test_full_chain_success(client, monkeypatch):
    calls = []
    responses = {
        YOUTUBE_SEARCH_LIST: {"items": [{"snippet": {"channelId": CHANNEL_ID}}]},
        YOUTUBE_CHANNELS_LIST: {
            "items": [
                {
                    "id": CHANNEL_ID,
                    "snippet": {
                        "title": "Creator",
                        "thumbnails": {"medium": {"url": "https://img/medium.jpg"}},
                    },
                    "statistics": {"subscriberCount": "1500000"},
                }
            ]
        },
    }
    monkeypatch.setattr(resolver_module, "youtube_api_get", fake_upstream(responses, calls))

    response = client.get("/api/subscribers", params={"q": "@creator"})

    assert response.status_code == 200
    assert response.headers["cache-control"] == "s-maxage=20, stale-while-revalidate=60"
    assert response.json() == {
        "title": "Creator",
        "subscribers": 1500000,
        "thumbnail": "https://img/medium.jpg",
        "channelUrl": f"https://www.youtube.com/channel/{CHANNEL_ID}",
    }
    assert calls == [YOUTUBE_SEARCH_LIST, YOUTUBE_CHANNELS_LIST]


def test_hidden_subscribers(client, monkeypatch):
    calls = []
    responses = {
        YOUTUBE_CHANNELS_LIST: {"items": [{"id": CHANNEL_ID, "snippet": {"title": "Quiet"}, "statistics": {}}]},
    }
    monkeypatch.setattr(resolver_module, "youtube_api_get", fake_upstream(responses, calls))

    response = client.get("/api/subscribers", params={"q": f"https://www.youtube.com/channel/{CHANNEL_ID}"})

    assert response.status_code == 200
    assert response.json()["subscribers"] == "Hidden"
    assert response.json()["thumbnail"] is None
    assert calls == [YOUTUBE_CHANNELS_LIST]


def test_video_not_found_is_404(client, monkeypatch):
    calls = []
    monkeypatch.setattr(resolver_module, "youtube_api_get", fake_upstream({YOUTUBE_VIDEOS_LIST: {"items": []}}, calls))

    response = client.get("/api/subscribers", params={"q": "https://www.youtube.com/watch?v=gone"})

    assert response.status_code == 404
    assert response.json() == {"error": "Could not resolve channel from that video link."}
    assert "cache-control" not in response.headers


@pytest.mark.parametrize(
    "error, status, body",
    [
        (NotFoundError("Channel not found by ID.", kind="channel_id"), 404, "Channel not found by ID."),
        (UpstreamError("API key not valid.", upstream_status=400), 500, "API key not valid."),
        (RuntimeError("kaboom"), 500, "kaboom"),
        (RuntimeError(), 500, "Unexpected error"),
    ],
)
def test_errors_are_rendered_as_json(client, monkeypatch, error, status, body):
    def fake_resolve(*_args, **_kwargs):
        raise error

    monkeypatch.setattr(main_module, "resolve_channel_summary", fake_resolve)

    response = client.get("/api/subscribers", params={"q": "anything"})

    assert response.status_code == status
    assert response.json() == {"error": body}
