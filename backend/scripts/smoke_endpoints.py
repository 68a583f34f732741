from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import patch

from starlette.responses import Response

ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import backend.main as main_module
import backend.app.services.channel_resolver as resolver_module
from backend.app.errors import NotFoundError, ValidationError
from backend.app.services.youtube_api import YOUTUBE_CHANNELS_LIST, YOUTUBE_SEARCH_LIST, YOUTUBE_VIDEOS_LIST
from backend.app.settings import Settings

CHANNEL_ID = "UC_SMOKE_abcdefghijklmnop"
SETTINGS = Settings(youtube_api_key="smoke-key")


def make_channel(subscribers: str | None = "1000") -> dict:
    statistics = {"viewCount": "50000"}
    if subscribers is not None:
        statistics["subscriberCount"] = subscribers
    return {
        "id": CHANNEL_ID,
        "snippet": {
            "title": "Smoke Channel",
            "thumbnails": {"default": {"url": "https://img/smoke.jpg"}},
        },
        "statistics": statistics,
    }


def make_fake_youtube_api_get(responses: dict[str, dict], calls: list[str]):
    def fake_youtube_api_get(url: str, params: dict, timeout: float = 15) -> dict:
        _ = (params, timeout)
        calls.append(url)
        return responses.get(url, {"items": []})

    return fake_youtube_api_get


def assert_true(condition: bool, message: str) -> None:
    if not condition:
        raise AssertionError(message)


def test_health() -> None:
    payload = main_module.health()
    assert_true(payload.get("ok") is True, "/health should return ok=true")


def test_missing_query() -> None:
    try:
        main_module.subscribers(response=Response(), q=" ", settings=SETTINGS)
    except ValidationError as exc:
        assert_true(exc.status_code == 400, "empty query should map to 400")
        return
    raise AssertionError("empty query should be rejected")


def test_channel_url_single_call() -> None:
    calls: list[str] = []
    fake = make_fake_youtube_api_get({YOUTUBE_CHANNELS_LIST: {"items": [make_channel()]}}, calls)

    with patch.object(resolver_module, "youtube_api_get", side_effect=fake):
        response = Response()
        summary = main_module.subscribers(
            response=response,
            q=f"https://www.youtube.com/channel/{CHANNEL_ID}",
            settings=SETTINGS,
        )

    assert_true(calls == [YOUTUBE_CHANNELS_LIST], "channel URL should only hit channels.list")
    assert_true(summary.subscribers == 1000, "subscriber count should be an integer")
    assert_true("s-maxage=20" in response.headers.get("cache-control", ""), "cache header should be set")


def test_handle_search_hidden_count() -> None:
    calls: list[str] = []
    fake = make_fake_youtube_api_get(
        {
            YOUTUBE_SEARCH_LIST: {"items": [{"snippet": {"channelId": CHANNEL_ID}}]},
            YOUTUBE_CHANNELS_LIST: {"items": [make_channel(subscribers=None)]},
        },
        calls,
    )

    with patch.object(resolver_module, "youtube_api_get", side_effect=fake):
        summary = main_module.subscribers(response=Response(), q="@smoke", settings=SETTINGS)

    assert_true(calls == [YOUTUBE_SEARCH_LIST, YOUTUBE_CHANNELS_LIST], "handle should search then fetch")
    assert_true(summary.subscribers == "Hidden", "missing subscriberCount should be Hidden")


def test_video_not_found() -> None:
    calls: list[str] = []
    fake = make_fake_youtube_api_get({}, calls)

    with patch.object(resolver_module, "youtube_api_get", side_effect=fake):
        try:
            main_module.subscribers(response=Response(), q="https://youtu.be/missing", settings=SETTINGS)
        except NotFoundError as exc:
            assert_true(exc.kind == "video", "video miss should be the video flavour")
            assert_true(calls == [YOUTUBE_VIDEOS_LIST], "video miss should not fall through to search")
            return
    raise AssertionError("unknown video should be a 404")


def run() -> int:
    checks = [
        ("health", test_health),
        ("missing query", test_missing_query),
        ("channel url single call", test_channel_url_single_call),
        ("handle search + hidden count", test_handle_search_hidden_count),
        ("video not found", test_video_not_found),
    ]
    failures = []

    for check_name, check_fn in checks:
        try:
            check_fn()
            print(f"[PASS] {check_name}")
        except Exception as exc:  # pragma: no cover - smoke script output path
            failures.append((check_name, str(exc)))
            print(f"[FAIL] {check_name}: {exc}")

    if failures:
        print(f"\nSmoke checks failed: {len(failures)}")
        for check_name, message in failures:
            print(f"- {check_name}: {message}")
        return 1

    print("\nAll smoke checks passed.")
    return 0


if __name__ == "__main__":
    sys.exit(run())
