"""Tests for turning episode extras into stream descriptors."""

from __future__ import annotations

import pytest

from app.models import DirectAudio, ExternalLink, StreamResponse, VideoEmbed
from app.services.streams import (
    HandleLink,
    Ignored,
    UrlLink,
    classify_extra,
    extract_streams,
)

AUDIO = "https://www.listennotes.com/e/p/abc/"
SOURCE = "https://www.listennotes.com/e/abc/"


def test_fixed_entries_come_first() -> None:
    streams = extract_streams(AUDIO, SOURCE, {})

    assert streams == [
        DirectAudio(url=AUDIO, title="audio"),
        ExternalLink(url=SOURCE, title="source"),
    ]


def test_extras_follow_in_iteration_order() -> None:
    extras = {
        "twitter_handle": "nasa",
        "youtube_url": "https://yt.com/watch?v=abc123",
        "unused_other": "x",
    }

    streams = extract_streams(AUDIO, SOURCE, extras)

    assert streams[2:] == [
        ExternalLink(url="https://twitter.com/nasa", title="twitter"),
        VideoEmbed(platform_id="abc123", title="youtube"),
    ]


def test_plain_url_becomes_external_link() -> None:
    streams = extract_streams(
        AUDIO, SOURCE, {"patreon_url": "https://patreon.com/show"}
    )

    assert streams[2:] == [ExternalLink(url="https://patreon.com/show", title="patreon")]


@pytest.mark.parametrize(
    "extras",
    [
        {"twitter_handle": ""},
        {"website_url": ""},
        {"youtube_url": ""},
        {"youtube_url": None},
        {"youtube_url": "https://youtube.com/channel/UC123"},
        {"youtube_url": "https://youtube.com/watch?v="},
        {"nounderscore": "value"},
        {"spotify_id": "abc"},
        {"_url": ""},
    ],
)
def test_unusable_extras_are_skipped_without_error(extras) -> None:
    assert len(extract_streams(AUDIO, SOURCE, extras)) == 2


def test_accepts_ordered_pairs() -> None:
    pairs = [("instagram_handle", "show"), ("facebook_handle", "page")]

    streams = extract_streams(AUDIO, SOURCE, pairs)

    assert [stream.title for stream in streams[2:]] == ["instagram", "facebook"]
    assert streams[2].url == "https://instagram.com/show"


@pytest.mark.parametrize(
    ("key", "value", "expected"),
    [
        ("youtube_url", "u", UrlLink("youtube", "u")),
        ("twitter_handle", "h", HandleLink("twitter", "h")),
        ("linkedin_url_old", "u", UrlLink("linkedin", "u")),
        ("google_handle_x", "h", HandleLink("google", "h")),
        ("wechat_other", "x", Ignored("wechat_other")),
        ("rss", "x", Ignored("rss")),
    ],
)
def test_classify_extra(key, value, expected) -> None:
    assert classify_extra(key, value) == expected


def test_stream_response_uses_wire_keys() -> None:
    streams = extract_streams(
        AUDIO,
        SOURCE,
        {"youtube_url": "https://www.youtube.com/watch?v=xyz", "twitter_handle": "show"},
    )

    payload = StreamResponse(streams=streams, cache_max_age=259_200).to_payload()

    assert payload == {
        "streams": [
            {"url": AUDIO, "title": "audio"},
            {"externalUrl": SOURCE, "title": "source"},
            {"ytid": "xyz", "title": "youtube"},
            {"externalUrl": "https://twitter.com/show", "title": "twitter"},
        ],
        "cacheMaxAge": 259_200,
    }
