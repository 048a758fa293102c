"""Tests for mapping provider payloads onto catalog entries."""

from __future__ import annotations

from typing import cast

import pytest

from app.models import Category, RawEpisode, RawPodcast, RawPodcastDetail, RawRandomPick
from app.services.genres import GenreResolver
from app.services.listennotes import ListenNotesClient
from app.services.normalizer import MetadataNormalizer, average_episode_minutes

JAN_1_2018_MS = 1_514_764_800_000
JAN_1_2020_MS = 1_577_836_800_000
JUN_1_2021_MS = 1_622_505_600_000


class FakeCategoryClient:
    async def get_all_categories(self) -> list[Category]:
        return [
            Category(id=77, name="Sports"),
            Category(id=107, name="Science & Nature"),
            Category(id=99, name="News"),
        ]


@pytest.fixture
def normalizer() -> MetadataNormalizer:
    genres = GenreResolver(cast(ListenNotesClient, FakeCategoryClient()))
    return MetadataNormalizer(genres, "podcasts")


def make_episode(index: int, length: int) -> RawEpisode:
    return RawEpisode(
        id=f"ep{index}",
        title=f"Episode {index}",
        pub_date_ms=JAN_1_2020_MS + index * 1_000,
        thumbnail=f"https://cdn.example.com/ep{index}.jpg",
        audio=f"https://cdn.example.com/ep{index}.mp3",
        description=f"About episode {index}",
        audio_length_sec=length,
    )


def test_list_entry_mapping(normalizer: MetadataNormalizer) -> None:
    podcast = RawPodcast(
        id="abc",
        title="Star Talk",
        publisher="NASA",
        thumbnail="https://cdn.example.com/t.jpg",
        image="https://cdn.example.com/i.jpg",
        description="Space things",
        total_episodes=312,
        country="United States",
        language="English",
        explicit_content=True,
        earliest_pub_date_ms=JAN_1_2018_MS,
        latest_pub_date_ms=JUN_1_2021_MS,
    )

    payload = normalizer.to_catalog_entry(podcast).to_payload()

    assert payload == {
        "id": "podcasts_listennotes_abc",
        "type": "series",
        "genres": [
            "<strong>Episodes: </strong> 312",
            "<strong>Country: </strong> United States",
            "<strong>Language: </strong> English",
            "<strong>Explicit content: </strong> yes",
            "<i>Powered by listen notes</i>",
        ],
        "director": ["NASA"],
        "releaseInfo": "2018-2021",
        "name": "Star Talk",
        "poster": "https://cdn.example.com/t.jpg",
        "posterShape": "square",
        "background": "https://cdn.example.com/i.jpg",
        "logo": "https://cdn.example.com/t.jpg",
        "description": "Space things",
    }


def test_list_entry_single_year(normalizer: MetadataNormalizer) -> None:
    podcast = RawPodcast(
        id="x",
        title="Short Run",
        earliest_pub_date_ms=JAN_1_2020_MS,
        latest_pub_date_ms=JAN_1_2020_MS + 86_400_000,
    )

    entry = normalizer.to_catalog_entry(podcast)

    assert entry.release_info == "2020"
    assert entry.genres[3] == "<strong>Explicit content: </strong> no"


def test_random_pick_mapping(normalizer: MetadataNormalizer) -> None:
    pick = RawRandomPick(
        podcast_id="rand",
        title="Surprise",
        publisher="Someone",
        thumbnail="https://cdn.example.com/r.jpg",
        image="https://cdn.example.com/ri.jpg",
        description="Random episode",
        audio_length_sec=1_830,
        explicit_content=False,
        pub_date_ms=JUN_1_2021_MS,
    )

    entry = normalizer.random_pick_to_catalog_entry(pick)

    assert entry.id == "podcasts_listennotes_rand"
    assert entry.genres == [
        "<strong>Length: </strong> 30 minutes",
        "<strong>Explicit content: </strong> no",
        "<i>Powered by listen notes</i>",
    ]
    assert entry.release_info == "2021"
    assert entry.director == ["Someone"]
    assert entry.poster_shape == "square"


def test_average_episode_minutes() -> None:
    episodes = [make_episode(1, 600), make_episode(2, 1_800), make_episode(3, 1_799)]

    assert average_episode_minutes(episodes) == 23
    assert average_episode_minutes([]) is None


@pytest.mark.anyio("asyncio")
async def test_detail_mapping(normalizer: MetadataNormalizer) -> None:
    podcast = RawPodcastDetail(
        id="abc",
        title="Star Talk",
        publisher="NASA",
        earliest_pub_date_ms=JAN_1_2018_MS,
        latest_pub_date_ms=JUN_1_2021_MS,
        genre_ids=[99, 107, 5],
        episodes=[make_episode(1, 1_200), make_episode(2, 2_400)],
        language="English",
        country="United States",
        website="https://startalk.example.com",
    )

    detail = await normalizer.to_catalog_detail("podcasts_listennotes_abc", podcast)

    assert detail.id == "podcasts_listennotes_abc"
    assert detail.genres == ["Science and Nature", "News"]
    assert detail.runtime == "2018-2021 | Average episode length: 30 minutes"
    assert detail.website == "https://startalk.example.com"
    assert [video.episode for video in detail.videos] == [1, 2]
    assert {video.season for video in detail.videos} == {1}

    first = detail.videos[0].model_dump()
    assert first == {
        "id": "podcasts_listennotes_ep1",
        "title": "Episode 1",
        "released": "2020-01-01T00:00:01.000Z",
        "season": 1,
        "episode": 1,
        "thumbnail": "https://cdn.example.com/ep1.jpg",
        "streams": [{"url": "https://cdn.example.com/ep1.mp3"}],
        "overview": "About episode 1",
    }


@pytest.mark.anyio("asyncio")
async def test_detail_without_episodes_reports_unavailable_length(
    normalizer: MetadataNormalizer,
) -> None:
    podcast = RawPodcastDetail(
        id="empty",
        title="Trailer Only",
        earliest_pub_date_ms=JAN_1_2020_MS,
        latest_pub_date_ms=JAN_1_2020_MS,
    )

    detail = await normalizer.to_catalog_detail("podcasts_listennotes_empty", podcast)

    assert detail.runtime == "2020 | Average episode length: unavailable"
    assert detail.videos == []
    assert detail.genres == []
