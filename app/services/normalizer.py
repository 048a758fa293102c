"""Map Listen Notes payloads onto the add-on catalog schema."""

from __future__ import annotations

from typing import Sequence

from ..models import (
    CatalogDetail,
    CatalogEntry,
    RawEpisode,
    RawPodcast,
    RawPodcastDetail,
    RawRandomPick,
    Video,
)
from ..utils import build_meta_id, format_release_info, iso_from_ms, year_from_ms
from .genres import GenreResolver

ATTRIBUTION = "<i>Powered by listen notes</i>"
UNAVAILABLE = "unavailable"


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def _director(publisher: str | None) -> list[str]:
    return [publisher] if publisher else []


def release_info(podcast: RawPodcast) -> str:
    return format_release_info(
        year_from_ms(podcast.earliest_pub_date_ms),
        year_from_ms(podcast.latest_pub_date_ms),
    )


def average_episode_minutes(episodes: Sequence[RawEpisode]) -> int | None:
    """Return the mean episode length in whole minutes, or ``None`` without episodes."""

    if not episodes:
        return None
    total_seconds = sum(episode.audio_length_sec for episode in episodes)
    return int(total_seconds / len(episodes) / 60)


class MetadataNormalizer:
    """Build catalog rows and details from the different provider payloads."""

    def __init__(self, genres: GenreResolver, namespace: str):
        self._genres = genres
        self._namespace = namespace

    def meta_id(self, provider_id: str) -> str:
        return build_meta_id(self._namespace, provider_id)

    def to_catalog_entry(self, podcast: RawPodcast) -> CatalogEntry:
        """Map a listing or search result."""

        return CatalogEntry(
            id=self.meta_id(podcast.id),
            genres=[
                f"<strong>Episodes: </strong> {podcast.total_episodes}",
                f"<strong>Country: </strong> {podcast.country}",
                f"<strong>Language: </strong> {podcast.language}",
                f"<strong>Explicit content: </strong> {_yes_no(podcast.explicit_content)}",
                ATTRIBUTION,
            ],
            director=_director(podcast.publisher),
            release_info=release_info(podcast),
            name=podcast.title,
            poster=podcast.thumbnail,
            background=podcast.image,
            logo=podcast.thumbnail,
            description=podcast.description,
        )

    def random_pick_to_catalog_entry(self, pick: RawRandomPick) -> CatalogEntry:
        """Map the random-episode payload, which has its own field names."""

        return CatalogEntry(
            id=self.meta_id(pick.podcast_id),
            genres=[
                f"<strong>Length: </strong> {pick.audio_length_sec // 60} minutes",
                f"<strong>Explicit content: </strong> {_yes_no(pick.explicit_content)}",
                ATTRIBUTION,
            ],
            director=_director(pick.publisher),
            release_info=str(year_from_ms(pick.pub_date_ms)),
            name=pick.title,
            poster=pick.thumbnail,
            background=pick.image,
            logo=pick.thumbnail,
            description=pick.description,
        )

    def to_video(self, episode: RawEpisode, position: int) -> Video:
        """Map an episode at 1-based ``position`` of the podcast's only season."""

        return Video(
            id=self.meta_id(episode.id),
            title=episode.title,
            released=iso_from_ms(episode.pub_date_ms),
            season=1,
            episode=position,
            thumbnail=episode.thumbnail,
            streams=[{"url": episode.audio}] if episode.audio else [],
            overview=episode.description,
        )

    async def to_catalog_detail(
        self, meta_id: str, podcast: RawPodcastDetail
    ) -> CatalogDetail:
        """Map a podcast whose episodes have already been fully collected."""

        years = release_info(podcast)
        average = average_episode_minutes(podcast.episodes)
        length = f"{average} minutes" if average is not None else UNAVAILABLE

        return CatalogDetail(
            id=meta_id,
            name=podcast.title,
            genres=await self._genres.ids_to_genres(podcast.genre_ids),
            release_info=years,
            runtime=f"{years} | Average episode length: {length}",
            poster=podcast.thumbnail,
            background=podcast.image,
            logo=podcast.thumbnail,
            description=podcast.description,
            videos=[
                self.to_video(episode, index)
                for index, episode in enumerate(podcast.episodes, start=1)
            ],
            director=_director(podcast.publisher),
            language=podcast.language,
            country=podcast.country,
            website=podcast.website,
        )
