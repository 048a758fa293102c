"""Pydantic models describing provider payloads and add-on responses."""

from __future__ import annotations

from typing import Any, Literal
from urllib.parse import parse_qsl

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

ContentType = Literal["series"]


class ProviderModel(BaseModel):
    """Base for payloads returned by Listen Notes; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Category(ProviderModel):
    """A Listen Notes genre."""

    id: int
    name: str
    parent_id: int | None = None


class RawPodcast(ProviderModel):
    """A podcast as it appears in best-of listings and search results."""

    id: str
    title: str = Field(
        default="", validation_alias=AliasChoices("title", "title_original")
    )
    publisher: str | None = Field(
        default=None, validation_alias=AliasChoices("publisher", "publisher_original")
    )
    thumbnail: str | None = None
    image: str | None = None
    description: str | None = Field(
        default=None,
        validation_alias=AliasChoices("description", "description_original"),
    )
    total_episodes: int | None = None
    country: str | None = None
    language: str | None = None
    explicit_content: bool = False
    earliest_pub_date_ms: int
    latest_pub_date_ms: int


class RawEpisodePodcast(ProviderModel):
    """The podcast summary nested inside an episode payload."""

    id: str | None = None
    title: str | None = None
    listennotes_url: str | None = None
    extra: dict[str, str | None] = Field(default_factory=dict)

    @field_validator("extra", mode="before")
    @classmethod
    def _coerce_extra(cls, value: object) -> dict[str, str | None]:
        """Keep key order and stringify values; anything that is not a mapping is dropped."""

        if not isinstance(value, dict):
            return {}
        return {
            str(key): (None if item is None else str(item))
            for key, item in value.items()
        }


class RawEpisode(ProviderModel):
    """A single podcast episode."""

    id: str
    title: str = ""
    pub_date_ms: int
    thumbnail: str | None = None
    audio: str | None = None
    description: str | None = None
    audio_length_sec: int = 0
    listennotes_url: str | None = None
    podcast: RawEpisodePodcast | None = None

    @property
    def canonical_url(self) -> str | None:
        """Return the Listen Notes page for this episode."""

        if self.listennotes_url:
            return self.listennotes_url
        if self.podcast is not None:
            return self.podcast.listennotes_url
        return None

    @property
    def extras(self) -> dict[str, str | None]:
        return self.podcast.extra if self.podcast is not None else {}


class RawPodcastDetail(RawPodcast):
    """A podcast with genre ids and one page of episodes."""

    genre_ids: list[int] = Field(default_factory=list)
    episodes: list[RawEpisode] = Field(default_factory=list)
    next_episode_pub_date: int | None = None
    website: str | None = None


class RawRandomPick(ProviderModel):
    """Payload of the random-episode endpoint.

    The field names differ from :class:`RawPodcast`: the podcast id lives in
    ``podcast_id`` and there is a single ``pub_date_ms``.
    """

    podcast_id: str
    title: str = Field(
        default="", validation_alias=AliasChoices("title", "podcast_title")
    )
    publisher: str | None = None
    thumbnail: str | None = None
    image: str | None = None
    description: str | None = None
    audio_length_sec: int = 0
    explicit_content: bool = False
    pub_date_ms: int


class PodcastPage(ProviderModel):
    """One page of the best-podcasts listing."""

    podcasts: list[RawPodcast] = Field(default_factory=list)
    has_next: bool = False
    page_number: int | None = None


class SearchPage(ProviderModel):
    """One page of podcast search results."""

    results: list[RawPodcast] = Field(default_factory=list)
    next_offset: int = 0
    total: int | None = None


class CatalogEntry(BaseModel):
    """A podcast row returned in catalog listings.

    For listings ``genres`` carries the human-readable info lines rendered by
    the host; in :class:`CatalogDetail` it carries the genre names.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: ContentType = "series"
    genres: list[str] = Field(default_factory=list)
    director: list[str] = Field(default_factory=list)
    release_info: str = Field(alias="releaseInfo")
    name: str
    poster: str | None = None
    poster_shape: Literal["square"] = Field(default="square", alias="posterShape")
    background: str | None = None
    logo: str | None = None
    description: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the add-on wire representation."""

        return self.model_dump(by_alias=True, exclude_none=True)


class Video(BaseModel):
    """An episode rendered as a video of the single podcast season."""

    id: str
    title: str
    released: str
    season: int = 1
    episode: int
    thumbnail: str | None = None
    streams: list[dict[str, str]] = Field(default_factory=list)
    overview: str | None = None


class CatalogDetail(CatalogEntry):
    """Full podcast metadata including every episode."""

    runtime: str
    language: str | None = None
    country: str | None = None
    website: str | None = None
    videos: list[Video] = Field(default_factory=list)


class DirectAudio(BaseModel):
    """Playable audio file."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["audio"] = Field(default="audio", exclude=True)
    url: str
    title: str = "audio"


class ExternalLink(BaseModel):
    """Link opened outside the player."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["external"] = Field(default="external", exclude=True)
    url: str = Field(alias="externalUrl")
    title: str


class VideoEmbed(BaseModel):
    """YouTube video referenced by its platform id."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["youtube"] = Field(default="youtube", exclude=True)
    platform_id: str = Field(alias="ytid")
    title: str


StreamDescriptor = DirectAudio | ExternalLink | VideoEmbed


class MetaResponse(BaseModel):
    meta: CatalogDetail
    cache_max_age: int

    def to_payload(self) -> dict[str, Any]:
        return {"meta": self.meta.to_payload(), "cacheMaxAge": self.cache_max_age}


class StreamResponse(BaseModel):
    streams: list[StreamDescriptor] = Field(default_factory=list)
    cache_max_age: int

    def to_payload(self) -> dict[str, Any]:
        return {
            "streams": [
                stream.model_dump(by_alias=True, exclude_none=True)
                for stream in self.streams
            ],
            "cacheMaxAge": self.cache_max_age,
        }


class CatalogRequest(BaseModel):
    """Extra arguments of a catalog request."""

    search: str | None = None
    genre: str | None = None
    skip: int | None = Field(default=None, ge=0)

    @field_validator("search", "genre", "skip", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_extra_segment(cls, segment: str | None) -> "CatalogRequest":
        """Parse the ``genre=Arts&skip=100`` path segment used by add-on hosts."""

        if not segment:
            return cls()
        return cls.model_validate(dict(parse_qsl(segment, keep_blank_values=True)))


class ResourceRequest(BaseModel):
    """A meta or stream request addressed by namespaced id."""

    id: str
