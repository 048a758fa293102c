"""Catalog adapters exposing provider data through the add-on contract."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from functools import partial

from ..config import Settings
from ..errors import InvalidMetaIdError
from ..models import (
    CatalogEntry,
    CatalogRequest,
    MetaResponse,
    RawPodcast,
    ResourceRequest,
    StreamResponse,
)
from ..utils import provider_id_from_meta_id
from .genres import RANDOM_GENRE, GenreResolver
from .listennotes import ListenNotesClient
from .normalizer import MetadataNormalizer
from .pagination import collect_episodes, collect_search, collect_window
from .streams import extract_streams

logger = logging.getLogger(__name__)


class BaseAdapter(ABC):
    """The four operations a discovery host calls on a catalog provider."""

    @abstractmethod
    async def get_genres(self) -> list[str]:
        """Return the genre options offered by the catalog."""

    @abstractmethod
    async def get_summarized_metadata_collection(
        self, request: CatalogRequest
    ) -> list[CatalogEntry]:
        """Return catalog rows for a search, genre or top listing."""

    @abstractmethod
    async def get_metadata(self, request: ResourceRequest) -> MetaResponse:
        """Return full metadata for one catalog id."""

    @abstractmethod
    async def get_streams(self, request: ResourceRequest) -> StreamResponse:
        """Return the streams of one episode id."""


class ListenNotesAdapter(BaseAdapter):
    """Adapter backed by the Listen Notes podcast API."""

    def __init__(self, settings: Settings, client: ListenNotesClient):
        self._settings = settings
        self._client = client
        self.genres = GenreResolver(client)
        self.normalizer = MetadataNormalizer(self.genres, settings.id_namespace)

    @staticmethod
    def _provider_id(meta_id: str) -> str:
        provider_id = provider_id_from_meta_id(meta_id)
        if provider_id is None:
            raise InvalidMetaIdError(meta_id)
        return provider_id

    async def get_genres(self) -> list[str]:
        return await self.genres.get_genres()

    async def get_summarized_metadata_collection(
        self, request: CatalogRequest
    ) -> list[CatalogEntry]:
        skip = request.skip or self._settings.default_skip

        collection: list[RawPodcast]
        if request.search:
            collection = await collect_search(
                partial(self._client.search_podcasts, request.search),
                self._settings.search_pages,
            )
        elif request.genre is not None:
            if request.genre == RANDOM_GENRE:
                pick = await self._client.get_random_podcast()
                return [self.normalizer.random_pick_to_catalog_entry(pick)]
            genre_id = await self.genres.genre_name_to_id(request.genre)
            collection = await collect_window(
                partial(self._client.get_podcasts, genre_id), skip
            )
        else:
            collection = await collect_window(self._client.get_top_podcasts, skip)

        if not collection:
            logger.info("No podcasts found for %s", request.model_dump(exclude_none=True))
            return []

        return [self.normalizer.to_catalog_entry(podcast) for podcast in collection]

    async def get_metadata(self, request: ResourceRequest) -> MetaResponse:
        podcast_id = self._provider_id(request.id)
        podcast = await collect_episodes(
            self._client.get_podcast_info,
            await self._client.get_podcast_info(podcast_id),
        )
        meta = await self.normalizer.to_catalog_detail(request.id, podcast)
        return MetaResponse(meta=meta, cache_max_age=self._settings.cache_max_age)

    async def get_streams(self, request: ResourceRequest) -> StreamResponse:
        episode = await self._client.get_episode(self._provider_id(request.id))
        streams = extract_streams(episode.audio, episode.canonical_url, episode.extras)
        return StreamResponse(
            streams=streams, cache_max_age=self._settings.cache_max_age
        )
