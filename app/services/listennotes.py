"""Thin wrapper around the Listen Notes HTTP API."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..config import Settings
from ..errors import RemoteFailure
from ..models import (
    Category,
    PodcastPage,
    RawEpisode,
    RawPodcastDetail,
    RawRandomPick,
    SearchPage,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ListenNotesClient:
    """Client for the podcast catalog endpoints used by the add-on.

    Pages are addressed with a 0-based index by callers and translated to the
    provider's 1-based numbering here.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        self._settings = settings
        self._client = http_client

    def _headers(self) -> dict[str, str]:
        headers = {"User-Agent": f"{self._settings.app_name} (listennotes-addon)"}
        if self._settings.listennotes_api_key:
            headers["X-ListenAPI-Key"] = self._settings.listennotes_api_key
        return headers

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        try:
            response = await self._client.get(
                path, params=params, headers=self._headers()
            )
        except httpx.HTTPError as exc:
            logger.warning("Listen Notes request to %s failed: %s", path, exc)
            raise RemoteFailure(f"Listen Notes request to {path} failed: {exc}") from exc

        if response.status_code >= 400:
            logger.warning(
                "Listen Notes returned %s for %s: %s",
                response.status_code,
                path,
                response.text,
            )
            raise RemoteFailure(
                f"Listen Notes returned {response.status_code} for {path}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            logger.warning("Unexpected non-JSON Listen Notes response for %s", path)
            raise RemoteFailure(f"Listen Notes returned invalid JSON for {path}") from exc

    @staticmethod
    def _parse(model: type[ModelT], payload: Any, path: str) -> ModelT:
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            logger.warning("Unexpected Listen Notes payload for %s: %s", path, exc)
            raise RemoteFailure(f"Unexpected Listen Notes payload for {path}") from exc

    async def get_all_categories(self) -> list[Category]:
        payload = await self._get("/genres")
        genres = payload.get("genres") if isinstance(payload, dict) else None
        if not isinstance(genres, list):
            raise RemoteFailure("Listen Notes genre payload has no genre list")
        return [self._parse(Category, entry, "/genres") for entry in genres]

    async def get_top_podcasts(self, page: int) -> PodcastPage:
        payload = await self._get("/best_podcasts", {"page": page + 1})
        return self._parse(PodcastPage, payload, "/best_podcasts")

    async def get_podcasts(self, genre_id: int, page: int) -> PodcastPage:
        payload = await self._get(
            "/best_podcasts", {"genre_id": genre_id, "page": page + 1}
        )
        return self._parse(PodcastPage, payload, "/best_podcasts")

    async def search_podcasts(self, query: str, offset: int) -> SearchPage:
        payload = await self._get(
            "/search", {"q": query, "offset": offset, "type": "podcast"}
        )
        return self._parse(SearchPage, payload, "/search")

    async def get_podcast_info(
        self, podcast_id: str, next_episode_pub_date: int | None = None
    ) -> RawPodcastDetail:
        """Fetch a podcast and the episode page starting at the given cursor."""

        path = f"/podcasts/{podcast_id}"
        params: dict[str, Any] = {"sort": "oldest_first"}
        if next_episode_pub_date is not None:
            params["next_episode_pub_date"] = next_episode_pub_date
        payload = await self._get(path, params)
        return self._parse(RawPodcastDetail, payload, path)

    async def get_episode(self, episode_id: str) -> RawEpisode:
        path = f"/episodes/{episode_id}"
        payload = await self._get(path)
        return self._parse(RawEpisode, payload, path)

    async def get_random_podcast(self) -> RawRandomPick:
        payload = await self._get("/just_listen")
        return self._parse(RawRandomPick, payload, "/just_listen")
