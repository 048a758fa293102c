"""Genre taxonomy lookups backed by the Listen Notes category list."""

from __future__ import annotations

import logging
from typing import Iterable

from ..errors import UnknownGenreError
from ..models import Category
from .listennotes import ListenNotesClient

logger = logging.getLogger(__name__)

RANDOM_GENRE = "Random"


def normalize_genre_name(name: str) -> str:
    """Return the display form of a category name (first ``&`` becomes ``and``)."""

    return name.replace("&", "and", 1)


class GenreResolver:
    """Translate between Listen Notes category ids and display names.

    The taxonomy is fetched on every call; nothing is cached here.
    """

    def __init__(self, client: ListenNotesClient):
        self._client = client

    async def categories(self) -> list[Category]:
        """Return the taxonomy in provider order with normalized names."""

        categories = await self._client.get_all_categories()
        return [
            category.model_copy(update={"name": normalize_genre_name(category.name)})
            for category in categories
        ]

    async def get_genres(self) -> list[str]:
        """Return sorted genre names preceded by the ``Random`` sentinel."""

        categories = await self.categories()
        names = sorted(category.name for category in categories)
        return [RANDOM_GENRE, *names]

    async def ids_to_genres(self, ids: Iterable[int]) -> list[str]:
        """Return names of the categories in ``ids`` in taxonomy order."""

        wanted = set(ids)
        if not wanted:
            return []
        categories = await self.categories()
        return [category.name for category in categories if category.id in wanted]

    async def genre_name_to_id(self, name: str) -> int:
        """Return the id of the category displayed as ``name``."""

        target = normalize_genre_name(name)
        for category in await self.categories():
            if category.name == target:
                return category.id
        logger.warning("No Listen Notes category named %s", name)
        raise UnknownGenreError(name)
