"""Loops that keep requesting provider pages until a request is satisfied.

Every collector keeps its accumulator local: when a page request raises, the
exception propagates and whatever was gathered so far is dropped.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from ..errors import InconsistentPagination
from ..models import PodcastPage, RawEpisode, RawPodcast, RawPodcastDetail, SearchPage

logger = logging.getLogger(__name__)

PAGE_SIZE = 50

PageFetcher = Callable[[int], Awaitable[PodcastPage]]
SearchFetcher = Callable[[int], Awaitable[SearchPage]]
EpisodePageFetcher = Callable[[str, int], Awaitable[RawPodcastDetail]]


async def collect_window(
    fetch_page: PageFetcher, skip: int, *, page_size: int = PAGE_SIZE
) -> list[RawPodcast]:
    """Fetch listing pages until more than ``skip`` podcasts are collected.

    Starts at the page containing ``skip`` and stops once the provider reports
    no further pages or the accumulator holds more than ``skip`` items. The
    result is not sliced; callers that need an exact window slice it.
    """

    page = skip // page_size
    first_page = page
    collected: list[RawPodcast] = []
    while True:
        logger.debug("Fetching podcast listing page %s", page)
        response = await fetch_page(page)
        collected.extend(response.podcasts)
        page += 1
        if not (response.has_next and len(collected) <= skip):
            break

    logger.info(
        "Collected %s podcasts from %s listing page(s) for skip=%s",
        len(collected),
        page - first_page,
        skip,
    )
    return collected


async def collect_search(fetch: SearchFetcher, pages: int) -> list[RawPodcast]:
    """Run ``pages`` search requests, advancing the offset by each ``next_offset``."""

    collected: list[RawPodcast] = []
    offset = 0
    for _ in range(pages):
        logger.debug("Fetching search results at offset %s", offset)
        response = await fetch(offset)
        collected.extend(response.results)
        offset += response.next_offset

    logger.info("Collected %s search results from %s page(s)", len(collected), pages)
    return collected


async def collect_episodes(
    fetch_page: EpisodePageFetcher, podcast: RawPodcastDetail
) -> RawPodcastDetail:
    """Return a copy of ``podcast`` carrying every episode up to its latest one.

    The cursor has to move strictly forward on every page; a page that does not
    advance it raises :class:`InconsistentPagination`. A missing cursor means
    the provider has nothing more to return.
    """

    ceiling = podcast.latest_pub_date_ms
    cursor = podcast.next_episode_pub_date
    episodes: list[RawEpisode] = list(podcast.episodes)
    pages = 1

    while cursor is not None and ceiling > cursor:
        logger.debug("Fetching episodes of %s after cursor %s", podcast.id, cursor)
        page = await fetch_page(podcast.id, cursor)
        pages += 1
        next_cursor = page.next_episode_pub_date
        if next_cursor is not None and next_cursor <= cursor:
            logger.warning(
                "Episode cursor for %s stalled at %s (next=%s)",
                podcast.id,
                cursor,
                next_cursor,
            )
            raise InconsistentPagination(podcast.id, cursor, next_cursor)
        episodes.extend(page.episodes)
        cursor = next_cursor

    logger.info(
        "Collected %s episodes of %s from %s page(s)", len(episodes), podcast.id, pages
    )
    return podcast.model_copy(
        update={"episodes": episodes, "next_episode_pub_date": cursor}
    )
