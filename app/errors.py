"""Exceptions raised while talking to Listen Notes and aggregating its data."""

from __future__ import annotations


class PodcastAdapterError(Exception):
    """Base exception for all adapter errors."""


class RemoteFailure(PodcastAdapterError):
    """The provider could not be reached or answered with an error."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InconsistentPagination(PodcastAdapterError):
    """The provider returned an episode cursor that did not move forward."""

    def __init__(self, podcast_id: str, cursor: int, next_cursor: int | None) -> None:
        super().__init__(
            f"Episode cursor for podcast {podcast_id} did not advance "
            f"(cursor={cursor}, next={next_cursor})"
        )
        self.podcast_id = podcast_id
        self.cursor = cursor
        self.next_cursor = next_cursor


class UnknownGenreError(PodcastAdapterError, LookupError):
    """No category in the taxonomy carries the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown genre: {name}")
        self.name = name


class InvalidMetaIdError(PodcastAdapterError, ValueError):
    """A catalog id does not follow the ``<namespace>_listennotes_<id>`` form."""

    def __init__(self, meta_id: str) -> None:
        super().__init__(f"Malformed catalog id: {meta_id!r}")
        self.meta_id = meta_id
