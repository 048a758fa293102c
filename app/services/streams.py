"""Turn an episode's free-form ``extra`` links into stream descriptors."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping

from ..models import DirectAudio, ExternalLink, StreamDescriptor, VideoEmbed

logger = logging.getLogger(__name__)

YOUTUBE = "youtube"
YOUTUBE_ID_MARKER = "?v="


@dataclass(frozen=True, slots=True)
class UrlLink:
    """``<name>_url`` entry; the value is a complete URL."""

    name: str
    value: str | None


@dataclass(frozen=True, slots=True)
class HandleLink:
    """``<name>_handle`` entry; the value is an account name on ``<name>.com``."""

    name: str
    value: str | None


@dataclass(frozen=True, slots=True)
class Ignored:
    """Entry whose key does not follow a known ``<name>_<kind>`` form."""

    key: str


ExtraLink = UrlLink | HandleLink | Ignored


def classify_extra(key: str, value: str | None) -> ExtraLink:
    """Classify one extras entry by the ``<name>_<kind>`` key convention."""

    if "_" not in key:
        return Ignored(key)
    parts = key.split("_")
    name, kind = parts[0], parts[1]
    if kind == "url":
        return UrlLink(name, value)
    if kind == "handle":
        return HandleLink(name, value)
    return Ignored(key)


def _youtube_id(url: str) -> str | None:
    _, marker, video_id = url.partition(YOUTUBE_ID_MARKER)
    if not marker:
        logger.warning("YouTube link without a video id: %s", url)
        return None
    return video_id or None


def _link_to_stream(link: ExtraLink) -> StreamDescriptor | None:
    if isinstance(link, UrlLink):
        if not link.value:
            return None
        if link.name == YOUTUBE:
            video_id = _youtube_id(link.value)
            if video_id is None:
                return None
            return VideoEmbed(platform_id=video_id, title=link.name)
        return ExternalLink(url=link.value, title=link.name)
    if isinstance(link, HandleLink):
        if not link.value:
            return None
        return ExternalLink(url=f"https://{link.name}.com/{link.value}", title=link.name)
    return None


def extract_streams(
    audio_url: str | None,
    canonical_url: str | None,
    extras: Mapping[str, str | None] | Iterable[tuple[str, str | None]],
) -> list[StreamDescriptor]:
    """Return the audio stream, the source link, then links found in ``extras``.

    Extras keep their iteration order. Entries that are unknown, empty or
    unparseable are left out; this function never raises on their account.
    """

    streams: list[StreamDescriptor] = [
        DirectAudio(url=audio_url or ""),
        ExternalLink(url=canonical_url or "", title="source"),
    ]
    pairs = extras.items() if isinstance(extras, Mapping) else extras
    for key, value in pairs:
        stream = _link_to_stream(classify_extra(key, value))
        if stream is not None:
            streams.append(stream)
    return streams
