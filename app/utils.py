"""Utility helpers for the Listen Notes add-on."""

from __future__ import annotations

from datetime import datetime, timezone

PROVIDER_SEGMENT = "listennotes"


def _from_ms(timestamp_ms: int | float) -> datetime:
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)


def year_from_ms(timestamp_ms: int | float) -> int:
    """Return the calendar year (UTC) of a millisecond timestamp."""

    return _from_ms(timestamp_ms).year


def iso_from_ms(timestamp_ms: int | float) -> str:
    """Return an ISO-8601 UTC string with millisecond precision, e.g. ``2020-01-31T10:00:00.000Z``."""

    value = _from_ms(timestamp_ms).isoformat(timespec="milliseconds")
    return value.replace("+00:00", "Z")


def format_release_info(begin_year: int, end_year: int) -> str:
    """Return ``"2020"`` for a single year or ``"2018-2021"`` for a span."""

    if begin_year == end_year:
        return str(begin_year)
    return f"{begin_year}-{end_year}"


def build_meta_id(namespace: str, provider_id: str) -> str:
    """Return the namespaced catalog id for a provider-native id."""

    return f"{namespace}_{PROVIDER_SEGMENT}_{provider_id}"


def provider_id_from_meta_id(meta_id: str) -> str | None:
    """Extract the provider-native id from a namespaced catalog id.

    The id is the third ``_`` delimited segment; ``None`` is returned when the
    value does not look like one of ours.
    """

    parts = (meta_id or "").split("_")
    if len(parts) < 3 or parts[1] != PROVIDER_SEGMENT:
        return None
    provider_id = parts[2].strip()
    return provider_id or None
