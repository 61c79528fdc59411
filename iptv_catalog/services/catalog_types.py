"""
Shared dataclasses used across the catalog ingestion pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass

from iptv_catalog.schemas import ChannelCreate


DEFAULT_CATEGORY = "General"
DEFAULT_COUNTRY = "Unknown"
DEFAULT_COUNTRY_CODE = "xx"
DEFAULT_LANGUAGE = "en"


@dataclass(slots=True)
class RawChannelRecord:
    """In-memory representation of one playlist entry before validation.

    The resolved fields carry the emission defaults; the hint fields keep the
    raw attribute values that enrichment works from.
    """
    name: str
    stream_url: str
    category: str = DEFAULT_CATEGORY
    country: str = DEFAULT_COUNTRY
    country_code: str = DEFAULT_COUNTRY_CODE
    language: str = DEFAULT_LANGUAGE
    logo: str | None = None
    description: str | None = None
    is_online: bool = True
    tvg_id: str | None = None
    tvg_name: str | None = None
    country_hint: str | None = None
    group_title: str | None = None


@dataclass(slots=True)
class RecordResult:
    """Outcome of validating a single record: a payload or a rejection reason."""
    record: RawChannelRecord
    payload: ChannelCreate | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.payload is not None


__all__ = [
    "DEFAULT_CATEGORY",
    "DEFAULT_COUNTRY",
    "DEFAULT_COUNTRY_CODE",
    "DEFAULT_LANGUAGE",
    "RawChannelRecord",
    "RecordResult",
]
