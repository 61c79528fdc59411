from collections.abc import Iterator
from dataclasses import dataclass
import logging
import re

from iptv_catalog.services.catalog_types import (
    DEFAULT_CATEGORY,
    DEFAULT_LANGUAGE,
    RawChannelRecord,
)

logger = logging.getLogger(__name__)

EXTINF_PREFIX = "#EXTINF:"
STREAM_URL_PREFIXES = ("http://", "https://")

_ATTRIBUTE_PATTERN = re.compile(r'([A-Za-z0-9_-]+)="([^"]*)"')

# playlist attribute -> ExtinfLine field
_ATTRIBUTE_FIELDS = {
    "tvg-logo": "logo",
    "tvg-country": "country_hint",
    "group-title": "group_title",
    "tvg-language": "language",
    "tvg-id": "tvg_id",
    "tvg-name": "tvg_name",
}


@dataclass(slots=True)
class ExtinfLine:
    """Attributes of one '#EXTINF:' metadata line"""
    name: str | None = None
    logo: str | None = None
    country_hint: str | None = None
    group_title: str | None = None
    language: str | None = None
    tvg_id: str | None = None
    tvg_name: str | None = None


def parse_playlist(content: str) -> list[RawChannelRecord]:
    """
    Parse playlist text and return channel records

    Malformed or unterminated entries are dropped silently; this never raises
    on bad input.

    Args:
        content: Playlist text in the '#EXTINF:' convention

    Returns:
        Records in playlist order, emission defaults applied
    """
    records = list(iter_playlist(content))
    logger.info(f"Playlist parsing complete: {len(records)} channels")
    return records


def iter_playlist(content: str) -> Iterator[RawChannelRecord]:
    """Lazily yield records from playlist text"""
    current: ExtinfLine | None = None

    for raw_line in content.splitlines():
        line = raw_line.strip()

        if line.startswith(EXTINF_PREFIX):
            if current is not None:
                logger.debug(f"Dropping entry without stream URL: {current.name!r}")
            current = parse_extinf_line(line)

        elif line.lower().startswith(STREAM_URL_PREFIXES):
            record = _finalize(current, line)
            if record is not None:
                yield record
            current = None


def parse_extinf_line(line: str) -> ExtinfLine:
    """Extract the display name and quoted attributes from an '#EXTINF:' line"""
    header, title = _split_header(line[len(EXTINF_PREFIX):])
    entry = ExtinfLine()

    for key, value in _ATTRIBUTE_PATTERN.findall(header):
        field_name = _ATTRIBUTE_FIELDS.get(key.lower())
        if field_name and value.strip():
            setattr(entry, field_name, value.strip())

    entry.name = title or entry.tvg_name
    return entry


def _split_header(text: str) -> tuple[str, str | None]:
    """
    Split '<duration> <attributes>,<title>' at the first comma outside quotes

    Commas inside quoted attribute values and inside the title itself are
    kept, so 'CNN, Special: Breaking News' stays one name.
    """
    in_quotes = False
    for idx, char in enumerate(text):
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            return text[:idx], text[idx + 1:].strip() or None

    # Unbalanced quotes: the title starts after the first comma
    first_comma = text.find(",")
    if in_quotes and first_comma != -1:
        return text[:first_comma], text[first_comma + 1:].strip() or None
    return text, None


def _finalize(entry: ExtinfLine | None, stream_url: str) -> RawChannelRecord | None:
    """Close an entry with its stream URL, applying emission defaults"""
    if entry is None or not entry.name:
        logger.debug(f"Skipping stream URL without channel name: {stream_url}")
        return None

    return RawChannelRecord(
        name=entry.name,
        stream_url=stream_url,
        category=entry.group_title or DEFAULT_CATEGORY,
        language=entry.language or DEFAULT_LANGUAGE,
        logo=entry.logo,
        tvg_id=entry.tvg_id,
        tvg_name=entry.tvg_name,
        country_hint=entry.country_hint,
        group_title=entry.group_title,
    )
