"""
Metadata Enrichment Service

Best-effort derivation of country and category for playlist entries.
Matching is heuristic: a channel named after a person who shares a country's
name will be tagged with that country.
"""
from collections.abc import Mapping
from dataclasses import replace
import logging
import re

from iptv_catalog.services.catalog_types import (
    DEFAULT_CATEGORY,
    DEFAULT_COUNTRY,
    DEFAULT_COUNTRY_CODE,
    RawChannelRecord,
)
from iptv_catalog.services.country_codes import COUNTRY_NAMES

logger = logging.getLogger(__name__)

# e.g. "1TV.af@SD" -> "af"
_TVG_ID_COUNTRY_PATTERN = re.compile(r"\.([a-z]{2})(?:@|$)")

# Checked in order, first family with a matching keyword wins
CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("News", ("NEWS", "CNN", "BBC", "FOX")),
    ("Sports", ("SPORT", "ESPN", "FOX SPORTS")),
    ("Kids", ("KIDS", "CARTOON", "DISNEY")),
    ("Music", ("MUSIC", "MTV", "VH1")),
    ("Movies", ("MOVIE", "CINEMA", "FILM")),
    ("Documentary", ("DISCOVERY", "NATIONAL GEOGRAPHIC", "HISTORY")),
)


def resolve_country(
    country_hint: str | None,
    tvg_id: str | None,
    name: str | None,
    table: Mapping[str, str] = COUNTRY_NAMES,
) -> tuple[str, str]:
    """
    Resolve a (country_code, country_name) pair from playlist hints

    Precedence: explicit tvg-country, then the code embedded in tvg-id,
    then a scan of the channel name, then ("xx", "Unknown").

    Args:
        country_hint: Raw tvg-country value (may hold several ';'-separated codes)
        tvg_id: Raw tvg-id value
        name: Channel display name
        table: Code -> country name lookup

    Returns:
        Tuple of (code, name)
    """
    if country_hint:
        code = country_hint.lower().split(";")[0].strip()
        if code in table:
            return code, table[code]

    if tvg_id:
        match = _TVG_ID_COUNTRY_PATTERN.search(tvg_id)
        if match and match.group(1) in table:
            code = match.group(1)
            return code, table[code]

    if name:
        found = _match_country_in_name(name, table)
        if found:
            return found

    return DEFAULT_COUNTRY_CODE, DEFAULT_COUNTRY


def _match_country_in_name(name: str, table: Mapping[str, str]) -> tuple[str, str] | None:
    """Find the first table entry whose name or code appears in the channel name"""
    lowered = name.lower()
    tokens = set(lowered.split(" "))

    for code, country_name in table.items():
        if country_name.lower() in lowered or code in tokens:
            return code, country_name
    return None


def categorize_channel(name: str, group_title: str | None = None) -> str:
    """Pick a category from keywords in the channel name, else the group title, else 'General'"""
    name_upper = name.upper()

    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in name_upper for keyword in keywords):
            return category

    if group_title:
        return group_title

    return DEFAULT_CATEGORY


def enrich_record(record: RawChannelRecord) -> RawChannelRecord:
    """
    Return a copy of record with country and category resolved from its hints

    An explicit group-title is kept as the category; keyword categorization
    only applies to entries without one.
    """
    code, country = resolve_country(record.country_hint, record.tvg_id, record.name)
    category = record.group_title or categorize_channel(record.name)

    if code == DEFAULT_COUNTRY_CODE:
        logger.debug(f"No country detected for {record.name!r}")

    return replace(record, country=country, country_code=code, category=category)
