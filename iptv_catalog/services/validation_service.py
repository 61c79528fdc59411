import logging

from pydantic import ValidationError

from iptv_catalog.schemas import ChannelCreate
from iptv_catalog.services.catalog_types import RawChannelRecord, RecordResult

logger = logging.getLogger(__name__)


def validate_record(record: RawChannelRecord) -> RecordResult:
    """
    Validate a parsed record against the catalog channel schema

    Rejections are returned as a RecordResult with a reason, never raised,
    so one bad entry does not stop the batch.

    Args:
        record: Record with defaults (and enrichment) applied

    Returns:
        RecordResult holding either the ChannelCreate payload or the error
    """
    try:
        payload = ChannelCreate(
            name=record.name,
            stream_url=record.stream_url,
            category=record.category,
            country=record.country,
            country_code=record.country_code,
            language=record.language,
            logo=record.logo,
            is_online=record.is_online,
            description=record.description,
        )
    except ValidationError as exc:
        return RecordResult(record=record, error=_format_errors(exc))

    return RecordResult(record=record, payload=payload)


def _format_errors(exc: ValidationError) -> str:
    """Flatten pydantic errors into one readable line"""
    parts = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error.get("loc", ()))
        parts.append(f"{field}: {error.get('msg')}")
    return "; ".join(parts)
