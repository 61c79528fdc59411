from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys for the browser client"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ChannelCreate(CamelModel):
    """Validated channel data ready to be inserted into the catalog"""
    model_config = ConfigDict(str_strip_whitespace=True, loc_by_alias=False)

    name: str = Field(..., min_length=1, description="Display name of the channel")
    stream_url: str = Field(..., min_length=1, description="HTTP/HTTPS stream URL")
    category: str = Field(..., min_length=1, description="Channel category")
    country: str = Field(..., min_length=1, description="Country name")
    country_code: str = Field(
        ...,
        pattern=r"^[a-z]{2}$",
        description="Lowercase two-letter country code, 'xx' when unknown",
    )
    language: str | None = Field(None, description="Broadcast language")
    logo: str | None = Field(None, description="URL to channel logo")
    is_online: bool = Field(True, description="Whether the stream is considered online")
    description: str | None = Field(None, description="Free-text channel description")

    @field_validator("stream_url")
    @classmethod
    def validate_stream_url(cls, v: str) -> str:
        """Validate the stream URL is a syntactically valid HTTP/HTTPS URL"""
        if not is_valid_stream_url(v):
            raise ValueError(f"Invalid stream URL: {v}. Must be an absolute http:// or https:// URL")
        return v


class Channel(ChannelCreate):
    """Channel as stored in the catalog"""
    id: int = Field(..., gt=0, description="Catalog identifier assigned by the store")


class CountryStat(CamelModel):
    """Number of channels per country"""
    code: str
    name: str
    channel_count: int


class CategoryStat(CamelModel):
    """Number of channels per category"""
    name: str
    count: int


class SyncResponse(CamelModel):
    """Result of a catalog sync pass"""
    status: str = Field(..., description="'success', 'failed' or 'skipped'")
    message: str
    count: int = Field(0, description="Number of channels added to the catalog")
    error: str | None = None
    channels_parsed: int | None = None
    channels_attempted: int | None = None
    channels_dropped: int | None = Field(None, description="Entries past the per-sync cap")
    channels_rejected: int | None = None
    started_at: str | None = None
    completed_at: str | None = None
    duration_seconds: float | None = None


def is_valid_stream_url(url: str) -> bool:
    """Check that url has an http/https scheme and a network location"""
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return parts.scheme.lower() in ("http", "https") and bool(parts.netloc)
