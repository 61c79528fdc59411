"""
Playlist Downloader Service

Handles fetching playlist text from the configured source and parsing it
off the event loop. Separated from orchestration logic for better testability.
"""
import asyncio
import logging
from urllib.parse import urlsplit
from urllib.request import url2pathname

import httpx

from iptv_catalog.services.catalog_types import RawChannelRecord
from iptv_catalog.services.playlist_parser_service import parse_playlist
from iptv_catalog.utils.file_operations import download_text, read_text_file


logger = logging.getLogger(__name__)


class PlaylistFetchError(RuntimeError):
    """Raised when the playlist source cannot be fetched; fatal for a sync pass"""
    pass


async def fetch_playlist(
    source: str,
    timeout: float = 30.0,
    client: httpx.AsyncClient | None = None,
) -> str:
    """
    Fetch playlist text from an HTTP(S) URL or a local file

    Args:
        source: HTTP(S) URL, file:// URL or filesystem path
        timeout: HTTP timeout in seconds
        client: Optional HTTP client (tests pass one with a mock transport)

    Returns:
        Playlist text

    Raises:
        PlaylistFetchError: Source unreachable, timed out, non-success status or unreadable file
    """
    sanitized = sanitize_url_for_logging(source)

    if source.lower().startswith(("http://", "https://")):
        logger.info(f"Fetching playlist from {sanitized}...")
        try:
            return await download_text(source, timeout=timeout, client=client)
        except httpx.TimeoutException as e:
            raise PlaylistFetchError(f"Timed out fetching playlist from {sanitized}") from e
        except httpx.HTTPStatusError as e:
            raise PlaylistFetchError(
                f"Playlist source returned HTTP {e.response.status_code}: {sanitized}"
            ) from e
        except httpx.HTTPError as e:
            raise PlaylistFetchError(f"Failed to fetch playlist from {sanitized}: {e}") from e

    path = _local_path(source)
    logger.info(f"Reading playlist from {path}...")
    try:
        return await read_text_file(path)
    except OSError as e:
        raise PlaylistFetchError(f"Failed to read playlist file {path}: {e}") from e


def _local_path(source: str) -> str:
    if source.lower().startswith("file://"):
        return url2pathname(urlsplit(source).path)
    return source


async def parse_playlist_async(
    content: str,
    *,
    parse_timeout_seconds: int | None = None,
) -> list[RawChannelRecord]:
    """
    Parse playlist text in the default executor with timeout protection.

    Args:
        content: Playlist text

    Keyword Args:
        parse_timeout_seconds: Timeout in seconds for parsing (0/None disables timeout)

    Raises:
        ValueError: If parsing times out
    """
    effective_timeout = parse_timeout_seconds if parse_timeout_seconds and parse_timeout_seconds > 0 else None
    timeout_display = f"{effective_timeout}s" if effective_timeout else "disabled"

    loop = asyncio.get_running_loop()
    logger.debug("Offloading playlist parsing to thread pool executor (timeout: %s)...", timeout_display)
    parse_task = loop.run_in_executor(None, parse_playlist, content)
    try:
        if effective_timeout:
            return await asyncio.wait_for(parse_task, timeout=effective_timeout)
        return await parse_task
    except asyncio.TimeoutError:
        logger.error("Playlist parsing timed out after %s", timeout_display)
        raise ValueError("Playlist parsing timed out - playlist may be too large")


def sanitize_url_for_logging(url: str) -> str:
    """Remove credentials from URL for safe logging."""
    if "://" not in url:
        return url
    try:
        protocol, rest = url.split("://", 1)
        if "@" in rest.split("/", 1)[0]:
            rest = rest.split("@", 1)[1]
            return f"{protocol}://***:***@{rest}"
        return url
    except (ValueError, IndexError):
        return url
