"""
File and download utilities

This module reads playlist text from HTTP(S) URLs or local files.
"""
import logging
from pathlib import Path

import aiofiles
import httpx


logger = logging.getLogger(__name__)


async def download_text(
    url: str,
    timeout: float = 30.0,
    client: httpx.AsyncClient | None = None,
) -> str:
    """
    Download a text document from URL

    A single attempt is made; non-2xx responses raise.

    Args:
        url: URL to download from
        timeout: HTTP timeout in seconds
        client: Optional client to reuse (its own timeout applies)

    Returns:
        Decoded response body

    Raises:
        httpx.HTTPError: On connection errors, timeouts and non-success status
    """
    if client is None:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as own_client:
            return await _get_text(own_client, url)
    return await _get_text(client, url)


async def _get_text(client: httpx.AsyncClient, url: str) -> str:
    response = await client.get(url)
    response.raise_for_status()

    size_kb = len(response.content) / 1024
    logger.info(f"Downloaded {size_kb:.1f} KB (HTTP {response.status_code})")
    return response.text


async def read_text_file(file_path: Path | str) -> str:
    """
    Read a local text file without blocking the event loop

    Raises:
        OSError: If the file cannot be read
    """
    path = Path(file_path)
    async with aiofiles.open(path, "r", encoding="utf-8", errors="replace") as f:
        content = await f.read()

    logger.info(f"Read {len(content) / 1024:.1f} KB from {path}")
    return content
