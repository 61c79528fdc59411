"""
Structured logging helpers for consistent log formatting.

Provides utilities for structured, clean logging of sync passes.
"""
import logging
from datetime import datetime, timezone


def log_sync_start(logger: logging.Logger, source: str) -> None:
    """
    Log catalog sync operation start.

    Args:
        logger: Logger instance
        source: Sanitized playlist source
    """
    logger.info(f"Catalog sync started at {datetime.now(timezone.utc).isoformat()} (source: {source})")


def log_sync_end(logger: logging.Logger) -> None:
    """Log catalog sync operation end."""
    logger.info(f"Catalog sync completed at {datetime.now(timezone.utc).isoformat()}")


def log_stage(logger: logging.Logger, stage: str, detail: str = "") -> None:
    """
    Log entry into a sync stage.

    Args:
        logger: Logger instance
        stage: Stage name (Fetching, Parsing, ...)
        detail: Optional extra context
    """
    logger.info(f"Stage: {stage}" + (f" - {detail}" if detail else ""))


def log_sync_summary(
    logger: logging.Logger,
    parsed: int,
    attempted: int,
    rejected: int,
    added: int,
) -> None:
    """
    Log sync pass summary.

    Args:
        logger: Logger instance
        parsed: Records produced by the parser
        attempted: Records kept after the per-sync cap
        rejected: Records that failed validation
        added: Channels now in the catalog
    """
    logger.info(
        f"Sync summary - Parsed: {parsed}, Attempted: {attempted}, "
        f"Rejected: {rejected}, Added: {added}"
    )
