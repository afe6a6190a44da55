from __future__ import annotations

from datetime import datetime

from ..core.constants import TIMESTAMP_FORMAT


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def format_timestamp(value: datetime) -> str:
    """Format as DD/MM/YYYY HH:MM:SS."""
    return value.strftime(TIMESTAMP_FORMAT)
