"""
Comment timestamp formatting.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional


def format_timestamp(moment: datetime) -> str:
    """Render `moment` as "H:MM DD.MM.YYYY" (hour is not zero-padded)."""
    return f"{moment.hour}:{moment.minute:02d} {moment.day:02d}.{moment.month:02d}.{moment.year}"


def format_now(now: Optional[datetime] = None) -> str:
    return format_timestamp(now or datetime.now())
