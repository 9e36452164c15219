"""Date and time formatting utilities."""

from datetime import datetime, timezone
from typing import Optional


def format_time_ago(moment: datetime, now: Optional[datetime] = None) -> str:
    """
    Format a point in time relative to now.

    Args:
        moment: Timezone-aware time to describe
        now: Reference time (defaults to the current UTC time)

    Returns:
        "just now", "{N}m ago", "{N}h ago" or "{N}d ago", units truncated
    """
    if now is None:
        now = datetime.now(timezone.utc)

    seconds = int((now - moment).total_seconds())
    if seconds < 60:
        return "just now"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"
