"""Publication state for blog posts and news items."""
from datetime import datetime
from typing import Optional

from app.utils.datetime import db_now

PUBLISHED = "published"
DRAFT = "draft"


def published_at_for(
    previous_status: Optional[str],
    new_status: str,
    current: Optional[datetime],
    now: Optional[datetime] = None,
) -> Optional[datetime]:
    """``published_at`` after a status change.

    Becoming published stamps ``now``; staying published keeps the original
    stamp; anything else clears it.
    """
    if new_status != PUBLISHED:
        return None
    if previous_status == PUBLISHED and current is not None:
        return current
    return now or db_now()
