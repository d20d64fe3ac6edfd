"""Text codec for expiry timestamps.

Clients send and receive expiries as ``dd/mm/yyyy HH:MM`` in the server's
local time zone. Everything past this module works with timezone-aware
datetimes only.
"""

from datetime import datetime
from typing import Optional

EXPIRY_FORMAT = "%d/%m/%Y %H:%M"


def parse_expiry(text: Optional[str]) -> Optional[datetime]:
    """Parse a ``dd/mm/yyyy HH:MM`` expiry.

    Args:
        text: Expiry text; empty or None means "not given"

    Returns:
        Timezone-aware datetime in local time, or None

    Raises:
        ValueError: If the text doesn't match the expiry format
    """
    if text is None:
        return None
    text = text.strip()
    if not text:
        return None
    # naive result is local wall-clock time
    return datetime.strptime(text, EXPIRY_FORMAT).astimezone()


def format_expiry(value: datetime) -> str:
    """Format a datetime as ``dd/mm/yyyy HH:MM`` in local time."""
    return value.astimezone().strftime(EXPIRY_FORMAT)
