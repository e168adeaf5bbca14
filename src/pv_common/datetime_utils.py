"""UTC datetime utilities and the injectable service clock."""

from collections.abc import Callable
from datetime import datetime, timezone

# Zero-arg callable returning aware UTC now; injected into services.
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)
