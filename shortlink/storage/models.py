"""Data models for shortlink storage."""

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class URLRecord:
    """A slug -> target URL mapping with an absolute expiry.

    Records are created once and never mutated. ``expires_at`` is always
    timezone-aware; naive values are taken as UTC.
    """

    slug: str
    target_url: str
    expires_at: datetime

    def __post_init__(self):
        if self.expires_at.tzinfo is None:
            object.__setattr__(self, "expires_at", self.expires_at.replace(tzinfo=timezone.utc))

    def is_expired(self, now: datetime = None) -> bool:
        """Whether the record is past its expiry."""
        now = now or datetime.now(timezone.utc)
        return self.expires_at <= now

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "slug": self.slug,
            "target_url": self.target_url,
            "expires_at": self.expires_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "URLRecord":
        """Create from dictionary."""
        expires_at = data["expires_at"]
        return cls(
            slug=data["slug"],
            target_url=data["target_url"],
            expires_at=expires_at if isinstance(expires_at, datetime) else datetime.fromisoformat(expires_at),
        )
