"""Base models shared across the package."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Timezone-aware current time; the default clock everywhere."""
    return datetime.now(timezone.utc)


def epoch_millis(moment: datetime) -> int:
    """Milliseconds since the Unix epoch for ``moment``."""
    return int(moment.timestamp() * 1000)


@dataclass
class Event:
    """Standard event envelope for streaming."""

    event_id: str
    event_type: str  # entity.action (e.g., card.printed)
    event_time: datetime
    source: str  # Service/system that generated
    subject: str  # Entity ID affected
    data: dict
    metadata: dict = field(default_factory=dict)
