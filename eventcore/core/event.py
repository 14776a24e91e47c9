from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Event:
    """Base class for published events.

    Routing only looks at the concrete class of an event, so subclassing is
    optional; any non-``None`` object can be published.
    """

    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc), kw_only=True)
