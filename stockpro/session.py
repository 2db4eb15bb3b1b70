"""
Session — who is acting and in which timezone.

Every service call receives one explicitly; nothing reads the current user
from global state.

    session = Session.from_request(request)
    inventory.dashboard(session)
"""

from dataclasses import dataclass
from datetime import tzinfo
from typing import Any


@dataclass(frozen=True)
class Session:
    """
    Owner scope for all queries and writes.

    tz None means the business timezone from settings
    (see stockpro.dates.business_timezone).
    """

    owner: Any
    tz: tzinfo | None = None

    @classmethod
    def from_request(cls, request) -> 'Session':
        return cls(owner=request.user)
