"""Scan quota models."""

import math
from datetime import date
from typing import Optional, Union

from pydantic import field_serializer

from sentia.services.base import CamelModel


class ScanQuotaState(CamelModel):
    """Persisted daily usage counter."""

    used_today: int = 0
    last_reset_date: date
    daily_limit: int


class QuotaStatus(CamelModel):
    """Answer to "can this user scan now?".

    ``remaining`` is ``math.inf`` for premium users and serializes to ``null``.
    """

    can_scan: bool
    remaining: Union[int, float]
    used: int
    limit: int

    @property
    def unlimited(self) -> bool:
        return math.isinf(self.remaining)

    @field_serializer("remaining")
    def serialize_remaining(self, remaining: Union[int, float]) -> Optional[int]:
        return None if math.isinf(remaining) else int(remaining)


class QuotaReservation(CamelModel):
    """A free scan slot claimed before the pipeline runs."""

    granted: bool
    day: date
    status: QuotaStatus
