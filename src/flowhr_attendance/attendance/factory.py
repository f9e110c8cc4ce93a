from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_HALF_DAY_THRESHOLD_MINUTES
from .strategies.base import StatusPolicy
from .strategies.hours_strategy import HoursStatusPolicy
from .strategies.presence_strategy import PresenceStatusPolicy


@dataclass
class StatusPolicyFactory:
    """Factory Pattern: pick the status policy configured for the deployment."""

    half_day_threshold_minutes: int = DEFAULT_HALF_DAY_THRESHOLD_MINUTES

    def for_name(self, name: str) -> StatusPolicy:
        key = (name or "presence").strip().lower()
        if key == PresenceStatusPolicy.name:
            return PresenceStatusPolicy()
        if key == HoursStatusPolicy.name:
            return HoursStatusPolicy(self.half_day_threshold_minutes)
        raise ValueError(f"Unknown STATUS_POLICY: {name!r}")
