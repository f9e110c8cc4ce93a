from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class OfficeSettings:
    """Per-office attendance restrictions (network allow-list and geo-fence)."""

    office_id: int
    office_name: str
    is_active: bool = True
    allowed_ip_ranges: Tuple[str, ...] = field(default_factory=tuple)
    require_ip_whitelist: bool = False
    geo_fencing_enabled: bool = False
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius_meters: Optional[int] = None
