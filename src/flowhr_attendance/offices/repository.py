from __future__ import annotations

from typing import Optional, Protocol

from .model import OfficeSettings


class OfficeSettingsRepository(Protocol):
    def get_for_office(self, office_id: int) -> Optional[OfficeSettings]:
        """Office row joined with its settings; None when the office does not exist."""

        raise NotImplementedError
