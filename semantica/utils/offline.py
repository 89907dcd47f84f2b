"""Offline-first gating utilities."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from semantica.config import Settings


@dataclass(slots=True)
class OfflineModeGate:
    """Centralized guard for capabilities that need the network (model downloads)."""

    online_enabled: bool

    @classmethod
    def from_settings(cls, settings: "Settings") -> "OfflineModeGate":
        """Construct gate using configuration and environment overrides."""

        env_override = os.getenv("SEMANTICA_ONLINE")
        online_enabled = settings.online or (env_override is not None and env_override != "0")
        return cls(online_enabled=online_enabled)

    def is_online_enabled(self) -> bool:
        return self.online_enabled
