"""Client tier settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from market_eod.config import Settings
    from market_eod.query.builder import ClientSyncConfigBuilder


class ClientSyncConfig(BaseModel):
    """Free-tier vs paid-tier switch, read by the client at construction time."""

    model_config = ConfigDict(frozen=True)

    is_free_tier: bool = False

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> ClientSyncConfig:
        from market_eod.config import get_settings

        s = (settings or get_settings()).client
        return cls(is_free_tier=s.is_free_tier)

    @classmethod
    def builder(cls) -> ClientSyncConfigBuilder:
        from market_eod.query.builder import ClientSyncConfigBuilder

        return ClientSyncConfigBuilder()
