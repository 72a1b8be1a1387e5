"""Request and preset types for client-secret generation."""

from enum import Enum

from pydantic import BaseModel, SecretStr

from siwa.core.settings import ONE_MONTH_SECONDS, SIX_MONTHS_SECONDS


class LifetimePreset(str, Enum):
    """Convenience lifetimes, all within Apple's six-month ceiling."""

    ONE_MONTH = "one-month"
    SIX_MONTHS = "six-months"

    @property
    def seconds(self) -> int:
        return _PRESET_SECONDS[self]


_PRESET_SECONDS = {
    LifetimePreset.ONE_MONTH: ONE_MONTH_SECONDS,
    LifetimePreset.SIX_MONTHS: SIX_MONTHS_SECONDS,
}


class SecretRequest(BaseModel):
    """Caller-supplied inputs for one client secret."""

    key_id: str
    team_id: str
    client_id: str
    private_key: SecretStr
    lifetime: int | str = SIX_MONTHS_SECONDS

