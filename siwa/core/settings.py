"""Client-secret settings loaded from environment variables."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APPLE_AUDIENCE = "https://appleid.apple.com"
MAX_LIFETIME_SECONDS = 15_777_000
ONE_MONTH_SECONDS = 2_592_000
SIX_MONTHS_SECONDS = 15_690_000

_NO_AUDIENCE = {"", "none"}


class SecretSettings(BaseSettings):
    """Audience profile, default lifetime, and logging options.

    ``audience`` selects the deployment profile: ``None`` omits the
    ``aud`` claim, any string is emitted verbatim.
    """

    model_config = SettingsConfigDict(env_prefix="SIWA_")

    audience: str | None = APPLE_AUDIENCE
    default_lifetime: int = SIX_MONTHS_SECONDS
    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("audience", mode="before")
    @classmethod
    def _parse_audience(cls, value: object) -> object:
        if isinstance(value, str) and value.strip().lower() in _NO_AUDIENCE:
            return None
        return value

    @field_validator("default_lifetime")
    @classmethod
    def _check_default_lifetime(cls, value: int) -> int:
        if value <= 0 or value > MAX_LIFETIME_SECONDS:
            raise ValueError(
                f"default_lifetime must be between 1 and {MAX_LIFETIME_SECONDS}"
            )
        return value
