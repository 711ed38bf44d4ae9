"""Configuration for the Resource Relay."""

from typing import Optional

from pydantic import Field, FilePath, SecretStr, field_validator, model_validator
from pydantic.networks import HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

_PREFIX_PATTERN = r"^/.*$"


class Settings(BaseSettings):
    """Configuration settings for the Resource Relay."""

    # Credentials presented to the upstream
    bearer_token: Optional[SecretStr] = None
    bearer_token_file: Optional[FilePath] = None

    # Route path -> upstream listing URL
    listers: dict[str, HttpUrl] = Field(default_factory=dict)

    # Upstream client
    upstream_timeout: float = Field(default=15.0, gt=0)
    upstream_verify_tls: bool = True
    upstream_ca_file: Optional[FilePath] = None

    # Endpoints
    healthz_prefix: str = Field(pattern=_PREFIX_PATTERN, default="/healthz")

    model_config = SettingsConfigDict()

    @field_validator("listers")
    @classmethod
    def _check_lister_routes(cls, v: dict[str, HttpUrl]) -> dict[str, HttpUrl]:
        for route in v:
            if not route.startswith("/"):
                raise ValueError(f"lister route {route!r} must start with '/'")
        return v

    @model_validator(mode="after")
    def _check_token_source(self) -> "Settings":
        if (self.bearer_token is None) == (self.bearer_token_file is None):
            raise ValueError(
                "exactly one of bearer_token or bearer_token_file must be set"
            )
        return self

    def token(self) -> str:
        """Return the bearer credential, reading it from disk if configured as a file."""
        if self.bearer_token is not None:
            return self.bearer_token.get_secret_value()
        return self.bearer_token_file.read_text().strip()
