"""Application settings using pydantic-settings."""

from functools import cache
from typing import Annotated, Any, Literal

from pydantic import AliasChoices, BeforeValidator, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from trackbridge.config import CatalogConfig

LogLevel = Annotated[
    Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    BeforeValidator(lambda v: v.upper() if isinstance(v, str) else v),
]


def _credential(name: str, description: str) -> Any:
    # Accept both TRACKBRIDGE_<NAME> and the bare <NAME> used by existing
    # deployments.
    return Field(
        default=None,
        validation_alias=AliasChoices(f"trackbridge_{name}", name),
        description=description,
    )


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TRACKBRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Spotify credentials (client-credentials flow)
    spotify_client_id: str | None = _credential(
        "spotify_client_id", "Spotify application client ID"
    )
    spotify_client_secret: str | None = _credential(
        "spotify_client_secret", "Spotify application client secret"
    )

    # Apple Music developer token signing material
    apple_team_id: str | None = _credential("apple_team_id", "Apple developer team ID")
    apple_key_id: str | None = _credential("apple_key_id", "MusicKit key ID")
    apple_private_key: str | None = _credential(
        "apple_private_key", "MusicKit private key (PEM)"
    )
    apple_music_user_token: str | None = _credential(
        "apple_music_user_token", "Optional Music-User-Token header value"
    )

    # Catalog settings
    spotify_market: str = Field(default="US", description="Spotify market code")
    apple_storefront: str = Field(default="us", description="Apple Music storefront")
    http_timeout: float = Field(default=10.0, gt=0, description="HTTP timeout (s)")

    log_level: LogLevel = Field(default="INFO", description="Log level")

    @field_validator("apple_private_key")
    @classmethod
    def unescape_private_key(cls, v: str | None) -> str | None:
        """Turn escaped newlines from single-line env values into real ones."""
        if v is None:
            return v
        return v.replace("\\n", "\n").strip()

    @property
    def has_spotify_credentials(self) -> bool:
        return bool(self.spotify_client_id and self.spotify_client_secret)

    @property
    def has_apple_music_credentials(self) -> bool:
        return bool(self.apple_team_id and self.apple_key_id and self.apple_private_key)

    def catalog_config(self) -> CatalogConfig:
        """Catalog client configuration derived from these settings."""
        return CatalogConfig(
            spotify_market=self.spotify_market,
            apple_storefront=self.apple_storefront,
            http_timeout=self.http_timeout,
        )


@cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
