from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HOST = "127.0.0.1"
DEFAULT_TIMEOUT_SECONDS = 0.5

START_PORT = 4370
END_PORT = 4400

SPOTIFY_OAUTH_TOKEN_URL = "https://open.spotify.com/token"
SPOTIFY_ORIGIN = "https://open.spotify.com"
DEFAULT_USER_AGENT = "Python Spotify Control"


class ControlSettings(BaseSettings):
    """Client settings with validation.

    Every field has a working default, so an empty environment yields the
    standard localhost setup. Values can be overridden with environment
    variables prefixed ``SPOTIFY_CONTROL_`` or a ``.env`` file in the
    current working directory.
    """

    host: str = Field(default=DEFAULT_HOST, min_length=1, description="Host the Spotify client listens on")
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0, description="Per-request timeout in seconds")

    port_range_start: int = Field(default=START_PORT, ge=1, le=65535, description="First port to check")
    port_range_end: int = Field(default=END_PORT, ge=1, le=65535, description="Last port to check (inclusive)")

    oauth_token_url: str = Field(
        default=SPOTIFY_OAUTH_TOKEN_URL,
        pattern=r"^https?://",
        description="Remote endpoint issuing the OAuth token",
    )
    origin: str = Field(default=SPOTIFY_ORIGIN, description="Origin and Referer sent with every request")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=1, description="User-Agent sent with every request")

    log_level: str = Field(default="INFO", description="Logging level for setup_logging()")

    model_config = SettingsConfigDict(
        env_prefix="SPOTIFY_CONTROL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("host", mode="after")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Ensure host is not empty or whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("host cannot be empty")
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"log_level must be a standard logging level, got {v!r}")
        return v

    @model_validator(mode="after")
    def validate_port_range(self) -> "ControlSettings":
        """Ensure the scan range is not inverted."""
        if self.port_range_start > self.port_range_end:
            raise ValueError(
                f"port_range_start ({self.port_range_start}) must not exceed port_range_end ({self.port_range_end})"
            )
        return self

    @property
    def request_headers(self) -> dict[str, str]:
        """Headers the token service and the local player expect from a browser."""
        return {
            "Origin": self.origin,
            "Referer": self.origin,
            "User-Agent": self.user_agent,
        }


_settings_instance: ControlSettings | None = None


def get_settings() -> ControlSettings:
    """Get the singleton ControlSettings instance.

    The environment and ``.env`` file are read once; later calls reuse
    the same instance.

    Returns:
        Cached ControlSettings instance
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = ControlSettings()
    return _settings_instance
