"""Authenticated session state for the local control API."""

from pydantic import BaseModel, ConfigDict, Field


def build_base_url(host: str, port: int) -> str:
    """Root URL of an HTTP server on host:port, bracketing IPv6 literals."""
    if ":" in host and not host.startswith("["):
        host = f"[{host}]"
    return f"http://{host}:{port}"


class ClientSession(BaseModel):
    """Resolved endpoint and tokens, written once at connect time.

    A session only exists once discovery and both token fetches succeeded,
    so every instance is usable for commands.
    """

    model_config = ConfigDict(frozen=True)

    host: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535)
    oauth_token: str = Field(min_length=1, repr=False)
    csrf_token: str = Field(min_length=1, repr=False)
    timeout: float = Field(gt=0)

    @property
    def base_url(self) -> str:
        """Root URL of the player's local HTTP server."""
        return build_base_url(self.host, self.port)

    @property
    def auth_params(self) -> dict[str, str]:
        """Query parameters that authorize a command."""
        return {"csrf": self.csrf_token, "oauth": self.oauth_token}
