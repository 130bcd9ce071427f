"""Custom exceptions for the Spotify local control client."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error reporting."""

    CONTROL_ERROR = "CONTROL_ERROR"

    # Transport errors
    NETWORK_ERROR = "NETWORK_ERROR"
    PORT_NOT_FOUND = "PORT_NOT_FOUND"

    # Response decoding errors
    PARSE_ERROR = "PARSE_ERROR"
    PROTOCOL_ERROR = "PROTOCOL_ERROR"

    # Caller input errors
    INVALID_URI = "INVALID_URI"

    # Errors reported by Spotify itself
    SPOTIFY_API_ERROR = "SPOTIFY_API_ERROR"


class SpotifyControlException(Exception):
    """Base exception for all Spotify control errors.

    All custom exceptions inherit from this class so callers can catch
    every client failure with a single except clause.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONTROL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        """Initialize control exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)


class NetworkException(SpotifyControlException):
    """Connection failure or timeout talking to Spotify."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.NETWORK_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


class PortNotFoundException(NetworkException):
    """No port in the scanned range answered the status check."""

    def __init__(self, start_port: int, end_port: int, details: dict[str, Any] | None = None):
        self.start_port = start_port
        self.end_port = end_port
        super().__init__(
            f"Spotify port in range {start_port}-{end_port} not found, is it running?",
            code=ErrorCode.PORT_NOT_FOUND,
            details=details,
        )


class ParseException(SpotifyControlException):
    """Response body is not valid JSON or not a JSON object."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.PARSE_ERROR, details=details)


class ProtocolException(SpotifyControlException):
    """Response JSON is missing an expected field or has it with the wrong type."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.PROTOCOL_ERROR, details=details)


class InvalidURIException(SpotifyControlException):
    """URI passed to play() is not a supported Spotify track reference."""

    def __init__(self, uri: str, details: dict[str, Any] | None = None):
        self.uri = uri
        super().__init__(
            f"Unsupported Spotify URI: {uri!r} (expected spotify:track:<id> or https://open.spotify.com/track/<id>)",
            code=ErrorCode.INVALID_URI,
            details=details,
        )


class SpotifyAPIException(SpotifyControlException):
    """Error envelope returned by the local player or the token service.

    Attributes:
        api_code: Numeric error type from the envelope (0 when absent or non-numeric)
        api_message: Envelope message, copied verbatim
    """

    def __init__(self, api_code: int, api_message: str, details: dict[str, Any] | None = None):
        self.api_code = api_code
        self.api_message = api_message
        super().__init__(
            f"Spotify API error {api_code}: {api_message}",
            code=ErrorCode.SPOTIFY_API_ERROR,
            details=details,
        )
