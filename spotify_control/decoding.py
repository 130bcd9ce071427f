"""Decoding helpers for the loosely-typed JSON the Spotify endpoints return.

Responses are parsed into plain dicts first; fields are then checked one by
one so that an absent field, a field of the wrong type and a usable value
can be told apart.
"""

import json
import re
from enum import Enum
from typing import Any, NamedTuple

import httpx

from spotify_control.exceptions import ParseException, ProtocolException, SpotifyAPIException

# Optional minus sign and ASCII digits only; no whitespace, "+" or underscores
_ERROR_CODE = re.compile(r"-?[0-9]+")


class FieldState(str, Enum):
    """Outcome of looking up a single JSON field."""

    ABSENT = "absent"
    WRONG_TYPE = "wrong_type"
    PRESENT = "present"


class FieldLookup(NamedTuple):
    """Result of lookup_field(): the state plus the value when PRESENT."""

    state: FieldState
    value: Any = None

    @property
    def is_present(self) -> bool:
        return self.state is FieldState.PRESENT


def parse_json_object(body: bytes | str) -> dict[str, Any]:
    """Parse a response body that must be a JSON object.

    Args:
        body: Raw response body

    Returns:
        The decoded object

    Raises:
        ParseException: If the body is not JSON or not an object
    """
    try:
        data = json.loads(body)
    except ValueError as e:
        raise ParseException(f"Response body is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ParseException(
            "Unknown JSON object could not be parsed",
            details={"json_type": type(data).__name__},
        )
    return data


def parse_response(response: httpx.Response) -> dict[str, Any]:
    """Parse an httpx response body as a JSON object."""
    return parse_json_object(response.content)


def lookup_field(data: dict[str, Any], key: str, expected_type: type | tuple[type, ...]) -> FieldLookup:
    """Look up ``key`` in ``data`` and check its type.

    ``bool`` is never accepted where ``int`` is expected, even though it is
    a subclass in Python.
    """
    if key not in data:
        return FieldLookup(FieldState.ABSENT)

    value = data[key]
    if isinstance(value, bool) and bool not in _as_tuple(expected_type):
        return FieldLookup(FieldState.WRONG_TYPE, value)
    if not isinstance(value, expected_type):
        return FieldLookup(FieldState.WRONG_TYPE, value)
    return FieldLookup(FieldState.PRESENT, value)


def require_string(data: dict[str, Any], key: str, description: str) -> str:
    """Extract a non-empty string field or raise ProtocolException.

    Args:
        data: Decoded JSON object
        key: Field name
        description: What the field holds, used in error messages (e.g. "CSRF token")

    Returns:
        The field value

    Raises:
        ProtocolException: If the field is absent, not a string or empty
    """
    lookup = lookup_field(data, key, str)

    if lookup.state is FieldState.ABSENT:
        raise ProtocolException(
            f"{description} not found or invalid in Spotify API response: '{key}' is missing",
            details={"field": key, "state": lookup.state.value},
        )
    if lookup.state is FieldState.WRONG_TYPE:
        raise ProtocolException(
            f"{description} not found or invalid in Spotify API response: "
            f"'{key}' is {type(lookup.value).__name__}, expected string",
            details={"field": key, "state": lookup.state.value},
        )
    if not lookup.value:
        raise ProtocolException(
            f"{description} not found or invalid in Spotify API response: '{key}' is empty",
            details={"field": key, "state": "empty"},
        )
    return lookup.value


def extract_api_error(data: dict[str, Any]) -> SpotifyAPIException | None:
    """Build an exception from an ``{"error": {"type", "message"}}`` envelope.

    The numeric code falls back to 0 and the message to an empty string
    when they are missing or unusable.

    Returns:
        SpotifyAPIException for the envelope, or None if there is no ``error`` key

    Raises:
        ProtocolException: If ``error`` is present but is not an object
    """
    envelope = lookup_field(data, "error", dict)
    if envelope.state is FieldState.ABSENT:
        return None
    if envelope.state is FieldState.WRONG_TYPE:
        raise ProtocolException(
            "Malformed error envelope in Spotify API response",
            details={"error": envelope.value},
        )

    error_data = envelope.value
    code = _parse_error_code(lookup_field(error_data, "type", (str, int)))

    message_lookup = lookup_field(error_data, "message", str)
    message = message_lookup.value if message_lookup.is_present else ""

    return SpotifyAPIException(code, message, details={"error": error_data})


def raise_for_api_error(data: dict[str, Any]) -> None:
    """Raise the envelope error if the response carries one."""
    error = extract_api_error(data)
    if error is not None:
        raise error


def _parse_error_code(lookup: FieldLookup) -> int:
    if not lookup.is_present:
        return 0
    text = str(lookup.value)
    if not _ERROR_CODE.fullmatch(text):
        return 0
    return int(text)


def _as_tuple(expected_type: type | tuple[type, ...]) -> tuple[type, ...]:
    return expected_type if isinstance(expected_type, tuple) else (expected_type,)
