"""Decoding of the ``subsonic-response`` envelope wrapping every JSON reply."""

import logging
from dataclasses import dataclass
from typing import Any, Union

from .exceptions import MalformedEnvelopeError, server_error

logger = logging.getLogger(__name__)

WRAPPER_KEY = "subsonic-response"

# Wrapper attributes describing the server rather than the result
METADATA_KEYS = frozenset({"status", "version", "type", "serverVersion", "openSubsonic"})


@dataclass(frozen=True)
class Success:
    """Successful reply. ``payload`` is None for empty-but-successful results."""

    payload: Any = None


@dataclass(frozen=True)
class Failure:
    """Failed reply carrying the server's error code and message."""

    code: int
    message: str


Envelope = Union[Success, Failure]


def decode_envelope(document: Any) -> Envelope:
    """Classify a decoded JSON document as Success or Failure.

    Args:
        document: Top-level decoded JSON value

    Returns:
        Success with the inner payload, or Failure with code and message

    Raises:
        MalformedEnvelopeError: If the wrapper, status or error object is
            missing or of unexpected shape

    Example:
        >>> decode_envelope({"subsonic-response": {"status": "ok", "song": {"id": "1"}}})
        Success(payload={'id': '1'})
    """
    if not isinstance(document, dict):
        raise MalformedEnvelopeError(f"Expected JSON object, got {type(document).__name__}")

    wrapper = document.get(WRAPPER_KEY)
    if not isinstance(wrapper, dict):
        raise MalformedEnvelopeError(f"Missing '{WRAPPER_KEY}' object")

    status = wrapper.get("status")
    if status == "ok":
        return Success(_extract_payload(wrapper))
    if status == "failed":
        return _extract_failure(wrapper)

    raise MalformedEnvelopeError(f"Unexpected envelope status: {status!r}")


def _extract_payload(wrapper: dict) -> Any:
    keys = [key for key in wrapper if key not in METADATA_KEYS and key != "error"]
    if not keys:
        return None
    if len(keys) > 1:
        raise MalformedEnvelopeError(f"Ambiguous envelope payload keys: {sorted(keys)}")
    return wrapper[keys[0]]


def _extract_failure(wrapper: dict) -> Failure:
    error = wrapper.get("error")
    if not isinstance(error, dict):
        raise MalformedEnvelopeError("Failed envelope has no 'error' object")

    code = error.get("code")
    if isinstance(code, bool) or not isinstance(code, int):
        raise MalformedEnvelopeError(f"Error code is not an integer: {code!r}")

    message = error.get("message", "Unknown error")
    if not isinstance(message, str):
        raise MalformedEnvelopeError(f"Error message is not a string: {message!r}")

    return Failure(code=code, message=message)


def unwrap(envelope: Envelope) -> Any:
    """Return the payload of a Success or raise the ServerError for a Failure.

    Raises:
        ServerError: Subclass matching the failure code (see exceptions.server_error)
    """
    if isinstance(envelope, Failure):
        logger.error(f"Subsonic API error {envelope.code}: {envelope.message}")
        raise server_error(envelope.code, envelope.message)
    return envelope.payload
