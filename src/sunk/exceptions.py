"""Exception classes for the sunk client library.

Every error raised by the library derives from :class:`SunkError`, so callers
can catch the whole family or match on the specific variant to decide whether
to retry (:class:`NetworkError`), re-authenticate (:class:`AuthenticationError`)
or give up (:class:`DecodeError`, :class:`InvalidFieldError`).
"""

from typing import Any, Optional


class SunkError(Exception):
    """Base exception for all sunk errors.

    Attributes:
        message: Human-readable error message
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NetworkError(SunkError):
    """The HTTP exchange itself failed (connection, timeout, HTTP status).

    Attributes:
        status_code: HTTP status code when the server answered, else None
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class DecodeError(SunkError):
    """Response body cannot be decoded (invalid JSON or text encoding)."""

    pass


class MalformedEnvelopeError(DecodeError):
    """JSON document lacks a well-formed ``subsonic-response`` wrapper."""

    pass


class UrlConstructionError(SunkError, ValueError):
    """Configured base URL cannot be turned into a request URL."""

    pass


class InvalidFieldError(SunkError):
    """Entity payload failed validating conversion.

    Attributes:
        field: Wire name of the offending field
        value: Offending value (None when the field was missing)
    """

    def __init__(self, field: str, value: Any = None, reason: str = "invalid value"):
        self.field = field
        self.value = value
        super().__init__(f"Field '{field}': {reason} ({value!r})")


class InvalidIdError(InvalidFieldError):
    """Identifier field is not an unsigned decimal integer."""

    def __init__(self, field: str, value: Any):
        super().__init__(field, value, reason="not a numeric id")


class ServerError(SunkError):
    """Server reported an application-level failure in the envelope.

    Attributes:
        code: Subsonic error code
        message: Error message from server
    """

    def __init__(self, code: int, message: str):
        """Initialize server error.

        Args:
            code: Subsonic error code (0, 10, 20, 30, 40, 50, 60, 70)
            message: Human-readable error message
        """
        self.code = code
        super().__init__(message)

    def __str__(self) -> str:
        return f"Subsonic Error {self.code}: {self.message}"


class ParameterError(ServerError):
    """Required parameter missing (error code 10)."""

    pass


class VersionError(ServerError):
    """API version incompatibility (error codes 20, 30)."""

    pass


class AuthenticationError(ServerError):
    """Wrong username or password (error codes 40, 41)."""

    pass


class TokenAuthenticationNotSupportedError(ServerError):
    """Token authentication not supported (code 42)."""

    pass


class ClientVersionTooOldError(ServerError):
    """Client must upgrade (code 43)."""

    pass


class ServerVersionTooOldError(ServerError):
    """Server must upgrade (code 44)."""

    pass


class AuthorizationError(ServerError):
    """User not authorized for requested action (error code 50)."""

    pass


class TrialError(ServerError):
    """Trial period expired (error code 60)."""

    pass


class NotFoundError(ServerError):
    """Requested resource not found (error code 70)."""

    pass


_ERRORS_BY_CODE = {
    10: ParameterError,
    20: VersionError,
    30: VersionError,
    40: AuthenticationError,
    41: AuthenticationError,
    42: TokenAuthenticationNotSupportedError,
    43: ClientVersionTooOldError,
    44: ServerVersionTooOldError,
    50: AuthorizationError,
    60: TrialError,
    70: NotFoundError,
}


def server_error(code: int, message: str) -> ServerError:
    """Build the ServerError subclass matching a Subsonic error code.

    Unknown codes (including the generic code 0) map to plain ServerError.
    """
    return _ERRORS_BY_CODE.get(code, ServerError)(code, message)
