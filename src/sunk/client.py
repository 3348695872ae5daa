"""HTTP transport for the Subsonic REST API."""

import logging
from typing import Any, Iterable, List, Optional, Tuple, Union
from urllib.parse import urlencode

import httpx

from .auth import create_auth_params, generate_token
from .envelope import decode_envelope, unwrap
from .exceptions import DecodeError, NetworkError, UrlConstructionError
from .models import SunkConfig
from .query import Query

logger = logging.getLogger(__name__)

QueryLike = Union[Query, Iterable[Tuple[str, str]], None]


def _pairs(query: QueryLike) -> List[Tuple[str, str]]:
    if query is None:
        return []
    if isinstance(query, Query):
        return list(query.build())
    return list(query)


class Client:
    """Synchronous client for the Subsonic REST API.

    The client attaches authentication to every request, performs one
    blocking HTTP GET per call and decodes the response envelope. It never
    retries: a network failure surfaces immediately as NetworkError.

    One token (and salt) is generated per client, so every request and every
    URL built by the same client carries identical auth parameters. A client
    instance must not be shared between threads without external locking.

    Attributes:
        config: SunkConfig with server connection details
        client: httpx.Client used for HTTP requests

    Example:
        >>> config = SunkConfig(
        ...     url="https://music.example.com",
        ...     username="john",
        ...     password="secret"
        ... )
        >>> with Client(config) as client:
        ...     artist = get_artist(client, 1)
        ...     albums = artist.albums(client)
    """

    def __init__(self, config: SunkConfig, transport: Optional[httpx.BaseTransport] = None):
        """Initialize client.

        Args:
            config: SunkConfig with server URL and credentials
            transport: Optional httpx transport replacing the default network
                transport (custom networking or tests)
        """
        self.config = config
        self._base_url = config.url.rstrip("/")
        self._auth_params = create_auth_params(config, generate_token(config))

        self.client = httpx.Client(
            timeout=httpx.Timeout(
                connect=30.0,  # 30s connection timeout
                read=config.timeout,
                write=30.0,  # 30s write timeout
                pool=5.0,  # 5s pool acquisition timeout
            ),
            limits=httpx.Limits(
                max_connections=100,
                max_keepalive_connections=20,
                keepalive_expiry=5.0,
            ),
            transport=transport,
            follow_redirects=True,
            http2=True,
        )

        logger.info(f"Initialized Subsonic client for {self._base_url}")

    def _endpoint(self, operation: str) -> str:
        """Build the absolute endpoint URL (without query) for an operation.

        Raises:
            UrlConstructionError: If the base URL is not an absolute http(s) URL
        """
        try:
            base = httpx.URL(self._base_url)
        except httpx.InvalidURL as e:
            raise UrlConstructionError(f"Invalid base URL {self._base_url!r}: {e}") from e

        if base.scheme not in ("http", "https") or not base.host:
            raise UrlConstructionError(
                f"Base URL must be an absolute http(s) URL, got {self._base_url!r}"
            )
        if base.query or base.fragment:
            raise UrlConstructionError(
                f"Base URL must not carry a query or fragment, got {self._base_url!r}"
            )

        return f"{self._base_url}/rest/{operation}"

    def _params(self, query: QueryLike) -> List[Tuple[str, str]]:
        """Caller parameters in builder order followed by auth parameters."""
        return _pairs(query) + list(self._auth_params.items())

    def build_url(self, operation: str, query: QueryLike = None) -> str:
        """Build the full, authenticated URL for an operation.

        Used for endpoints a media player fetches directly, such as ``stream``
        and ``download``.

        Args:
            operation: API operation name (e.g., "stream")
            query: Query builder or built pairs

        Returns:
            Absolute URL including query and auth parameters

        Raises:
            UrlConstructionError: If the base URL is malformed
        """
        return f"{self._endpoint(operation)}?{urlencode(self._params(query))}"

    def _send(self, operation: str, query: QueryLike) -> httpx.Response:
        url = self._endpoint(operation)
        params = self._params(query)

        logger.debug(f"GET {operation} {_pairs(query)}")
        try:
            response = self.client.get(url, params=params)
        except httpx.HTTPError as e:
            raise NetworkError(f"{operation}: {type(e).__name__}: {e}") from e

        if not response.is_success:
            # httpx's own status error message embeds the authenticated URL
            raise NetworkError(
                f"{operation}: HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response

    def get(self, operation: str, query: QueryLike = None) -> Any:
        """Call a JSON operation and return the envelope payload.

        Args:
            operation: API operation name (e.g., "getArtist")
            query: Query builder or built pairs

        Returns:
            Inner payload value, or None for an empty-but-successful reply

        Raises:
            NetworkError: Connection, timeout or HTTP status failure
            DecodeError: Body is not a JSON object
            MalformedEnvelopeError: Envelope wrapper or status is malformed
            ServerError: Server reported a failure (subclass per error code)
        """
        response = self._send(operation, query)

        try:
            document = response.json()
        except ValueError as e:
            raise DecodeError(f"{operation}: response is not valid JSON") from e

        if not isinstance(document, dict):
            raise DecodeError(f"{operation}: expected a JSON object, got {type(document).__name__}")

        return unwrap(decode_envelope(document))

    def get_raw(self, operation: str, query: QueryLike = None) -> bytes:
        """Call an operation and return the undecoded response body.

        Used for binary or text payloads (cover art, HLS playlists). The
        caller interprets the content type.

        Raises:
            NetworkError: Connection, timeout or HTTP status failure
        """
        response = self._send(operation, query)
        logger.debug(f"Received {len(response.content)} bytes from {operation}")
        return response.content

    def ping(self) -> bool:
        """Test server connectivity and authentication.

        Returns:
            True if the server answered with a success envelope

        Raises:
            AuthenticationError: If credentials are invalid
            NetworkError: For network/HTTP errors
        """
        self.get("ping")
        logger.info("Subsonic ping successful")
        return True

    def close(self):
        """Close the underlying HTTP client and release connections."""
        self.client.close()
        logger.info("Closed Subsonic client")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
