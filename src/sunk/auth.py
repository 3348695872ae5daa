"""Subsonic API authentication implementation.

This module implements token-based authentication for Subsonic-compatible APIs
using the MD5 salt+hash method described in the Subsonic API documentation.

Authentication Flow:
    1. Generate cryptographically secure random salt (16 hex characters)
    2. Concatenate password + salt
    3. Calculate MD5 hash of concatenated string
    4. Send token (MD5 hash), salt, and username with every request

Example:
    >>> from sunk.models import SunkConfig
    >>> from sunk.auth import create_auth_params, generate_token
    >>>
    >>> config = SunkConfig(
    ...     url="https://music.example.com",
    ...     username="admin",
    ...     password="sesame"
    ... )
    >>> create_auth_params(config, generate_token(config))
    {'u': 'admin', 't': '26719a...', 's': 'c19b2d...', 'v': '1.16.1', 'c': 'sunk', 'f': 'json'}

Security Notes:
    - Plaintext passwords are never sent over the network
    - MD5 is used because the protocol mandates it, not for cryptographic strength
    - Auth parameters must never be written to logs
"""

import hashlib
import secrets
from datetime import datetime, timezone
from typing import Dict, Optional

from .models import AuthToken, SunkConfig


def generate_token(config: SunkConfig, salt: Optional[str] = None) -> Optional[AuthToken]:
    """Generate Subsonic authentication token using MD5 salt+hash method.

    Args:
        config: Configuration containing username and password or API key
        salt: Optional pre-generated salt. If None, generates a new 16 hex char salt.
              Primarily for testing purposes.

    Returns:
        AuthToken with token, salt, username and creation timestamp,
        or None if the configuration uses API key authentication (OpenSubsonic)

    Example:
        >>> token = generate_token(config, salt="c19b2d")
        >>> token.token
        '26719a1196d2a940705a59634eb18eab'
    """
    if config.api_key:
        return None

    # secrets.token_hex(8) produces 16 hex characters
    if salt is None:
        salt = secrets.token_hex(8)

    token = hashlib.md5(f"{config.password}{salt}".encode("utf-8")).hexdigest()

    return AuthToken(
        token=token,
        salt=salt,
        username=config.username,
        created_at=datetime.now(timezone.utc),
    )


def create_auth_params(
    config: SunkConfig,
    auth_token: Optional[AuthToken],
    response_format: str = "json",
) -> Dict[str, str]:
    """Create the authentication query parameters appended to every request.

    Args:
        config: Configuration supplying username, API key, version and client name
        auth_token: Token from generate_token(), or None for API key authentication
        response_format: Response format requested from the server

    Returns:
        Ordered dictionary of query parameters:
            - u, t, s: username, token, salt (token auth), or
            - apiKey: API key (OpenSubsonic, sent without a username)
            - v: API version
            - c: client name
            - f: response format
    """
    if auth_token is not None:
        params = auth_token.to_auth_params()
    else:
        params = {"apiKey": config.api_key}

    return {
        **params,
        "v": config.api_version,
        "c": config.client_name,
        "f": response_format,
    }
