"""Connection configuration and authentication models."""

import os
import warnings
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional


@dataclass(frozen=True)
class SunkConfig:
    """Configuration for connecting to a Subsonic-compatible server.

    Attributes:
        url: Base server URL (e.g., "https://music.example.com")
        username: Subsonic username
        password: Subsonic password (hashed before transmission)
        api_key: Optional API key for OpenSubsonic servers (alternative to password)
        client_name: Client identifier sent with every request
        api_version: Subsonic API version sent with every request
        timeout: Read timeout in seconds for a single request
    """

    url: str
    username: str
    password: Optional[str] = field(default=None, repr=False)
    api_key: Optional[str] = field(default=None, repr=False)
    client_name: str = "sunk"
    api_version: str = "1.16.1"
    timeout: float = 60.0

    def __post_init__(self):
        """Validate configuration on initialization.

        The URL itself is checked when a request URL is built, so a bad URL
        surfaces as UrlConstructionError from the client.
        """
        if not self.username:
            raise ValueError("username is required")

        # Either password or API key must be provided
        if not self.password and not self.api_key:
            raise ValueError("Either password or api_key must be provided")

        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

        if self.url.startswith("http://"):
            warnings.warn(
                "Using HTTP instead of HTTPS for Subsonic connection. "
                "Credentials will be transmitted insecurely.",
                UserWarning,
                stacklevel=3,
            )

    @classmethod
    def from_environment(cls) -> "SunkConfig":
        """Load configuration from SUNK_* environment variables.

        Returns:
            SunkConfig: Loaded configuration object

        Raises:
            EnvironmentError: If required environment variables are missing
        """
        required = {
            "SUNK_URL": os.getenv("SUNK_URL"),
            "SUNK_USERNAME": os.getenv("SUNK_USERNAME"),
        }
        password = os.getenv("SUNK_PASSWORD")
        api_key = os.getenv("SUNK_API_KEY")

        missing = [var for var, value in required.items() if not value]
        if not password and not api_key:
            missing.append("SUNK_PASSWORD (or SUNK_API_KEY)")

        if missing:
            raise EnvironmentError(
                f"Required environment variables missing: {', '.join(missing)}\n"
                f"Example: export SUNK_URL='https://your-server.com'"
            )

        return cls(
            url=required["SUNK_URL"],
            username=required["SUNK_USERNAME"],
            password=password,
            api_key=api_key,
            client_name=os.getenv("SUNK_CLIENT_NAME", "sunk"),
            api_version=os.getenv("SUNK_API_VERSION", "1.16.1"),
            timeout=float(os.getenv("SUNK_TIMEOUT", "60")),
        )


@dataclass(frozen=True)
class AuthToken:
    """Authentication token for Subsonic API using MD5 salt+hash method.

    Attributes:
        token: MD5(password + salt)
        salt: Random salt string
        username: Username for this token
        created_at: Token creation timestamp
    """

    token: str
    salt: str
    username: str
    created_at: datetime

    def to_auth_params(self) -> Dict[str, str]:
        """Convert to authentication query parameters.

        Returns:
            Dict with u (username), t (token), s (salt)
        """
        return {"u": self.username, "t": self.token, "s": self.salt}

    def __repr__(self) -> str:
        return f"AuthToken(username={self.username!r}, created_at={self.created_at!r})"
