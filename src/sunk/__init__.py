"""Typed client library for Subsonic-compatible media servers."""

__version__ = "0.1.0"

from .album import Album, get_album
from .artist import Artist, ArtistInfo, get_artist, get_artists
from .auth import create_auth_params, generate_token
from .client import Client
from .envelope import Failure, Success, decode_envelope, unwrap
from .exceptions import (
    AuthenticationError,
    AuthorizationError,
    ClientVersionTooOldError,
    DecodeError,
    InvalidFieldError,
    InvalidIdError,
    MalformedEnvelopeError,
    NetworkError,
    NotFoundError,
    ParameterError,
    ServerError,
    ServerVersionTooOldError,
    SunkError,
    TokenAuthenticationNotSupportedError,
    TrialError,
    UrlConstructionError,
    VersionError,
)
from .media import get_cover_art
from .models import AuthToken, SunkConfig
from .query import Query, SearchPage
from .search import SearchResult, search
from .song import (
    AudioFormat,
    Lyrics,
    Song,
    get_lyrics,
    get_random_songs,
    get_song,
    get_songs_in_genre,
)

__all__ = [
    # Client
    "Client",
    "SunkConfig",
    "AuthToken",
    "Query",
    "SearchPage",
    # Envelope
    "Success",
    "Failure",
    "decode_envelope",
    "unwrap",
    # Entities
    "Artist",
    "ArtistInfo",
    "Album",
    "Song",
    "Lyrics",
    "AudioFormat",
    "SearchResult",
    # Operations
    "get_artist",
    "get_artists",
    "get_album",
    "get_song",
    "get_random_songs",
    "get_songs_in_genre",
    "get_lyrics",
    "get_cover_art",
    "search",
    # Authentication
    "generate_token",
    "create_auth_params",
    # Exceptions
    "SunkError",
    "NetworkError",
    "DecodeError",
    "MalformedEnvelopeError",
    "UrlConstructionError",
    "InvalidFieldError",
    "InvalidIdError",
    "ServerError",
    "ParameterError",
    "VersionError",
    "AuthenticationError",
    "TokenAuthenticationNotSupportedError",
    "ClientVersionTooOldError",
    "ServerVersionTooOldError",
    "AuthorizationError",
    "TrialError",
    "NotFoundError",
]
