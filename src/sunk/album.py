"""Album entity and album retrieval."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .media import CoverArtMixin
from .query import Query
from .song import Song
from .wire import WireShape, parse_id, parse_optional_id, wire_field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawAlbum(WireShape):
    """Album as sent by getAlbum, getArtist and search3."""

    id: str
    name: str
    song_count: int
    duration: int
    artist: Optional[str] = None
    artist_id: Optional[str] = None
    cover_art: Optional[str] = None
    play_count: Optional[int] = None
    year: Optional[int] = None
    genre: Optional[str] = None
    created: Optional[str] = None
    song: List[Dict[str, Any]] = wire_field(default_factory=list)


@dataclass(frozen=True)
class Album(CoverArtMixin):
    """Album metadata with the songs the server chose to embed.

    Attributes:
        id: Album id
        name: Album name
        song_count: Number of songs the album has on the server
        duration: Total duration in seconds
        embedded_songs: Songs included inline; may be empty even when
            song_count is not, use songs() for the full list
    """

    id: int
    name: str
    song_count: int
    duration: int
    artist: Optional[str] = None
    artist_id: Optional[int] = None
    cover_id: Optional[str] = None
    play_count: Optional[int] = None
    year: Optional[int] = None
    genre: Optional[str] = None
    created: Optional[str] = None
    embedded_songs: Tuple[Song, ...] = field(default=(), repr=False)

    @classmethod
    def from_wire(cls, raw: RawAlbum) -> "Album":
        return cls(
            id=parse_id("id", raw.id),
            name=raw.name,
            song_count=raw.song_count,
            duration=raw.duration,
            artist=raw.artist,
            artist_id=parse_optional_id("artistId", raw.artist_id),
            cover_id=raw.cover_art,
            play_count=raw.play_count,
            year=raw.year,
            genre=raw.genre,
            created=raw.created,
            embedded_songs=tuple(Song.from_payload(song) for song in raw.song),
        )

    @classmethod
    def from_payload(cls, payload: Any) -> "Album":
        return cls.from_wire(RawAlbum.from_payload(payload))

    def songs(self, client) -> List[Song]:
        """Return every song on the album.

        The embedded songs are returned as-is when their number matches
        song_count; otherwise the album is fetched again.
        """
        if len(self.embedded_songs) == self.song_count:
            return list(self.embedded_songs)

        logger.debug(
            f"Album {self.id} embeds {len(self.embedded_songs)} of {self.song_count} songs, refetching"
        )
        return list(get_album(client, self.id).embedded_songs)


def get_album(client, album_id: int) -> Album:
    """Fetch an album with all of its songs.

    Raises:
        NotFoundError: If album_id does not exist
        InvalidFieldError: If the payload does not match the album schema
    """
    payload = client.get("getAlbum", Query.with_arg("id", album_id))
    album = Album.from_payload(payload)
    logger.info(f"Retrieved album {album_id} with {len(album.embedded_songs)} songs")
    return album
