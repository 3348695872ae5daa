"""Artist entity, artist info and artist retrieval."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .album import Album
from .media import CoverArtMixin
from .query import Query
from .wire import WireShape, parse_id, payload_list, wire_field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawArtist(WireShape):
    """Artist as sent by getArtist, getArtists and search3."""

    id: str
    name: str
    album_count: int
    cover_art: Optional[str] = None
    album: List[Dict[str, Any]] = wire_field(default_factory=list)


@dataclass(frozen=True)
class RawSimilarArtist(WireShape):
    id: str
    name: str


@dataclass(frozen=True)
class RawArtistInfo(WireShape):
    """Artist info as sent by getArtistInfo."""

    biography: Optional[str] = None
    music_brainz_id: Optional[str] = None
    last_fm_url: Optional[str] = None
    small_image_url: Optional[str] = None
    medium_image_url: Optional[str] = None
    large_image_url: Optional[str] = None
    similar_artist: List[Dict[str, Any]] = wire_field(default_factory=list)


@dataclass(frozen=True)
class ArtistInfo:
    """Biography, external links and similar artists for an artist.

    Attributes:
        image_urls: (small, medium, large) image URLs
        similar_artists: (id, name) pairs of related artists
    """

    biography: Optional[str] = None
    musicbrainz_id: Optional[str] = None
    lastfm_url: Optional[str] = None
    image_urls: Tuple[Optional[str], Optional[str], Optional[str]] = (None, None, None)
    similar_artists: Tuple[Tuple[int, str], ...] = ()

    @classmethod
    def from_wire(cls, raw: RawArtistInfo) -> "ArtistInfo":
        similar = []
        for entry in raw.similar_artist:
            similar_raw = RawSimilarArtist.from_payload(entry)
            similar.append((parse_id("similarArtist.id", similar_raw.id), similar_raw.name))

        return cls(
            biography=raw.biography,
            musicbrainz_id=raw.music_brainz_id,
            lastfm_url=raw.last_fm_url,
            image_urls=(raw.small_image_url, raw.medium_image_url, raw.large_image_url),
            similar_artists=tuple(similar),
        )


@dataclass(frozen=True)
class Artist(CoverArtMixin):
    """Artist metadata with the albums the server chose to embed.

    Attributes:
        id: Artist id
        name: Artist name
        album_count: Number of albums the artist has on the server
        embedded_albums: Albums included inline; listings such as getArtists
            leave this empty, use albums() for the full list
    """

    id: int
    name: str
    album_count: int
    cover_id: Optional[str] = None
    embedded_albums: Tuple[Album, ...] = field(default=(), repr=False)

    @classmethod
    def from_wire(cls, raw: RawArtist) -> "Artist":
        return cls(
            id=parse_id("id", raw.id),
            name=raw.name,
            album_count=raw.album_count,
            cover_id=raw.cover_art,
            embedded_albums=tuple(Album.from_payload(album) for album in raw.album),
        )

    @classmethod
    def from_payload(cls, payload: Any) -> "Artist":
        return cls.from_wire(RawArtist.from_payload(payload))

    def albums(self, client) -> List[Album]:
        """Return every album by this artist.

        The embedded albums are returned without a request when their number
        matches album_count; otherwise the artist is fetched again.
        """
        if len(self.embedded_albums) == self.album_count:
            return list(self.embedded_albums)

        logger.debug(
            f"Artist {self.id} embeds {len(self.embedded_albums)} of {self.album_count} albums, refetching"
        )
        return list(get_artist(client, self.id).embedded_albums)

    def info(
        self,
        client,
        count: Optional[int] = None,
        include_not_present: Optional[bool] = None,
    ) -> ArtistInfo:
        """Fetch biography, links and similar artists.

        Args:
            client: Transport client
            count: Maximum number of similar artists to return
            include_not_present: Include similar artists absent from the library

        Raises:
            InvalidIdError: If any similar artist has a non-numeric id
        """
        query = (
            Query.with_arg("id", self.id)
            .maybe_arg("count", count)
            .maybe_arg("includeNotPresent", include_not_present)
        )
        payload = client.get("getArtistInfo", query)
        return ArtistInfo.from_wire(RawArtistInfo.from_payload(payload))


def get_artist(client, artist_id: int) -> Artist:
    """Fetch an artist together with all of its albums.

    Raises:
        NotFoundError: If artist_id does not exist
        InvalidFieldError: If the payload does not match the artist schema
    """
    payload = client.get("getArtist", Query.with_arg("id", artist_id))
    artist = Artist.from_payload(payload)
    logger.info(f"Retrieved artist {artist_id}: {artist.name}")
    return artist


def get_artists(client, folder_id: Optional[int] = None) -> List[Artist]:
    """Fetch all artists, flattened from the server's alphabetical index.

    Args:
        client: Transport client
        folder_id: Only artists in this music folder
    """
    payload = client.get("getArtists", Query().maybe_arg("musicFolderId", folder_id))

    artists = []
    for index in payload_list(payload, "index"):
        artists.extend(Artist.from_payload(entry) for entry in payload_list(index, "artist"))

    logger.info(f"Retrieved {len(artists)} artists")
    return artists
