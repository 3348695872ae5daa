"""Song entity, streaming URLs, lyrics and song listings."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Sequence

from .exceptions import DecodeError, InvalidFieldError
from .media import CoverArtMixin
from .query import Query, SearchPage
from .wire import WireShape, parse_id, parse_optional_id, payload_list, wire_field

logger = logging.getLogger(__name__)


class AudioFormat(str, Enum):
    """Audio encoding format.

    Recognises all of Subsonic's default transcoding formats. The wire form
    is the lowercase name.
    """

    AAC = "aac"
    AIF = "aif"
    AIFF = "aiff"
    APE = "ape"
    FLAC = "flac"
    FLV = "flv"
    M4A = "m4a"
    MP3 = "mp3"
    MPC = "mpc"
    OGA = "oga"
    OGG = "ogg"
    OGX = "ogx"
    OPUS = "opus"
    SHN = "shn"
    WAV = "wav"
    WMA = "wma"
    RAW = "raw"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, field: str, value: str) -> "AudioFormat":
        """Validate a wire value against the known formats.

        Raises:
            InvalidFieldError: If value is not one of the formats
        """
        try:
            return cls(value)
        except ValueError:
            raise InvalidFieldError(field, value, reason="unknown audio format") from None


@dataclass(frozen=True)
class RawSong(WireShape):
    """Song ("child") as sent by getSong, getAlbum and the song listings."""

    id: str
    parent: str
    is_dir: bool
    title: str
    size: int
    content_type: str
    suffix: str
    duration: int
    bit_rate: int
    path: str
    created: str
    media_type: str = wire_field(key="type")
    album: Optional[str] = None
    artist: Optional[str] = None
    track: Optional[int] = None
    year: Optional[int] = None
    genre: Optional[str] = None
    cover_art: Optional[str] = None
    transcoded_suffix: Optional[str] = None
    is_video: Optional[bool] = None
    play_count: Optional[int] = None
    disc_number: Optional[int] = None
    average_rating: Optional[float] = None
    starred: Optional[str] = None
    album_id: Optional[str] = None
    artist_id: Optional[str] = None


@dataclass(frozen=True)
class Song(CoverArtMixin):
    """A single track on the server.

    Attributes:
        id: Song id
        title: Song title
        size: File size in bytes
        duration: Duration in seconds
        bit_rate: Bitrate in kbps
        transcoded_format: Format the server transcodes this song to, if any
        media_type: Content type ("music", "podcast", "audiobook", ...)
    """

    id: int
    title: str
    size: int
    content_type: str
    suffix: str
    duration: int
    bit_rate: int
    path: str
    media_type: str
    album: Optional[str] = None
    album_id: Optional[int] = None
    artist: Optional[str] = None
    artist_id: Optional[int] = None
    track: Optional[int] = None
    year: Optional[int] = None
    genre: Optional[str] = None
    cover_id: Optional[str] = None
    transcoded_format: Optional[AudioFormat] = None
    disc_number: Optional[int] = None
    play_count: Optional[int] = None
    average_rating: Optional[float] = None
    starred: Optional[str] = None
    created: Optional[str] = None

    @classmethod
    def from_wire(cls, raw: RawSong) -> "Song":
        transcoded = raw.transcoded_suffix
        return cls(
            id=parse_id("id", raw.id),
            title=raw.title,
            size=raw.size,
            content_type=raw.content_type,
            suffix=raw.suffix,
            duration=raw.duration,
            bit_rate=raw.bit_rate,
            path=raw.path,
            media_type=raw.media_type,
            album=raw.album,
            album_id=parse_optional_id("albumId", raw.album_id),
            artist=raw.artist,
            artist_id=parse_optional_id("artistId", raw.artist_id),
            track=raw.track,
            year=raw.year,
            genre=raw.genre,
            cover_id=raw.cover_art,
            transcoded_format=(
                AudioFormat.parse("transcodedSuffix", transcoded) if transcoded is not None else None
            ),
            disc_number=raw.disc_number,
            play_count=raw.play_count,
            average_rating=raw.average_rating,
            starred=raw.starred,
            created=raw.created,
        )

    @classmethod
    def from_payload(cls, payload: Any) -> "Song":
        return cls.from_wire(RawSong.from_payload(payload))

    def stream_url(
        self,
        client,
        bitrate: Optional[int] = None,
        audio_format: Optional[AudioFormat] = None,
    ) -> str:
        """Return a URL for streaming this song.

        The URL is meant to be handed to a player or streaming library as-is.
        Omitted bitrate and format are left to the server's defaults.

        Args:
            client: Transport client
            bitrate: Maximum bitrate in kbps (server transcodes if lower)
            audio_format: Target transcoding format
        """
        query = (
            Query.with_arg("id", self.id)
            .maybe_arg("maxBitRate", bitrate)
            .maybe_arg("format", audio_format)
        )
        return client.build_url("stream", query)

    def download_url(self, client) -> str:
        """Return a URL for downloading the original file.

        Unlike stream_url(), downloads are never transcoded.
        """
        return client.build_url("download", Query.with_arg("id", self.id))

    def hls(self, client, bitrates: Optional[Sequence[int]] = None) -> str:
        """Fetch an HLS (HTTP Live Streaming) playlist for this song.

        Passing several bitrates produces an adaptive playlist with one
        variant per bitrate.

        Returns:
            M3U8 playlist text (content type "application/vnd.apple.mpegurl")

        Raises:
            DecodeError: If the playlist body is not valid UTF-8
        """
        query = Query.with_arg("id", self.id).maybe_arg_list("bitRate", bitrates)
        body = client.get_raw("hls.m3u8", query)
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError("hls.m3u8: playlist is not valid UTF-8") from e


@dataclass(frozen=True)
class RawLyrics(WireShape):
    value: Optional[str] = None
    artist: Optional[str] = None
    title: Optional[str] = None


@dataclass(frozen=True)
class Lyrics:
    """Lyric text for a song."""

    value: str
    artist: Optional[str] = None
    title: Optional[str] = None


def get_song(client, song_id: int) -> Song:
    """Fetch a single song by id.

    Raises:
        NotFoundError: If song_id does not exist
        InvalidFieldError: If the payload does not match the song schema
    """
    payload = client.get("getSong", Query.with_arg("id", song_id))
    return Song.from_payload(payload)


def _songs(payload: Any) -> List[Song]:
    return [Song.from_payload(song) for song in payload_list(payload, "song")]


def get_random_songs(
    client,
    size: Optional[int] = None,
    genre: Optional[str] = None,
    from_year: Optional[int] = None,
    to_year: Optional[int] = None,
    folder_id: Optional[int] = None,
) -> List[Song]:
    """Fetch random songs, optionally filtered.

    Args:
        client: Transport client
        size: Number of songs to return (default: 10)
        genre: Only songs in this genre
        from_year: Only songs released in or after this year
        to_year: Only songs released in or before this year
        folder_id: Only songs in this music folder
    """
    query = (
        Query.with_arg("size", size if size is not None else 10)
        .maybe_arg("genre", genre)
        .maybe_arg("fromYear", from_year)
        .maybe_arg("toYear", to_year)
        .maybe_arg("musicFolderId", folder_id)
    )
    songs = _songs(client.get("getRandomSongs", query))
    logger.info(f"Retrieved {len(songs)} random songs")
    return songs


def get_songs_in_genre(
    client,
    genre: str,
    page: SearchPage = SearchPage(),
    folder_id: Optional[int] = None,
) -> List[Song]:
    """Fetch one page of the songs in a genre."""
    query = page.apply(Query.with_arg("genre", genre)).maybe_arg("musicFolderId", folder_id)
    songs = _songs(client.get("getSongsByGenre", query))
    logger.info(f"Retrieved {len(songs)} songs in genre {genre!r}")
    return songs


def get_lyrics(client, artist: Optional[str] = None, title: Optional[str] = None) -> Optional[Lyrics]:
    """Search for lyrics matching the artist and title.

    Returns:
        Lyrics, or None if the server has no lyric text for the song
    """
    query = Query().maybe_arg("artist", artist).maybe_arg("title", title)
    payload = client.get("getLyrics", query)

    raw = RawLyrics.from_payload(payload if payload is not None else {})
    if raw.value is None:
        logger.debug(f"No lyrics found for {artist!r} - {title!r}")
        return None
    return Lyrics(value=raw.value, artist=raw.artist, title=raw.title)
