"""ID3 search across artists, albums and songs."""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .album import Album
from .artist import Artist
from .query import Query, SearchPage
from .song import Song
from .wire import payload_list

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    """Matches returned by search3, grouped by entity type."""

    artists: Tuple[Artist, ...] = ()
    albums: Tuple[Album, ...] = ()
    songs: Tuple[Song, ...] = ()


def search(
    client,
    query: str,
    artist_page: SearchPage = SearchPage(),
    album_page: SearchPage = SearchPage(),
    song_page: SearchPage = SearchPage(),
    folder_id: Optional[int] = None,
) -> SearchResult:
    """Search artists, albums and songs by name.

    Args:
        client: Transport client
        query: Search text
        artist_page: Window of artist matches to return
        album_page: Window of album matches to return
        song_page: Window of song matches to return
        folder_id: Only search this music folder

    Returns:
        SearchResult with one tuple per entity type

    Example:
        >>> result = search(client, "bellevue", song_page=SearchPage(count=5))
        >>> [song.title for song in result.songs]
        ['Bellevue Avenue']
    """
    args = Query.with_arg("query", query)
    artist_page.apply(args, "artist")
    album_page.apply(args, "album")
    song_page.apply(args, "song")
    args.maybe_arg("musicFolderId", folder_id)

    payload = client.get("search3", args)
    result = SearchResult(
        artists=tuple(Artist.from_payload(entry) for entry in payload_list(payload, "artist")),
        albums=tuple(Album.from_payload(entry) for entry in payload_list(payload, "album")),
        songs=tuple(Song.from_payload(entry) for entry in payload_list(payload, "song")),
    )

    logger.info(
        f"Search {query!r}: {len(result.artists)} artists, "
        f"{len(result.albums)} albums, {len(result.songs)} songs"
    )
    return result
