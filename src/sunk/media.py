"""Cover art retrieval shared by artists, albums and songs."""

import logging
from typing import Optional

from .query import Query

logger = logging.getLogger(__name__)


def get_cover_art(client, cover_id: str, size: Optional[int] = None) -> bytes:
    """Download a cover art image.

    Args:
        client: Transport client
        cover_id: Cover art identifier from entity metadata (e.g. "al-1")
        size: Optional size in pixels; the image is scaled on its longest edge

    Returns:
        Binary image data (usually JPEG or PNG)

    Raises:
        NetworkError: For network/HTTP errors
    """
    query = Query.with_arg("id", cover_id).maybe_arg("size", size)
    data = client.get_raw("getCoverArt", query)
    logger.debug(f"Fetched {len(data)} bytes of cover art {cover_id} (size={size})")
    return data


class CoverArtMixin:
    """Adds cover_art() to entities carrying a ``cover_id`` attribute."""

    cover_id: Optional[str]

    def cover_art(self, client, size: Optional[int] = None) -> Optional[bytes]:
        """Download this entity's cover art, or return None if it has none."""
        if self.cover_id is None:
            return None
        return get_cover_art(client, self.cover_id, size)
