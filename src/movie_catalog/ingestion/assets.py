"""
Thumbnail retrieval.

Downloads a movie's thumbnail into asset storage and returns the public URL
it will be served under. The download is complete, flushed and closed before
the URL is returned, so a movie row never references a file still being
written. An existing asset is never overwritten: a name already taken by
another movie's image gets a numbered suffix.
"""

import logging
import posixpath
import re
from typing import NamedTuple, Optional
from urllib.parse import unquote, urlparse

from movie_catalog.logger import log_function
from movie_catalog.storage import BaseStorage
from .client import RemoteSourceClient
from .errors import FetchError


logger = logging.getLogger("ingestion")


class StoredAsset(NamedTuple):
    filename: str
    url: str


def derive_filename(url: str) -> str:
    """
    Derive a local filename from the final path segment of url.

    Query strings and fragments are ignored; characters other than letters,
    digits, dot, dash and underscore are replaced with an underscore.

    Raises:
        FetchError: If the URL is malformed or has no usable final path segment
    """
    try:
        path = urlparse(url).path
    except ValueError as e:
        raise FetchError(url, f"invalid URL: {e}") from e
    segment = posixpath.basename(unquote(path))
    safe = re.sub(r"[^A-Za-z0-9._-]", "_", segment).strip("._")
    if not safe:
        raise FetchError(url, "cannot derive a filename from the URL path")
    return safe


def public_url(base_url: str, filename: str) -> str:
    return f"{base_url.rstrip('/')}/{filename}"


@log_function(logger_name="ingestion", log_execution_time=True)
def fetch_thumbnail(
    client: RemoteSourceClient,
    storage: BaseStorage,
    thumbnail_url: Optional[str],
    public_base_url: str,
) -> Optional[StoredAsset]:
    """
    Download a thumbnail into asset storage.

    Args:
        client: Remote source client used for the download
        storage: Asset storage receiving the bytes
        thumbnail_url: Remote image URL; None means the item has no thumbnail
        public_base_url: Base URL the asset storage is served under

    Returns:
        The stored filename and its public URL, or None when thumbnail_url is None

    Raises:
        FetchError: If the download fails; nothing is left in storage
    """
    if not thumbnail_url:
        return None

    filename = storage.available_name(derive_filename(thumbnail_url))
    size = 0
    try:
        with storage.open_write(filename) as sink:
            for chunk in client.stream(thumbnail_url):
                sink.write(chunk)
                size += len(chunk)
    except (OSError, RuntimeError) as e:
        raise FetchError(thumbnail_url, f"could not store {filename}: {e}") from e

    logger.info(f"Stored thumbnail {filename} ({size:,} bytes)")
    return StoredAsset(filename, public_url(public_base_url, filename))
