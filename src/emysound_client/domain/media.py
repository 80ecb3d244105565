"""
Media sources for submission.

A media source is either a file on disk or an in-memory buffer with an
explicit name. Both resolve to a display name plus the full byte payload.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union

from loguru import logger

from .exceptions import InvalidPathError, MediaReadError


@dataclass(frozen=True)
class FromFile:
    """Payload read from disk at submission time."""

    path: Union[str, Path]


@dataclass(frozen=True)
class FromBytes:
    """Payload given directly, with the name to upload it under."""

    name: str
    data: bytes


MediaSource = Union[FromFile, FromBytes]


def file_name(path: Union[str, Path]) -> str:
    """Return the final path segment.

    Raises:
        InvalidPathError: If the path is empty or has no final segment (root, "..")
    """
    if path is None or str(path) == "":
        raise InvalidPathError(path)

    name = Path(path).name
    if not name or name in (".", ".."):
        raise InvalidPathError(path)
    return name


def resolve_media(source: MediaSource) -> Tuple[str, bytes]:
    """Resolve a media source to (display_name, payload).

    The whole file is buffered in memory; no handle outlives the call.

    Raises:
        InvalidPathError: FromFile path has no file name
        MediaReadError: FromFile path can't be read
    """
    if isinstance(source, FromBytes):
        return source.name, bytes(source.data)

    if not isinstance(source, FromFile):
        raise TypeError(f"Unsupported media source: {type(source).__name__}")

    try:
        name = file_name(source.path)
    except InvalidPathError:
        logger.error(f"Can't extract the filename from path={source.path!r}")
        raise

    logger.debug(f"Track filename: {name}")
    logger.debug("Reading track file...")

    try:
        content = Path(source.path).read_bytes()
    except OSError as e:
        logger.error(f"Reading track file failed: {source.path} ({e})")
        raise MediaReadError(f"Reading track file {source.path}: {e}") from e

    logger.debug(f"Read {len(content)} bytes from {name}")
    return name, content
