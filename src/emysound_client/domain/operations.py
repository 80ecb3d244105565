"""
EmySound insert and query operations.

Each call is one self-contained request/response exchange over an injected
transport. Nothing is retried; every failure is raised to the caller.
"""

from typing import Dict, List, Optional

from loguru import logger

from .exceptions import InvalidArgumentError, ServiceRejectedError
from .identity import IdentityPolicy, TrackIdentity
from .media import MediaSource, resolve_media
from .models import QueryResult, decode_query_results
from .transport import OCTET_STREAM, Transport

TRACKS_ENDPOINT = "Tracks"
QUERY_ENDPOINT = "Query"

MEDIA_TYPE = "Audio"

# Threshold query parameter sent to the Query endpoint. minCoverage is not sent.
MIN_CONFIDENCE_PARAM = "minConfidence"


def insert(
    transport: Transport,
    source: MediaSource,
    artist: str,
    title: str,
    extra: Optional[str] = None,
    policy: IdentityPolicy = IdentityPolicy(),
) -> TrackIdentity:
    """Register a track with the service.

    Args:
        transport: Transport to send the request with
        source: File or in-memory media to upload
        artist: Track artist
        title: Track title
        extra: Extra metadata folded into metadata-derived ids
        policy: Active identity policy

    Returns:
        The identity the track was registered under

    Raises:
        InvalidPathError, MediaReadError: Source can't be resolved
        TransportError: Network-level failure
        ServiceRejectedError: Service answered with a non-200 status
    """
    logger.debug(f"insert: source={source!r:.120}, artist={artist}, title={title}")

    file_name, content = resolve_media(source)

    identity = policy.assign(artist, title, extra)
    logger.debug(f"Track id: {identity.value} (scheme={identity.scheme.value})")

    data = {
        "Id": identity.value,
        "Artist": artist,
        "Title": title,
        "MediaType": MEDIA_TYPE,
    }
    files = {"file": (file_name, content, OCTET_STREAM)}

    response = transport.post_multipart(TRACKS_ENDPOINT, files=files, data=data)

    if not response.ok:
        logger.error(f"Failed to insert track {response.status} {response.text}")
        raise ServiceRejectedError(response.status, response.text)

    logger.info(f"Inserted track {identity.value} ({artist} - {title})")
    return identity


def validate_min_confidence(min_confidence: float) -> float:
    """Return min_confidence as float if it lies in [0, 1].

    Raises:
        InvalidArgumentError: Not a number, NaN, or outside [0, 1]
    """
    if isinstance(min_confidence, bool) or not isinstance(min_confidence, (int, float)):
        raise InvalidArgumentError(
            f"min_confidence must be a number, got {min_confidence!r}"
        )
    value = float(min_confidence)
    if not 0.0 <= value <= 1.0:
        raise InvalidArgumentError(
            f"min_confidence must be within [0, 1], got {min_confidence!r}"
        )
    return value


def query_params(min_confidence: float) -> Dict[str, str]:
    return {
        "mediaType": MEDIA_TYPE,
        MIN_CONFIDENCE_PARAM: str(min_confidence),
        "registerMatches": "true",
    }


def query(
    transport: Transport,
    source: MediaSource,
    min_confidence: float,
) -> List[QueryResult]:
    """Look up tracks similar to the given media.

    An empty list is a successful "no match" outcome.

    Raises:
        InvalidArgumentError: min_confidence outside [0, 1]
        InvalidPathError, MediaReadError: Source can't be resolved
        TransportError: Network-level failure
        ServiceRejectedError: Service answered with a non-200 status
        DecodeError: 200 response body is not a list of query results
    """
    threshold = validate_min_confidence(min_confidence)
    logger.debug(f"query: source={source!r:.120}, min_confidence={threshold}")

    file_name, content = resolve_media(source)
    files = {"file": (file_name, content, OCTET_STREAM)}

    response = transport.post_multipart(
        QUERY_ENDPOINT, files=files, params=query_params(threshold)
    )

    if not response.ok:
        logger.error(f"Failed to query track {response.status} {response.text}")
        raise ServiceRejectedError(response.status, response.text)

    results = decode_query_results(response.text)
    logger.info(f"Query for {file_name} returned {len(results)} results")
    return results
