"""EmySound domain - media submission, identity and match results.

This domain handles:
- Media sources (file or in-memory) and their resolution
- Track identity assignment for insertion
- The HTTP transport to the EmySound API
- Insert and query operations
- The query result data model
"""

# Errors
from .exceptions import (
    DecodeError,
    EmySoundError,
    InvalidArgumentError,
    InvalidPathError,
    MediaReadError,
    ServiceRejectedError,
    TransportError,
)

# Media sources
from .media import FromBytes, FromFile, MediaSource, resolve_media

# Identity
from .identity import (
    IdentityPolicy,
    IdentityScheme,
    TrackIdentity,
    metadata_track_id,
    random_track_id,
)

# Match results
from .models import (
    AudioCoverage,
    AudioMatch,
    Gap,
    QueryResult,
    TrackInfo,
    decode_query_results,
    sort_by_query_coverage,
)

# Transport and operations
from .transport import HttpTransport, Transport, TransportResponse
from .operations import insert, query

__all__ = [
    # Errors
    "DecodeError",
    "EmySoundError",
    "InvalidArgumentError",
    "InvalidPathError",
    "MediaReadError",
    "ServiceRejectedError",
    "TransportError",
    # Media
    "FromBytes",
    "FromFile",
    "MediaSource",
    "resolve_media",
    # Identity
    "IdentityPolicy",
    "IdentityScheme",
    "TrackIdentity",
    "metadata_track_id",
    "random_track_id",
    # Models
    "AudioCoverage",
    "AudioMatch",
    "Gap",
    "QueryResult",
    "TrackInfo",
    "decode_query_results",
    "sort_by_query_coverage",
    # Transport / operations
    "HttpTransport",
    "Transport",
    "TransportResponse",
    "insert",
    "query",
]
