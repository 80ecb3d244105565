"""
Query result data model.

Typed, read-only projection of the JSON array returned by the Query endpoint.
Field names on the wire are lower-camel-case; durations are in seconds.
"""

import math
from typing import List, Optional, Sequence, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    model_validator,
)
from pydantic.alias_generators import to_camel

from .exceptions import DecodeError

# Tolerance for lengthInSeconds vs (end - start); the service computes in float32.
GAP_LENGTH_TOLERANCE = 1e-3


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Gap(_WireModel):
    """Sub-interval not covered by the match."""

    start: float = Field(ge=0)
    end: float = Field(ge=0)
    # True when the gap touches the very beginning or end of its side
    is_on_edge: bool
    length_in_seconds: float = Field(ge=0)

    @model_validator(mode="after")
    def _check_interval(self) -> "Gap":
        if not self.start < self.end:
            raise ValueError(f"gap start {self.start} must be before end {self.end}")
        expected = self.end - self.start
        if not math.isclose(
            self.length_in_seconds, expected, abs_tol=GAP_LENGTH_TOLERANCE
        ):
            raise ValueError(
                f"gap lengthInSeconds {self.length_in_seconds} != end - start {expected}"
            )
        return self

    @property
    def is_interior(self) -> bool:
        return not self.is_on_edge


class AudioCoverage(_WireModel):
    """Alignment detail between the submitted query and the matched track."""

    query_match_starts_at: float = Field(ge=0)
    track_match_starts_at: float = Field(ge=0)
    # QueryCoverageLength / QueryLength, absent when it can't be computed
    query_coverage: Optional[float] = Field(default=None, ge=0, le=1)
    # TrackCoverageLength / TrackLength
    track_coverage: Optional[float] = Field(default=None, ge=0, le=1)
    query_coverage_length: float = Field(ge=0)
    track_coverage_length: float = Field(ge=0)
    # Coverage length plus the gaps inside it
    query_discrete_coverage_length: float = Field(ge=0)
    track_discrete_coverage_length: float = Field(ge=0)
    query_length: float = Field(ge=0)
    track_length: float = Field(ge=0)
    query_gaps: Tuple[Gap, ...]
    track_gaps: Tuple[Gap, ...]

    @property
    def interior_query_gaps(self) -> Tuple[Gap, ...]:
        return tuple(g for g in self.query_gaps if g.is_interior)

    @property
    def interior_track_gaps(self) -> Tuple[Gap, ...]:
        return tuple(g for g in self.track_gaps if g.is_interior)


class AudioMatch(_WireModel):
    id: str = Field(alias="queryMatchId")
    coverage: AudioCoverage


class TrackInfo(_WireModel):
    """Metadata of the matched reference track."""

    id: str
    title: Optional[str] = None
    artist: Optional[str] = None
    length_seconds: float = Field(alias="audioTrackLength", ge=0)


class QueryResult(_WireModel):
    """One candidate match returned by the service.

    `audio` is None when the service identified the track but could not
    compute a scored alignment.
    """

    # Query match id, also usable against the service's Matches endpoint
    id: str
    track: TrackInfo
    audio: Optional[AudioMatch] = None

    @property
    def query_coverage(self) -> Optional[float]:
        if self.audio is None:
            return None
        return self.audio.coverage.query_coverage

    @property
    def track_coverage(self) -> Optional[float]:
        if self.audio is None:
            return None
        return self.audio.coverage.track_coverage


_RESULTS_ADAPTER = TypeAdapter(List[QueryResult])


def decode_query_results(body: str) -> List[QueryResult]:
    """Decode a Query response body.

    Raises:
        DecodeError: Body is not valid JSON or not an array of query results
    """
    try:
        return _RESULTS_ADAPTER.validate_json(body)
    except ValidationError as e:
        raise DecodeError(f"Decode response body failed: {e}") from e


def sort_by_query_coverage(results: Sequence[QueryResult]) -> List[QueryResult]:
    """Best query coverage first; results without coverage last (stable)."""
    return sorted(
        results,
        key=lambda r: (r.query_coverage is None, -(r.query_coverage or 0.0)),
    )
