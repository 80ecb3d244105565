"""Tests for the query result data model."""

import json

import pytest
from pydantic import ValidationError

from emysound_client.domain.exceptions import DecodeError
from emysound_client.domain.models import (
    AudioCoverage,
    Gap,
    QueryResult,
    decode_query_results,
    sort_by_query_coverage,
)

SAMPLE_RESPONSE = (
    '[{"id":"m1","track":{"id":"t1","title":"X","artist":"Y","audioTrackLength":39.52},'
    '"audio":{"queryMatchId":"q1","coverage":{"queryMatchStartsAt":0,"trackMatchStartsAt":0,'
    '"queryCoverage":0.9,"trackCoverage":0.1,"queryCoverageLength":4.5,"trackCoverageLength":4.5,'
    '"queryDiscreteCoverageLength":4.5,"trackDiscreteCoverageLength":4.5,"queryLength":5.0,'
    '"trackLength":39.5,"queryGaps":[],"trackGaps":[{"start":4.5,"end":39.5,"isOnEdge":true,'
    '"lengthInSeconds":35.0}]}}}]'
)


def _coverage(**overrides) -> dict:
    coverage = {
        "queryMatchStartsAt": 0.0,
        "trackMatchStartsAt": 10.0,
        "queryCoverage": 0.5,
        "trackCoverage": 0.25,
        "queryCoverageLength": 5.0,
        "trackCoverageLength": 5.0,
        "queryDiscreteCoverageLength": 6.0,
        "trackDiscreteCoverageLength": 6.0,
        "queryLength": 10.0,
        "trackLength": 20.0,
        "queryGaps": [],
        "trackGaps": [],
    }
    coverage.update(overrides)
    return coverage


def _result(match_id: str, query_coverage=None, audio: bool = True) -> dict:
    result = {"id": match_id, "track": {"id": f"track-{match_id}", "audioTrackLength": 20.0}}
    if audio:
        result["audio"] = {
            "queryMatchId": f"q-{match_id}",
            "coverage": _coverage(queryCoverage=query_coverage),
        }
    return result


class TestDecodeQueryResults:
    """Tests for decode_query_results."""

    def test_sample_response(self) -> None:
        """The documented sample decodes field by field."""
        results = decode_query_results(SAMPLE_RESPONSE)

        assert len(results) == 1
        result = results[0]
        assert result.id == "m1"
        assert result.track.id == "t1"
        assert result.track.title == "X"
        assert result.track.artist == "Y"
        assert result.track.length_seconds == pytest.approx(39.52)
        assert result.audio is not None
        assert result.audio.id == "q1"

        coverage = result.audio.coverage
        assert coverage.query_coverage == pytest.approx(0.9)
        assert coverage.track_coverage == pytest.approx(0.1)
        assert coverage.track_length == pytest.approx(39.5)
        assert coverage.query_gaps == ()
        assert coverage.track_gaps[0].length_in_seconds == 35.0
        assert coverage.track_gaps[0].is_on_edge is True

    def test_empty_array(self) -> None:
        """An empty array is a valid, empty result."""
        assert decode_query_results("[]") == []

    def test_missing_audio_is_degenerate_match(self) -> None:
        results = decode_query_results(json.dumps([_result("m", audio=False)]))

        assert results[0].audio is None
        assert results[0].query_coverage is None
        assert results[0].track_coverage is None

    def test_optional_track_fields(self) -> None:
        """Title and artist may be missing or null."""
        body = json.dumps(
            [{"id": "m", "track": {"id": "t", "title": None, "audioTrackLength": 1.0}}]
        )
        track = decode_query_results(body)[0].track

        assert track.title is None
        assert track.artist is None

    def test_null_coverage_ratios(self) -> None:
        body = json.dumps(
            [
                {
                    "id": "m",
                    "track": {"id": "t", "audioTrackLength": 1.0},
                    "audio": {
                        "queryMatchId": "q",
                        "coverage": _coverage(queryCoverage=None, trackCoverage=None),
                    },
                }
            ]
        )
        coverage = decode_query_results(body)[0].audio.coverage

        assert coverage.query_coverage is None
        assert coverage.track_coverage is None

    def test_unknown_fields_ignored(self) -> None:
        """Fields the client doesn't model don't break decoding."""
        result = _result("m", query_coverage=0.3)
        result["video"] = None
        result["track"]["mediaType"] = "Audio"

        assert decode_query_results(json.dumps([result]))[0].id == "m"

    @pytest.mark.parametrize(
        "body",
        [
            "not json",
            "",
            '{"id": "m1"}',
            '[{"id": "m1"}]',
            '[{"id": "m1", "track": {"id": "t1"}}]',
            "[1, 2, 3]",
            "null",
        ],
    )
    def test_malformed_body_raises_decode_error(self, body: str) -> None:
        """Anything that isn't an array of results raises DecodeError."""
        with pytest.raises(DecodeError):
            decode_query_results(body)

    def test_decode_error_chains_validation_error(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode_query_results("{}")

        assert isinstance(exc_info.value.__cause__, ValidationError)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"queryCoverage": 1.5},
            {"trackCoverage": -0.1},
            {"queryLength": -1.0},
            {"trackMatchStartsAt": -3.0},
        ],
    )
    def test_out_of_range_values_raise_decode_error(self, overrides: dict) -> None:
        body = json.dumps(
            [
                {
                    "id": "m",
                    "track": {"id": "t", "audioTrackLength": 1.0},
                    "audio": {"queryMatchId": "q", "coverage": _coverage(**overrides)},
                }
            ]
        )
        with pytest.raises(DecodeError):
            decode_query_results(body)


class TestGap:
    """Tests for Gap validation."""

    def test_valid_gap(self) -> None:
        gap = Gap(start=1.0, end=3.5, is_on_edge=False, length_in_seconds=2.5)

        assert gap.is_interior
        assert gap.length_in_seconds == 2.5

    def test_float32_rounding_tolerated(self) -> None:
        """Small float32 rounding differences are accepted."""
        gap = Gap.model_validate(
            {"start": 4.5, "end": 39.52, "isOnEdge": True, "lengthInSeconds": 35.019997}
        )
        assert not gap.is_interior

    def test_start_not_before_end_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Gap(start=3.0, end=3.0, is_on_edge=False, length_in_seconds=0.0)

    def test_length_mismatch_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Gap(start=1.0, end=3.0, is_on_edge=False, length_in_seconds=5.0)

    def test_gap_is_read_only(self) -> None:
        gap = Gap(start=1.0, end=2.0, is_on_edge=True, length_in_seconds=1.0)
        with pytest.raises(ValidationError):
            gap.start = 0.5  # type: ignore


class TestAudioCoverage:
    """Tests for AudioCoverage helpers."""

    def test_interior_gaps(self) -> None:
        coverage = AudioCoverage.model_validate(
            _coverage(
                trackGaps=[
                    {"start": 0.0, "end": 10.0, "isOnEdge": True, "lengthInSeconds": 10.0},
                    {"start": 12.0, "end": 13.0, "isOnEdge": False, "lengthInSeconds": 1.0},
                ],
                queryGaps=[
                    {"start": 2.0, "end": 2.5, "isOnEdge": False, "lengthInSeconds": 0.5},
                ],
            )
        )

        assert [g.start for g in coverage.interior_track_gaps] == [12.0]
        assert [g.start for g in coverage.interior_query_gaps] == [2.0]

    def test_gap_order_preserved(self) -> None:
        gaps = [
            {"start": 5.0, "end": 6.0, "isOnEdge": False, "lengthInSeconds": 1.0},
            {"start": 1.0, "end": 2.0, "isOnEdge": False, "lengthInSeconds": 1.0},
        ]
        coverage = AudioCoverage.model_validate(_coverage(queryGaps=gaps))

        assert [g.start for g in coverage.query_gaps] == [5.0, 1.0]


class TestSortByQueryCoverage:
    """Tests for sort_by_query_coverage."""

    def test_best_first_missing_last(self) -> None:
        results = [
            QueryResult.model_validate(_result("low", 0.1)),
            QueryResult.model_validate(_result("none", audio=False)),
            QueryResult.model_validate(_result("high", 0.9)),
            QueryResult.model_validate(_result("null", None)),
            QueryResult.model_validate(_result("mid", 0.5)),
        ]

        ordered = [r.id for r in sort_by_query_coverage(results)]

        assert ordered == ["high", "mid", "low", "none", "null"]

    def test_empty(self) -> None:
        assert sort_by_query_coverage([]) == []
