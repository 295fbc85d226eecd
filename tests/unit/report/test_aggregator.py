# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for ReportAggregator."""

from pathlib import Path

import pytest

from graphload.common.exceptions import ReportError
from graphload.report.aggregator import ReportAggregator
from graphload.vegeta.client import VegetaCommandError

MS = 1_000_000
S = 1_000_000_000


class TestSummarize:
    def test_passes_through_vegeta_text_report(self, tmp_path, mock_client, write_artifact):
        artifact = write_artifact(tmp_path / "rate-500-workers-10.bin")

        report = ReportAggregator(mock_client).summarize(artifact)

        assert report == mock_client.report.return_value
        mock_client.report.assert_called_once_with([artifact], report_type="text")

    def test_missing_artifact_raises(self, tmp_path, mock_client, write_artifact):
        with pytest.raises(ReportError, match="does not exist") as exc_info:
            ReportAggregator(mock_client).summarize(tmp_path / "missing.bin")

        assert exc_info.value.artifact == tmp_path / "missing.bin"
        mock_client.report.assert_not_called()

    def test_empty_artifact_raises(self, tmp_path, mock_client, write_artifact):
        artifact = write_artifact(tmp_path / "empty.bin", b"")

        with pytest.raises(ReportError, match="is empty"):
            ReportAggregator(mock_client).summarize(artifact)

    def test_vegeta_failure_raises(self, tmp_path, mock_client, write_artifact):
        artifact = write_artifact(tmp_path / "bad.bin")
        mock_client.report.side_effect = VegetaCommandError(
            ["vegeta", "report"], 1, "decode: gob: unknown type id"
        )

        with pytest.raises(ReportError, match="gob: unknown type id"):
            ReportAggregator(mock_client).summarize(artifact)

    def test_blank_report_raises(self, tmp_path, mock_client, write_artifact):
        artifact = write_artifact(tmp_path / "a.bin")
        mock_client.report.return_value = "  \n"

        with pytest.raises(ReportError, match="empty report"):
            ReportAggregator(mock_client).summarize(artifact)


class TestHistogram:
    def test_buckets_samples_across_three_artifacts(
        self, tmp_path, mock_client, write_artifact, encode_results
    ):
        distributions = {
            "rate-10-workers-10.bin": [0, 50 * MS, 50 * MS + 1, 100 * MS],
            "rate-100-workers-10.bin": [500 * MS, S, 3 * S],
            "rate-500-workers-10.bin": [5 * S, 10 * S, 10 * S + 1, 30 * S],
        }
        artifacts = [write_artifact(tmp_path / name) for name in distributions]
        mock_client.encode.side_effect = lambda artifact, to="json": encode_results(
            distributions[Path(artifact).name]
        )

        histogram = ReportAggregator(mock_client).histogram(artifacts)

        # [0,50ms] (50ms,100ms] (100ms,500ms] (500ms,1s] (1s,5s] (5s,10s] (10s,+Inf)
        assert histogram.counts == [2, 2, 1, 1, 2, 1, 2]
        assert histogram.total == 11
        assert mock_client.encode.call_count == 3

    def test_no_artifacts_raises(self, mock_client):
        with pytest.raises(ReportError, match="no result artifacts"):
            ReportAggregator(mock_client).histogram([])

    def test_missing_artifact_is_named(self, tmp_path, mock_client, write_artifact):
        good = write_artifact(tmp_path / "rate-10-workers-10.bin")
        missing = tmp_path / "rate-100-workers-10.bin"

        with pytest.raises(ReportError) as exc_info:
            ReportAggregator(mock_client).histogram([good, missing])

        assert exc_info.value.artifact == missing
        assert "rate-100-workers-10.bin" in str(exc_info.value)

    def test_empty_artifact_raises(self, tmp_path, mock_client, write_artifact):
        artifact = write_artifact(tmp_path / "rate-10-workers-10.bin", b"")

        with pytest.raises(ReportError, match="is empty"):
            ReportAggregator(mock_client).histogram([artifact])

    def test_undecodable_artifact_raises(self, tmp_path, mock_client, write_artifact):
        artifact = write_artifact(tmp_path / "rate-10-workers-10.bin", b"not gob")
        mock_client.encode.side_effect = VegetaCommandError(
            ["vegeta", "encode"], 1, "encode: unexpected EOF"
        )

        with pytest.raises(ReportError, match="not a vegeta result file"):
            ReportAggregator(mock_client).histogram([artifact])

    def test_artifact_without_results_raises(self, tmp_path, mock_client, write_artifact):
        artifact = write_artifact(tmp_path / "rate-10-workers-10.bin")
        mock_client.encode.return_value = ""

        with pytest.raises(ReportError, match="contains no results"):
            ReportAggregator(mock_client).histogram([artifact])

    @pytest.mark.parametrize(
        "encoded,match",
        [
            ("{not json}\n", "malformed result on line 1"),
            ('{"code": 200}\n', "malformed result on line 1"),
            ('{"latency": 10}\n{"latency": "slow"}\n', "non-integer latency on line 2"),
        ],
    )
    def test_malformed_results_raise(self, tmp_path, mock_client, write_artifact, encoded, match):
        artifact = write_artifact(tmp_path / "rate-10-workers-10.bin")
        mock_client.encode.return_value = encoded

        with pytest.raises(ReportError, match=match):
            ReportAggregator(mock_client).histogram([artifact])
