# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Per-run text reports and the sweep-wide latency histogram."""

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path

import orjson

from graphload.common.exceptions import ReportError
from graphload.report.histogram import BUCKET_BOUNDARIES_NS, LatencyHistogram
from graphload.vegeta.client import VegetaClient, VegetaCommandError

logger = logging.getLogger(__name__)

__all__ = ["ReportAggregator"]


class ReportAggregator:
    """Builds reports over vegeta result artifacts.

    ``summarize`` is a pass-through to ``vegeta report -type=text``. ``histogram``
    decodes every sample of every artifact and buckets the latencies itself, so the
    bucket semantics do not depend on the vegeta version.
    """

    def __init__(
        self,
        client: VegetaClient,
        boundaries: Sequence[int] = BUCKET_BOUNDARIES_NS,
    ) -> None:
        self.client = client
        self.boundaries = tuple(boundaries)

    def summarize(self, artifact: Path) -> str:
        """Return vegeta's text report for a single artifact.

        Raises:
            ReportError: If the artifact is missing or empty, or vegeta cannot read it
        """
        artifact = self._check_artifact(artifact)
        try:
            report = self.client.report([artifact], report_type="text")
        except VegetaCommandError as e:
            raise ReportError(artifact, str(e)) from e
        if not report.strip():
            raise ReportError(artifact, "vegeta produced an empty report")
        return report

    def histogram(self, artifacts: Sequence[Path]) -> LatencyHistogram:
        """Bucket the latency of every sample across ``artifacts``.

        Raises:
            ReportError: Naming the first artifact that is missing, empty or undecodable
        """
        if not artifacts:
            raise ReportError(None, "no result artifacts to build a histogram from")

        histogram = LatencyHistogram.from_latencies([], self.boundaries)
        for artifact in artifacts:
            artifact = self._check_artifact(artifact)
            latencies = list(self._latencies(artifact))
            if not latencies:
                raise ReportError(artifact, "artifact contains no results")
            histogram = histogram.merge(
                LatencyHistogram.from_latencies(latencies, self.boundaries)
            )
            logger.debug(f"Added {len(latencies)} sample(s) from {artifact.name}")

        logger.info(
            f"Latency histogram built from {histogram.total} sample(s) "
            f"across {len(artifacts)} artifact(s)"
        )
        return histogram

    def _latencies(self, artifact: Path) -> Iterator[int]:
        try:
            encoded = self.client.encode(artifact, to="json")
        except VegetaCommandError as e:
            raise ReportError(artifact, f"not a vegeta result file: {e}") from e

        for lineno, line in enumerate(encoded.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                latency = orjson.loads(line)["latency"]
            except (orjson.JSONDecodeError, KeyError, TypeError) as e:
                raise ReportError(
                    artifact, f"malformed result on line {lineno}: {e}"
                ) from e
            if not isinstance(latency, int) or isinstance(latency, bool):
                raise ReportError(
                    artifact, f"non-integer latency on line {lineno}: {latency!r}"
                )
            yield latency

    @staticmethod
    def _check_artifact(artifact: Path) -> Path:
        artifact = Path(artifact)
        if not artifact.is_file():
            raise ReportError(artifact, "artifact does not exist")
        if artifact.stat().st_size == 0:
            raise ReportError(artifact, "artifact is empty")
        return artifact
