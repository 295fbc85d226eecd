# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Fixed-boundary latency histogram."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

__all__ = [
    "BUCKET_BOUNDARIES_NS",
    "LatencyHistogram",
    "format_latency",
]

_MS = 1_000_000
_S = 1_000_000_000

# 0, 50ms, 100ms, 500ms, 1s, 5s, 10s
BUCKET_BOUNDARIES_NS: tuple[int, ...] = (0, 50 * _MS, 100 * _MS, 500 * _MS, _S, 5 * _S, 10 * _S)

_BAR_WIDTH = 50


def format_latency(ns: int) -> str:
    """Format a boundary the way vegeta does: 0s, 50ms, 1s."""
    if ns == 0:
        return "0s"
    if ns % _S == 0:
        return f"{ns // _S}s"
    if ns % _MS == 0:
        return f"{ns // _MS}ms"
    return f"{ns}ns"


@dataclass(slots=True)
class LatencyHistogram:
    """Counts of latency samples per bucket.

    Buckets are ``[0, b1]``, ``(b1, b2]``, ... ``(b5, b6]`` plus an overflow bucket
    ``(b6, +inf)``. A sample equal to a boundary falls into the bucket that boundary
    closes (the lower one).

    Attributes:
        boundaries: Bucket boundaries in nanoseconds, strictly increasing, starting at 0
        counts: One count per bucket (len(boundaries) buckets, the last one is overflow)
    """

    boundaries: tuple[int, ...]
    counts: list[int]

    @classmethod
    def from_latencies(
        cls,
        latencies_ns: Iterable[int],
        boundaries: Sequence[int] = BUCKET_BOUNDARIES_NS,
    ) -> "LatencyHistogram":
        edges = np.asarray(boundaries, dtype=np.int64)
        if edges.size < 2 or edges[0] != 0 or np.any(np.diff(edges) <= 0):
            raise ValueError(
                f"Bucket boundaries must start at 0 and be strictly increasing: {list(boundaries)}"
            )
        values = np.fromiter(latencies_ns, dtype=np.int64)
        # side="left" puts boundary-exact samples in the lower bucket
        indices = np.searchsorted(edges[1:], values, side="left")
        counts = np.bincount(indices, minlength=edges.size)
        return cls(boundaries=tuple(int(b) for b in edges), counts=[int(c) for c in counts])

    @property
    def total(self) -> int:
        return sum(self.counts)

    def bucket_labels(self) -> list[str]:
        labels = []
        for i in range(len(self.boundaries)):
            lower = format_latency(self.boundaries[i])
            if i + 1 < len(self.boundaries):
                upper = format_latency(self.boundaries[i + 1])
                opener = "[" if i == 0 else "("
                labels.append(f"{opener}{lower}, {upper}]")
            else:
                labels.append(f"({lower}, +Inf)")
        return labels

    def merge(self, other: "LatencyHistogram") -> "LatencyHistogram":
        if self.boundaries != other.boundaries:
            raise ValueError("Cannot merge histograms with different bucket boundaries")
        return LatencyHistogram(
            boundaries=self.boundaries,
            counts=[a + b for a, b in zip(self.counts, other.counts, strict=True)],
        )

    def to_dict(self) -> dict:
        return {
            "boundaries_ns": list(self.boundaries),
            "total": self.total,
            "buckets": [
                {"bucket": label, "count": count}
                for label, count in zip(self.bucket_labels(), self.counts, strict=True)
            ],
        }

    def render(self) -> str:
        """Render a text table in the layout of ``vegeta report -type=hist``."""
        total = self.total
        labels = self.bucket_labels()
        width = max(len("Bucket"), *(len(label) for label in labels))
        lines = [f"{'Bucket':<{width}}  {'#':>8}  {'%':>7}  Histogram"]
        for label, count in zip(labels, self.counts, strict=True):
            share = count / total if total else 0.0
            bar = "#" * round(share * _BAR_WIDTH)
            lines.append(f"{label:<{width}}  {count:>8}  {share:>7.2%}  {bar}")
        return "\n".join(lines)
