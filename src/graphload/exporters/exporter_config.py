# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Configuration for sweep exporters."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from graphload.orchestrator.models import RunResult
from graphload.report.histogram import LatencyHistogram


@dataclass(slots=True)
class SweepExporterConfig:
    """Configuration for sweep exporters.

    Attributes:
        results: One RunResult per attempted attack, in execution order
        output_dir: Directory where export files will be written
        histogram: Sweep-wide latency histogram, None if it could not be built
        metadata: Extra sweep-level fields (graph URL, failure policy, ...)
    """

    results: list[RunResult]
    output_dir: Path
    histogram: LatencyHistogram | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
