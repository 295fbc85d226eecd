# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Reporting over vegeta result artifacts."""

from graphload.report.aggregator import ReportAggregator
from graphload.report.histogram import (
    BUCKET_BOUNDARIES_NS,
    LatencyHistogram,
    format_latency,
)

__all__ = [
    "BUCKET_BOUNDARIES_NS",
    "LatencyHistogram",
    "ReportAggregator",
    "format_latency",
]
