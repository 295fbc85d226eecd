# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Sweep summary exporters."""

from graphload.exporters.base_exporter import SweepBaseExporter
from graphload.exporters.exporter_config import SweepExporterConfig
from graphload.exporters.sweep_csv_exporter import SweepCsvExporter
from graphload.exporters.sweep_json_exporter import SweepJsonExporter

__all__ = [
    "SweepBaseExporter",
    "SweepCsvExporter",
    "SweepExporterConfig",
    "SweepJsonExporter",
]
