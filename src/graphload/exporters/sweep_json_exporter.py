# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""JSON exporter for sweep results."""

import orjson

from graphload.exporters.base_exporter import SweepBaseExporter


class SweepJsonExporter(SweepBaseExporter):
    """Exports sweep results to JSON format.

    Output structure:
    {
        "num_runs": 4,
        "num_successful_runs": 3,
        "failed_runs": ["rate-1000-workers-10"],
        "metadata": {...},
        "runs": [{"label": ..., "workers": ..., "rate": ..., ...}, ...],
        "histogram": {"boundaries_ns": [...], "total": ..., "buckets": [...]} | null
    }
    """

    def get_file_name(self) -> str:
        return "sweep_summary.json"

    def _generate_content(self) -> str:
        runs = []
        for result in self._results:
            runs.append(
                {
                    "label": result.label,
                    "workers": result.parameters.workers,
                    "rate": result.parameters.rate,
                    "duration_seconds": result.parameters.duration,
                    "success": result.success,
                    "artifact": result.artifact_path.name if result.artifact_path else None,
                    "error": result.error,
                }
            )

        output = {
            "num_runs": len(self._results),
            "num_successful_runs": sum(1 for r in self._results if r.success),
            "failed_runs": [r.label for r in self._results if not r.success],
            "metadata": self._metadata,
            "runs": runs,
            "histogram": self._histogram.to_dict() if self._histogram else None,
        }

        return orjson.dumps(output, option=orjson.OPT_INDENT_2).decode("utf-8")
