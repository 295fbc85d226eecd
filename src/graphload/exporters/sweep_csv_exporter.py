# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""CSV exporter for sweep results."""

import csv
import io

from graphload.exporters.base_exporter import SweepBaseExporter


class SweepCsvExporter(SweepBaseExporter):
    """Exports sweep results to CSV format.

    Creates a CSV with sections separated by blank lines:
    - Per-run table (one row per attack)
    - Latency histogram (one row per bucket)
    - Metadata
    """

    def get_file_name(self) -> str:
        return "sweep_summary.csv"

    def _generate_content(self) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf)

        # Section 1: Runs
        writer.writerow(["label", "workers", "rate", "duration_seconds", "success", "artifact", "error"])
        for result in self._results:
            writer.writerow(
                [
                    result.label,
                    result.parameters.workers,
                    result.parameters.rate,
                    self._format_number(result.parameters.duration, decimals=3),
                    "true" if result.success else "false",
                    result.artifact_path.name if result.artifact_path else "",
                    result.error or "",
                ]
            )

        # Section 2: Histogram
        writer.writerow([])
        writer.writerow(["Latency Histogram"])
        if self._histogram is not None:
            total = self._histogram.total
            writer.writerow(["bucket", "count", "percent"])
            for label, count in zip(
                self._histogram.bucket_labels(), self._histogram.counts, strict=True
            ):
                percent = count / total * 100 if total else 0.0
                writer.writerow([label, count, self._format_number(percent)])
        else:
            writer.writerow(["None"])

        # Section 3: Metadata
        writer.writerow([])
        writer.writerow(["Metadata"])
        for key, value in self._metadata.items():
            writer.writerow([key, value])

        return buf.getvalue()
