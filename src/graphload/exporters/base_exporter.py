# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Base class for sweep summary exporters."""

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from graphload.exporters.exporter_config import SweepExporterConfig

logger = logging.getLogger(__name__)


class SweepBaseExporter(ABC):
    """Writes one summary file for a finished sweep.

    Subclasses provide the file name and the file content. Writing happens in a
    worker thread so several exporters can run concurrently with asyncio.gather.
    """

    def __init__(self, config: SweepExporterConfig) -> None:
        self._config = config
        self._results = config.results
        self._histogram = config.histogram
        self._metadata = config.metadata

    @abstractmethod
    def get_file_name(self) -> str:
        """Return the export file name."""

    @abstractmethod
    def _generate_content(self) -> str:
        """Return the full file content."""

    async def export(self) -> Path:
        """Write the export file and return its path."""
        path = Path(self._config.output_dir) / self.get_file_name()
        content = self._generate_content()
        await asyncio.to_thread(path.parent.mkdir, parents=True, exist_ok=True)
        await asyncio.to_thread(path.write_text, content, encoding="utf-8")
        logger.debug(f"Exported {path}")
        return path

    @staticmethod
    def _format_number(value: float | None, decimals: int = 2) -> str:
        if value is None:
            return ""
        return f"{value:.{decimals}f}"
