# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Exception hierarchy for graphload."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from graphload.orchestrator.models import RunParameters

__all__ = [
    "ConfigurationError",
    "GraphLoadError",
    "ReportError",
    "RunFailure",
    "StorageError",
    "SweepCancelled",
]


class GraphLoadError(Exception):
    """Base class for all graphload errors."""


class ConfigurationError(GraphLoadError):
    """Raised when the endpoint URL, target template or sweep parameters are invalid.

    Always raised before any load is generated.
    """


class RunFailure(GraphLoadError):
    """Raised when a single vegeta attack fails.

    Attributes:
        parameters: Parameters of the failed run
        artifact_path: Where the run's result artifact was (or would have been) written
        returncode: Exit code of the load generator, None if it never started
        stderr: Tail of the load generator's stderr, if captured
    """

    def __init__(
        self,
        parameters: RunParameters,
        artifact_path: Path,
        reason: str,
        returncode: int | None = None,
        stderr: str | None = None,
    ) -> None:
        self.parameters = parameters
        self.artifact_path = Path(artifact_path)
        self.reason = reason
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"Run {parameters.label} failed ({reason}); artifact: {self.artifact_path}"
        )


class ReportError(GraphLoadError):
    """Raised when a result artifact is missing, empty or cannot be decoded."""

    def __init__(self, artifact: Path | None, reason: str) -> None:
        self.artifact = Path(artifact) if artifact is not None else None
        self.reason = reason
        if self.artifact is not None:
            super().__init__(f"Cannot report on {self.artifact}: {reason}")
        else:
            super().__init__(f"Cannot build report: {reason}")


class StorageError(GraphLoadError):
    """Raised when the temporary artifact directory cannot be created or removed."""

    def __init__(self, path: Path | None, reason: str) -> None:
        self.path = Path(path) if path is not None else None
        self.reason = reason
        super().__init__(f"Storage error at {self.path or '<unallocated>'}: {reason}")


class SweepCancelled(GraphLoadError):
    """Raised when a sweep is cancelled between runs."""

    def __init__(self, completed_runs: int) -> None:
        self.completed_runs = completed_runs
        super().__init__(f"Sweep cancelled after {completed_runs} run(s)")
