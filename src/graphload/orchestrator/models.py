# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Data models for load-test sweeps."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "FailurePolicy",
    "RunParameters",
    "RunResult",
    "format_duration",
]


class FailurePolicy(str, Enum):
    """What the sweep does after a failed attack."""

    FAIL_FAST = "fail-fast"  # Abort the sweep on the first failed run
    BEST_EFFORT = "best-effort"  # Record the failure and keep going


def format_duration(seconds: float) -> str:
    """Format a duration in seconds for vegeta's ``-duration`` flag.

    Whole seconds are rendered as ``30s``, anything else in milliseconds (``1500ms``).
    """
    if float(seconds).is_integer():
        return f"{int(seconds)}s"
    return f"{round(seconds * 1000)}ms"


class RunParameters(BaseModel):
    """Parameters identifying one vegeta attack.

    Attributes:
        workers: Initial number of vegeta workers
        rate: Requests per second
        duration: Attack duration in seconds
    """

    model_config = ConfigDict(frozen=True)

    workers: int = Field(ge=1)
    rate: int = Field(ge=1)
    duration: float = Field(gt=0)

    @property
    def label(self) -> str:
        """Label for this run, e.g. ``rate-500-workers-10``."""
        return f"rate-{self.rate}-workers-{self.workers}"

    @property
    def artifact_name(self) -> str:
        """File name of the run's result artifact, e.g. ``rate-500-workers-10.bin``."""
        return f"{self.label}.bin"

    @property
    def vegeta_duration(self) -> str:
        return format_duration(self.duration)


class RunResult(BaseModel):
    """Result from executing a single attack.

    Attributes:
        parameters: Parameters the run was executed with
        success: Whether the attack completed successfully
        artifact_path: Path to the run's result artifact, None if the attack failed
        report: Text report produced for the artifact, if any
        error: Error message if the run failed
    """

    parameters: RunParameters
    success: bool
    artifact_path: Path | None = None
    report: str | None = None
    error: str | None = None

    @property
    def label(self) -> str:
        return self.parameters.label
