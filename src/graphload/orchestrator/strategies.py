# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Execution strategies for load-test sweeps."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from graphload.orchestrator.models import RunParameters, RunResult


__all__ = [
    "ExecutionStrategy",
    "ParameterSweepStrategy",
]


class ExecutionStrategy(ABC):
    """Base class for execution strategies.

    Strategies decide:
    1. Which parameters to run next (based on results so far)
    2. Whether to continue or stop
    3. How to label runs
    4. Where each run's artifact goes
    5. Cooldown duration between runs
    """

    @abstractmethod
    def should_continue(self, results: list[RunResult]) -> bool:
        """Decide whether to run another attack.

        Args:
            results: Results from runs executed so far

        Returns:
            True if should run another attack, False to stop
        """

    @abstractmethod
    def get_next_parameters(self, results: list[RunResult]) -> RunParameters:
        """Return the parameters of the next run."""

    @abstractmethod
    def get_cooldown_seconds(self) -> float:
        """Return cooldown duration between runs."""

    def get_run_label(self, parameters: RunParameters) -> str:
        return parameters.label

    def get_run_path(self, base_dir: Path, parameters: RunParameters) -> Path:
        """Build the artifact path for a run.

        The file name encodes the run parameters, so artifacts can be attributed
        without any extra metadata.
        """
        return Path(base_dir) / parameters.artifact_name


class ParameterSweepStrategy(ExecutionStrategy):
    """Strategy sweeping the cross-product of worker counts and request rates.

    Worker counts form the outer loop and rates the inner loop, so for workers
    ``[10, 50]`` and rates ``[10, 100]`` the order is (10, 10), (10, 100), (50, 10),
    (50, 100).

    Attributes:
        worker_counts: Worker counts to test
        rates: Request rates (per second) to test
        duration: Duration of every attack in seconds
        cooldown_seconds: Pause between consecutive attacks
    """

    def __init__(
        self,
        worker_counts: Sequence[int],
        rates: Sequence[int],
        duration: float,
        cooldown_seconds: float = 0.0,
    ) -> None:
        """Initialize the sweep strategy.

        Raises:
            ValueError: If a value list is empty or has duplicates, or if
                cooldown_seconds < 0
        """
        if cooldown_seconds < 0:
            raise ValueError(
                f"Invalid cooldown duration: {cooldown_seconds} seconds. "
                f"Cooldown must be non-negative (0 or greater)."
            )
        for name, values in (("worker_counts", worker_counts), ("rates", rates)):
            if not values:
                raise ValueError(f"Parameter sweep requires at least one value for {name}.")
            if len(set(values)) != len(values):
                raise ValueError(f"Duplicate {name} values would overwrite artifacts: {list(values)}")

        self.worker_counts = list(worker_counts)
        self.rates = list(rates)
        self.duration = duration
        self.cooldown_seconds = cooldown_seconds
        self._plan = [
            RunParameters(workers=workers, rate=rate, duration=duration)
            for workers in self.worker_counts
            for rate in self.rates
        ]

    def planned_parameters(self) -> list[RunParameters]:
        """Return every parameter set in execution order."""
        return list(self._plan)

    def should_continue(self, results: list[RunResult]) -> bool:
        """Continue until every combination has been attempted."""
        return len(results) < len(self._plan)

    def get_next_parameters(self, results: list[RunResult]) -> RunParameters:
        return self._plan[len(results)]

    def get_cooldown_seconds(self) -> float:
        return self.cooldown_seconds
