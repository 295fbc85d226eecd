# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Sequential sweep orchestrator driving vegeta attacks."""

import logging
import threading
from collections.abc import Callable
from pathlib import Path

from graphload.common.exceptions import ReportError, RunFailure, SweepCancelled
from graphload.orchestrator.models import FailurePolicy, RunParameters, RunResult
from graphload.orchestrator.strategies import ExecutionStrategy
from graphload.report.aggregator import ReportAggregator
from graphload.vegeta.client import VegetaClient, VegetaCommandError

logger = logging.getLogger(__name__)

__all__ = [
    "SweepOrchestrator",
]

ReportCallback = Callable[[RunParameters, str], None]


class SweepOrchestrator:
    """Runs one vegeta attack per parameter set chosen by a strategy.

    Attacks run strictly one after another so that load from one run never skews
    the latency measured by another. Each attack blocks for roughly its duration.

    The sweep can be cancelled from another thread with ``cancel()``. Cancellation
    takes effect before the next attack starts (a running attack is not
    interrupted) and cuts any pending cooldown short.
    """

    def __init__(
        self,
        base_dir: Path,
        client: VegetaClient,
        aggregator: ReportAggregator,
        failure_policy: FailurePolicy = FailurePolicy.FAIL_FAST,
        on_report: ReportCallback | None = None,
    ):
        """Initialize SweepOrchestrator.

        Args:
            base_dir: Directory owned by this sweep where artifacts are written
            client: vegeta client used for attacks
            aggregator: Report aggregator used for per-run summaries
            failure_policy: Whether a failed attack aborts the sweep
            on_report: Called with each run's text report as soon as it is available
        """
        self.base_dir = Path(base_dir)
        self.client = client
        self.aggregator = aggregator
        self.failure_policy = failure_policy
        self.on_report = on_report
        self._cancel_event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation before the next attack."""
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def execute(
        self, targets_file: Path, strategy: ExecutionStrategy
    ) -> list[RunResult]:
        """Execute attacks based on strategy.

        Args:
            targets_file: Rendered vegeta http-format target file
            strategy: Execution strategy that decides what to run

        Returns:
            List of RunResult, one per attack attempted

        Raises:
            RunFailure: On the first failed attack when the policy is fail-fast
            SweepCancelled: If cancel() was called before the sweep finished
        """
        results: list[RunResult] = []
        run_index = 0

        logger.info(
            f"Starting sweep with strategy {strategy.__class__.__name__} "
            f"(failure policy: {self.failure_policy.value})"
        )

        should_continue = strategy.should_continue(results)

        while should_continue:
            if self.cancelled:
                logger.warning(f"Sweep cancelled after {len(results)} run(s)")
                raise SweepCancelled(len(results))

            parameters = strategy.get_next_parameters(results)
            artifact_path = strategy.get_run_path(self.base_dir, parameters)

            logger.info(
                f"[{run_index + 1}] Testing workers {parameters.workers}, "
                f"rate {parameters.rate} for {parameters.vegeta_duration} -> {artifact_path}"
            )

            try:
                result = self._execute_single_run(targets_file, parameters, artifact_path)
            except RunFailure as failure:
                if self.failure_policy is FailurePolicy.FAIL_FAST:
                    logger.error(
                        f"[{run_index + 1}] {parameters.label} failed, aborting sweep: "
                        f"{failure.reason}"
                    )
                    raise
                logger.error(
                    f"[{run_index + 1}] {parameters.label} failed, continuing: "
                    f"{failure.reason}"
                )
                result = RunResult(
                    parameters=parameters,
                    success=False,
                    artifact_path=None,
                    error=str(failure),
                )
            else:
                logger.info(f"[{run_index + 1}] {parameters.label} completed successfully")

            results.append(result)
            run_index += 1

            should_continue = strategy.should_continue(results)

            # Cooldown only if there's another run coming
            if should_continue:
                cooldown = strategy.get_cooldown_seconds()
                if cooldown > 0:
                    logger.info(f"Applying cooldown: {cooldown}s")
                    self._cancel_event.wait(timeout=cooldown)

        successful = sum(1 for r in results if r.success)
        logger.info(f"All runs complete: {successful}/{len(results)} successful")

        return results

    def _execute_single_run(
        self, targets_file: Path, parameters: RunParameters, artifact_path: Path
    ) -> RunResult:
        """Run one attack, then produce its text report.

        A failed attack's partial artifact is removed so it can never end up in the
        sweep histogram. A failed text report is logged and does not fail the run.

        Raises:
            RunFailure: If vegeta fails or writes no results
        """
        try:
            self.client.attack(
                targets_file=targets_file,
                workers=parameters.workers,
                rate=parameters.rate,
                duration=parameters.vegeta_duration,
                output=artifact_path,
            )
        except VegetaCommandError as e:
            artifact_path.unlink(missing_ok=True)
            reason = (
                f"exit code {e.returncode}"
                if e.returncode is not None
                else "vegeta could not be started"
            )
            if e.stderr:
                reason += f": {e.stderr}"
            raise RunFailure(
                parameters,
                artifact_path,
                reason=reason,
                returncode=e.returncode,
                stderr=e.stderr,
            ) from e

        if not artifact_path.is_file() or artifact_path.stat().st_size == 0:
            artifact_path.unlink(missing_ok=True)
            raise RunFailure(parameters, artifact_path, reason="no results were written")

        report = None
        try:
            report = self.aggregator.summarize(artifact_path)
        except ReportError as e:
            logger.warning(f"Skipping text report for {parameters.label}: {e}")
        else:
            if self.on_report is not None:
                self.on_report(parameters, report)

        return RunResult(
            parameters=parameters,
            success=True,
            artifact_path=artifact_path,
            report=report,
        )
