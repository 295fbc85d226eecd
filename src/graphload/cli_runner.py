# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import asyncio
import contextlib
import logging
import signal
from collections.abc import Iterator
from pathlib import Path

from graphload.common.config import SweepConfig
from graphload.common.exceptions import (
    ConfigurationError,
    GraphLoadError,
    ReportError,
    RunFailure,
    StorageError,
    SweepCancelled,
)
from graphload.common.logging import error_console, report_console
from graphload.exporters import SweepCsvExporter, SweepExporterConfig, SweepJsonExporter
from graphload.orchestrator.models import RunParameters, RunResult
from graphload.orchestrator.orchestrator import SweepOrchestrator
from graphload.orchestrator.strategies import ParameterSweepStrategy
from graphload.report.aggregator import ReportAggregator
from graphload.report.histogram import LatencyHistogram
from graphload.storage import TemporaryStorage
from graphload.targets.renderer import TargetTemplate
from graphload.vegeta.client import VegetaClient

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

_TARGETS_FILE_NAME = "targets.http"


def run_sweep_and_exit_code(config: SweepConfig) -> int:
    """Run a sweep and translate its outcome into a process exit code.

    Every error is printed to stderr as a single readable line.
    """
    try:
        return run_sweep(config)
    except ConfigurationError as e:
        error_console.print(f"Configuration error: {e}", markup=False, highlight=False)
    except RunFailure as e:
        error_console.print(f"Run failed: {e}", markup=False, highlight=False)
        if e.stderr:
            error_console.print(e.stderr, markup=False, highlight=False)
    except ReportError as e:
        error_console.print(f"Report failed: {e}", markup=False, highlight=False)
    except StorageError as e:
        error_console.print(f"Storage error: {e}", markup=False, highlight=False)
    except SweepCancelled as e:
        error_console.print(str(e), markup=False, highlight=False)
        return EXIT_INTERRUPTED
    except KeyboardInterrupt:
        error_console.print("Interrupted", markup=False, highlight=False)
        return EXIT_INTERRUPTED
    except GraphLoadError as e:
        error_console.print(f"Error: {e}", markup=False, highlight=False)
    return EXIT_FAILURE


def run_sweep(config: SweepConfig, client: VegetaClient | None = None) -> int:
    """Run the full pipeline: render, acquire, attack*, histogram, export, release.

    Returns:
        EXIT_OK if every run succeeded, EXIT_FAILURE otherwise (best-effort policy)

    Raises:
        ConfigurationError: Before any attack, on invalid template/URL or missing vegeta
        RunFailure: On the first failed attack with the fail-fast policy
        ReportError: If the sweep histogram cannot be built
        StorageError: If the artifact directory cannot be created
        SweepCancelled: If the sweep was cancelled with SIGTERM
    """
    template = (
        TargetTemplate.from_file(config.targets_path)
        if config.targets_path is not None
        else TargetTemplate.default()
    )
    target_spec = template.render(config.graph_url)
    strategy = ParameterSweepStrategy(
        worker_counts=config.worker_counts,
        rates=config.rates,
        duration=config.duration,
        cooldown_seconds=config.cooldown_seconds,
    )

    if config.dry_run:
        _print_plan(strategy.planned_parameters(), target_spec.targets, config)
        return EXIT_OK

    client = client or VegetaClient(config.vegeta_bin)
    client.ensure_available()
    aggregator = ReportAggregator(client)
    storage = TemporaryStorage()

    _log_banner(config, len(strategy.planned_parameters()))

    with storage.scoped() as base_dir:
        try:
            targets_file = target_spec.write(base_dir / _TARGETS_FILE_NAME)
            orchestrator = SweepOrchestrator(
                base_dir=base_dir,
                client=client,
                aggregator=aggregator,
                failure_policy=config.failure_policy,
                on_report=_print_run_report,
            )
            with _cancel_on_sigterm(orchestrator):
                results = orchestrator.execute(targets_file, strategy)

            artifacts = [r.artifact_path for r in results if r.success and r.artifact_path]
            histogram = None
            if artifacts:
                histogram = aggregator.histogram(artifacts)
                report_console.rule("Latency histogram")
                report_console.print(histogram.render(), markup=False, highlight=False)
            else:
                logger.error("No successful runs, skipping latency histogram")

            if config.export_dir is not None:
                _export(results, histogram, config)
        finally:
            if config.keep_artifacts is not None:
                try:
                    storage.preserve(base_dir, config.keep_artifacts)
                except StorageError as e:
                    logger.warning(f"{e}")

    failed = [r for r in results if not r.success]
    if failed:
        logger.warning(f"Failed runs: {', '.join(r.label for r in failed)}")
        return EXIT_FAILURE
    logger.info("Sweep completed successfully")
    return EXIT_OK


@contextlib.contextmanager
def _cancel_on_sigterm(orchestrator: SweepOrchestrator) -> Iterator[None]:
    """Turn SIGTERM into a cancellation between runs for the duration of the block."""

    def handler(signum, frame) -> None:
        logger.warning("SIGTERM received, cancelling sweep after the current run")
        orchestrator.cancel()

    try:
        previous = signal.signal(signal.SIGTERM, handler)
    except ValueError:
        # Not on the main thread; signals cannot be handled here
        yield
        return
    try:
        yield
    finally:
        signal.signal(signal.SIGTERM, previous)


def _print_run_report(parameters: RunParameters, report: str) -> None:
    report_console.rule(f"workers={parameters.workers} rate={parameters.rate}")
    report_console.print(report.rstrip(), markup=False, highlight=False)


def _export(
    results: list[RunResult], histogram: LatencyHistogram | None, config: SweepConfig
) -> None:
    exporter_config = SweepExporterConfig(
        results=results,
        output_dir=Path(config.export_dir),
        histogram=histogram,
        metadata={
            "graph_url": config.graph_url,
            "worker_counts": config.worker_counts,
            "rates": config.rates,
            "duration_seconds": config.duration,
            "cooldown_seconds": config.cooldown_seconds,
            "failure_policy": config.failure_policy.value,
        },
    )

    async def export_artifacts() -> tuple[Path, Path]:
        return await asyncio.gather(
            SweepJsonExporter(exporter_config).export(),
            SweepCsvExporter(exporter_config).export(),
        )

    json_path, csv_path = asyncio.run(export_artifacts())
    logger.info(f"Sweep JSON written to: {json_path}")
    logger.info(f"Sweep CSV written to: {csv_path}")


def _log_banner(config: SweepConfig, num_runs: int) -> None:
    logger.info("=" * 80)
    logger.info("Starting Load Test Sweep")
    logger.info(f"  Graph URL: {config.graph_url}")
    logger.info(f"  Workers: {config.worker_counts}")
    logger.info(f"  Rates: {config.rates}")
    logger.info(f"  Duration per run: {config.duration}s ({num_runs} run(s))")
    if config.cooldown_seconds > 0:
        logger.info(f"  Cooldown between runs: {config.cooldown_seconds}s")
    logger.info(f"  Failure policy: {config.failure_policy.value}")
    logger.info("=" * 80)


def _print_plan(plan: list[RunParameters], targets, config: SweepConfig) -> None:
    report_console.print(f"Graph URL: {config.graph_url}", markup=False, highlight=False)
    report_console.print(f"Targets ({len(targets)}):", markup=False, highlight=False)
    for target in targets:
        report_console.print(f"  {target.method} {target.url}", markup=False, highlight=False)
    report_console.print(f"Runs ({len(plan)}):", markup=False, highlight=False)
    for parameters in plan:
        report_console.print(
            f"  - {parameters.artifact_name}: workers={parameters.workers}, "
            f"rate={parameters.rate}/s, duration={parameters.vegeta_duration}",
            markup=False,
            highlight=False,
        )
