# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Command line entry point."""

import sys
from pathlib import Path
from typing import Annotated, Literal

from cyclopts import App, Parameter

from graphload import __version__
from graphload.common.config import OutputDefaults, SweepConfig
from graphload.common.exceptions import ConfigurationError
from graphload.common.logging import error_console, setup_rich_logging

app = App(
    name="graphload",
    help="Run vegeta load-test sweeps against a graph endpoint and report latencies.",
    version=__version__,
)


@app.default
def run(
    *,
    graph_url: Annotated[
        str | None,
        Parameter(
            env_var="GRAPH_URL",
            help="Graph endpoint URL substituted for GRAPH_URL in the targets. Required.",
        ),
    ] = None,
    workers: Annotated[
        str | None,
        Parameter(help="Worker count(s), comma-separated for a sweep (e.g. 10,50,100)."),
    ] = None,
    rate: Annotated[
        str | None,
        Parameter(help="Request rate(s) per second, comma-separated (e.g. 10,100,500)."),
    ] = None,
    duration: Annotated[
        str | None,
        Parameter(help="Duration of every attack (30, 30s, 2m)."),
    ] = None,
    cooldown: Annotated[
        str | None,
        Parameter(help="Pause between attacks so the target can drain connections."),
    ] = None,
    metrics_interval: Annotated[
        str | None,
        Parameter(help="Metrics scrape interval of the target; duration must exceed it. 0 disables."),
    ] = None,
    targets: Annotated[
        Path | None,
        Parameter(help="vegeta http-format target template containing GRAPH_URL."),
    ] = None,
    failure_policy: Annotated[
        Literal["fail-fast", "best-effort"] | None,
        Parameter(help="Abort on the first failed attack, or record it and continue."),
    ] = None,
    vegeta_bin: Annotated[
        str | None,
        Parameter(help="vegeta executable."),
    ] = None,
    keep_artifacts: Annotated[
        Path | None,
        Parameter(help="Copy the binary result files here before cleanup."),
    ] = None,
    export_dir: Annotated[
        Path | None,
        Parameter(help="Write sweep_summary.json and sweep_summary.csv here."),
    ] = None,
    dry_run: Annotated[
        bool,
        Parameter(help="Print the planned runs without generating load."),
    ] = False,
    log_level: Annotated[
        str,
        Parameter(help="Logging level."),
    ] = OutputDefaults.LOG_LEVEL,
) -> int:
    """Run a load-test sweep."""
    # Deferred so --help and --version stay fast
    from graphload.cli_runner import EXIT_FAILURE, run_sweep_and_exit_code

    setup_rich_logging(log_level)

    options = {
        "graph_url": graph_url,
        "worker_counts": workers,
        "rates": rate,
        "duration": duration,
        "cooldown_seconds": cooldown,
        "metrics_interval": metrics_interval,
        "targets_path": targets,
        "failure_policy": failure_policy,
        "vegeta_bin": vegeta_bin,
        "keep_artifacts": keep_artifacts,
        "export_dir": export_dir,
    }
    # graph_url is required, so keep it even when unset to get a clear error
    options = {k: v for k, v in options.items() if v is not None or k == "graph_url"}

    try:
        config = SweepConfig.from_options(dry_run=dry_run, log_level=log_level, **options)
    except ConfigurationError as e:
        error_console.print(f"Configuration error: {e}", markup=False, highlight=False)
        return EXIT_FAILURE

    return run_sweep_and_exit_code(config)


def main(argv: list[str] | None = None) -> None:
    sys.exit(app(argv))


if __name__ == "__main__":
    main()
