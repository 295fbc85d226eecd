# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Logging setup for the graphload CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOG_FORMAT = "%(name)s: %(message)s"

# Reports go to stdout, logs and errors go to stderr.
report_console = Console()
error_console = Console(stderr=True)


def setup_rich_logging(level: str = "INFO") -> None:
    """Install a RichHandler writing to stderr on the root logger.

    Replaces any previously installed handlers so repeated calls (e.g. from tests)
    do not duplicate output.
    """
    handler = RichHandler(
        console=error_console,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
