# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Subprocess wrapper around the vegeta CLI."""

import logging
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from graphload.common.config.config_defaults import VegetaDefaults
from graphload.common.exceptions import ConfigurationError, GraphLoadError

logger = logging.getLogger(__name__)

__all__ = [
    "VegetaClient",
    "VegetaCommandError",
]


class VegetaCommandError(GraphLoadError):
    """A vegeta invocation exited non-zero or could not be started.

    Callers translate this into RunFailure or ReportError depending on the subcommand.
    """

    def __init__(self, args: Sequence[str], returncode: int | None, stderr: str) -> None:
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr
        if returncode is None:
            message = f"Failed to start {' '.join(self.args_list)}"
        else:
            message = f"{' '.join(self.args_list)} failed with exit code {returncode}"
        if stderr:
            message += f"\nStderr: {stderr}"
        super().__init__(message)


class VegetaClient:
    """Runs vegeta subcommands (attack, report, encode) as child processes.

    vegeta owns all traffic generation and latency sampling. This class only builds
    command lines, runs them, and surfaces failures.
    """

    def __init__(self, binary: str = VegetaDefaults.BINARY) -> None:
        self.binary = binary

    def ensure_available(self) -> str:
        """Return the resolved vegeta executable path.

        Raises:
            ConfigurationError: If the binary cannot be found
        """
        resolved = shutil.which(self.binary)
        if resolved is None:
            raise ConfigurationError(
                f"vegeta executable '{self.binary}' not found on PATH. "
                f"Install it (go install github.com/tsenart/vegeta@latest) "
                f"or pass --vegeta-bin."
            )
        return resolved

    def version(self) -> str:
        return self._run(["-version"]).stdout.strip()

    def attack(
        self,
        targets_file: Path,
        workers: int,
        rate: int,
        duration: str,
        output: Path,
        target_format: str = VegetaDefaults.TARGET_FORMAT,
    ) -> None:
        """Run ``vegeta attack`` writing binary results to ``output``.

        Blocks for roughly ``duration``. stdout is not used since results go to
        ``-output``; stderr is captured for error reporting.
        """
        self._run(
            [
                "attack",
                f"-format={target_format}",
                f"-targets={targets_file}",
                f"-workers={workers}",
                f"-rate={rate}",
                f"-duration={duration}",
                f"-output={output}",
            ]
        )

    def report(self, artifacts: Sequence[Path], report_type: str = "text") -> str:
        """Run ``vegeta report`` over one or more artifacts and return its stdout."""
        return self._run(
            ["report", f"-type={report_type}", *(str(a) for a in artifacts)]
        ).stdout

    def encode(self, artifact: Path, to: str = "json") -> str:
        """Decode a binary artifact into ``to`` format (one JSON object per line)."""
        return self._run(["encode", f"-to={to}", str(artifact)]).stdout

    def _run(self, args: list[str]) -> subprocess.CompletedProcess:
        cmd = [self.binary, *args]
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            raise VegetaCommandError(cmd, None, str(e)) from e

        if result.returncode != 0:
            stderr = (result.stderr or "")[-VegetaDefaults.STDERR_TAIL_CHARS :]
            raise VegetaCommandError(cmd, result.returncode, stderr.strip())
        return result
