# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Ephemeral per-sweep artifact directories."""

import contextlib
import logging
import shutil
import tempfile
from collections.abc import Iterator
from pathlib import Path

from graphload.common.config.config_defaults import OutputDefaults
from graphload.common.exceptions import StorageError

logger = logging.getLogger(__name__)

__all__ = ["TemporaryStorage"]


class TemporaryStorage:
    """Allocates a fresh directory for each sweep and removes it afterwards.

    Every sweep gets its own directory so the histogram never picks up artifacts
    from an earlier sweep.
    """

    def __init__(
        self,
        parent: Path | None = None,
        prefix: str = OutputDefaults.TEMP_DIR_PREFIX,
    ) -> None:
        self.parent = Path(parent) if parent is not None else None
        self.prefix = prefix

    def acquire(self) -> Path:
        """Create a uniquely named empty directory.

        Raises:
            StorageError: If the directory cannot be created
        """
        try:
            path = Path(tempfile.mkdtemp(prefix=self.prefix, dir=self.parent))
        except OSError as e:
            raise StorageError(self.parent, f"cannot create directory: {e}") from e
        logger.debug(f"Acquired artifact directory {path}")
        return path

    def release(self, path: Path) -> None:
        """Remove ``path`` and everything in it.

        Failures are logged as warnings and never raised.
        """
        path = Path(path)
        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            logger.debug(f"Artifact directory {path} already removed")
            return
        except OSError as e:
            logger.warning(f"{StorageError(path, f'cannot remove directory: {e}')}")
            return
        logger.debug(f"Released artifact directory {path}")

    def preserve(self, path: Path, destination: Path) -> list[Path]:
        """Copy the result artifacts (``*.bin``) of ``path`` into ``destination``.

        Raises:
            StorageError: If the destination cannot be written
        """
        destination = Path(destination)
        copied = []
        try:
            destination.mkdir(parents=True, exist_ok=True)
            for artifact in sorted(Path(path).glob("*.bin")):
                copied.append(Path(shutil.copy2(artifact, destination / artifact.name)))
        except OSError as e:
            raise StorageError(destination, f"cannot copy artifacts: {e}") from e
        logger.info(f"Copied {len(copied)} artifact(s) to {destination}")
        return copied

    @contextlib.contextmanager
    def scoped(self) -> Iterator[Path]:
        """Acquire a directory and release it on every exit path.

        Release also runs on KeyboardInterrupt and SweepCancelled.
        """
        path = self.acquire()
        try:
            yield path
        finally:
            self.release(path)
