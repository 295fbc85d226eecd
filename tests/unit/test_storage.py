# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for TemporaryStorage."""

import logging
from unittest.mock import patch

import pytest

from graphload.common.exceptions import StorageError, SweepCancelled
from graphload.storage import TemporaryStorage


class TestTemporaryStorage:
    def test_acquire_creates_unique_directories(self, tmp_path):
        storage = TemporaryStorage(parent=tmp_path)

        first = storage.acquire()
        second = storage.acquire()

        assert first != second
        assert first.is_dir() and second.is_dir()
        assert first.name.startswith("graphload-")
        assert list(first.iterdir()) == []

    def test_release_removes_directory_and_contents(self, tmp_path):
        storage = TemporaryStorage(parent=tmp_path)
        path = storage.acquire()
        (path / "rate-500-workers-10.bin").write_bytes(b"data")

        storage.release(path)

        assert not path.exists()

    def test_release_missing_directory_is_noop(self, tmp_path):
        TemporaryStorage().release(tmp_path / "gone")

    def test_acquire_failure_raises_storage_error(self, tmp_path):
        storage = TemporaryStorage(parent=tmp_path / "does-not-exist")

        with pytest.raises(StorageError, match="cannot create directory"):
            storage.acquire()

    def test_release_failure_is_logged_not_raised(self, tmp_path, caplog):
        storage = TemporaryStorage(parent=tmp_path)
        path = storage.acquire()

        with (
            patch("graphload.storage.shutil.rmtree", side_effect=PermissionError("denied")),
            caplog.at_level(logging.WARNING, logger="graphload.storage"),
        ):
            storage.release(path)

        assert "cannot remove directory" in caplog.text

    @pytest.mark.parametrize(
        "exc",
        [RuntimeError("boom"), KeyboardInterrupt(), SweepCancelled(1)],
    )
    def test_scoped_releases_on_every_exit_path(self, tmp_path, exc):
        storage = TemporaryStorage(parent=tmp_path)

        with pytest.raises(type(exc)):
            with storage.scoped() as path:
                (path / "a.bin").write_bytes(b"x")
                raise exc

        assert list(tmp_path.iterdir()) == []

    def test_scoped_releases_on_success(self, tmp_path):
        storage = TemporaryStorage(parent=tmp_path)

        with storage.scoped() as path:
            assert path.is_dir()

        assert not path.exists()

    def test_preserve_copies_artifacts_only(self, tmp_path):
        storage = TemporaryStorage(parent=tmp_path)
        destination = tmp_path / "kept"
        with storage.scoped() as path:
            (path / "rate-10-workers-10.bin").write_bytes(b"a")
            (path / "rate-100-workers-10.bin").write_bytes(b"b")
            (path / "targets.http").write_text("GET http://host/graph\n")

            copied = storage.preserve(path, destination)

        assert sorted(p.name for p in copied) == [
            "rate-10-workers-10.bin",
            "rate-100-workers-10.bin",
        ]
        assert (destination / "rate-10-workers-10.bin").read_bytes() == b"a"
        assert not (destination / "targets.http").exists()

    def test_preserve_failure_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        with pytest.raises(StorageError, match="cannot copy artifacts"):
            TemporaryStorage().preserve(tmp_path, blocker / "kept")
