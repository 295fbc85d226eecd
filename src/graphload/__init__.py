# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""graphload - vegeta load-test sweeps for graph endpoints."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("graphload")
except PackageNotFoundError:
    __version__ = "unknown"
