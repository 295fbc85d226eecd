# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""vegeta load generator integration."""

from graphload.vegeta.client import VegetaClient, VegetaCommandError

__all__ = [
    "VegetaClient",
    "VegetaCommandError",
]
