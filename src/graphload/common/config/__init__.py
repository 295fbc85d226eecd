# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from graphload.common.config.config_defaults import (
    OutputDefaults,
    SweepDefaults,
    VegetaDefaults,
)
from graphload.common.config.sweep_config import SweepConfig, parse_duration

__all__ = [
    "OutputDefaults",
    "SweepConfig",
    "SweepDefaults",
    "VegetaDefaults",
    "parse_duration",
]
