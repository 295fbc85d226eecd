# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Target template rendering."""

from graphload.targets.renderer import (
    PLACEHOLDER,
    Target,
    TargetSpec,
    TargetTemplate,
    parse_targets,
    validate_base_url,
)

__all__ = [
    "PLACEHOLDER",
    "Target",
    "TargetSpec",
    "TargetTemplate",
    "parse_targets",
    "validate_base_url",
]
