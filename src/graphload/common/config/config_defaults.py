# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0


class SweepDefaults:
    WORKER_COUNTS = [10]
    RATES = [500]
    # Must exceed the Prometheus scrape interval of the target so every run lands in
    # at least one metrics sample.
    DURATION = 30.0
    METRICS_INTERVAL = 15.0
    COOLDOWN_SECONDS = 0.0
    FAILURE_POLICY = "fail-fast"


class VegetaDefaults:
    BINARY = "vegeta"
    TARGET_FORMAT = "http"
    STDERR_TAIL_CHARS = 2000


class OutputDefaults:
    LOG_LEVEL = "INFO"
    TEMP_DIR_PREFIX = "graphload-"
