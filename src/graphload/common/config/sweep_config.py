# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import re
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from graphload.common.config.config_defaults import (
    OutputDefaults,
    SweepDefaults,
    VegetaDefaults,
)
from graphload.common.exceptions import ConfigurationError
from graphload.orchestrator.models import FailurePolicy
from graphload.targets.renderer import validate_base_url

_DURATION_PATTERN = re.compile(r"^\s*(?P<value>\d+(?:\.\d+)?)\s*(?P<unit>ms|s|m|h)?\s*$")
_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


def _parse_int_list(name: str, v: Any) -> list[int]:
    """Parse a comma-separated CLI value ("10,50,100") into a list of ints."""
    if isinstance(v, bool):
        raise ValueError(f"Invalid {name} value: {v!r}")
    if isinstance(v, int):
        return [v]
    if isinstance(v, (list, tuple)):
        values = []
        for item in v:
            values.extend(_parse_int_list(name, item))
        return values
    if isinstance(v, str):
        parts = [part.strip() for part in v.split(",") if part.strip()]
        if not parts:
            raise ValueError(
                f"Invalid {name} list: '{v}'. Provide at least one positive integer, "
                f"e.g. --{name} 10 or --{name} 10,50,100"
            )
        values = []
        for part in parts:
            try:
                values.append(int(part))
            except ValueError as err:
                raise ValueError(
                    f"Invalid {name} list: '{v}'. Failed to parse value: '{part}'. "
                    f"All values must be positive integers (>= 1)."
                ) from err
        return values
    raise ValueError(
        f"Invalid {name} type {type(v).__name__}. Expected int, str or list[int]."
    )


def parse_duration(v: Any) -> float:
    """Parse a duration given as seconds or as a string such as "30s", "500ms", "2m"."""
    if isinstance(v, bool):
        raise ValueError(f"Invalid duration: {v!r}")
    if isinstance(v, (int, float)):
        return float(v)
    if isinstance(v, str):
        match = _DURATION_PATTERN.match(v)
        if match is None:
            raise ValueError(
                f"Invalid duration: '{v}'. Use seconds (30) or a unit suffix "
                f"(500ms, 30s, 2m, 1h)."
            )
        unit = match.group("unit") or "s"
        return float(match.group("value")) * _DURATION_UNITS[unit]
    raise ValueError(f"Invalid duration type {type(v).__name__}")


class SweepConfig(BaseModel):
    """Configuration of one load-test sweep against a graph endpoint."""

    graph_url: Annotated[
        str,
        Field(
            description="Base URL substituted for GRAPH_URL in the target template.",
        ),
    ]

    worker_counts: Annotated[
        list[int],
        Field(
            description="Worker counts to sweep. Comma-separated on the CLI (e.g. 10,50,100).",
        ),
    ] = Field(default_factory=lambda: list(SweepDefaults.WORKER_COUNTS))

    rates: Annotated[
        list[int],
        Field(
            description="Request rates (requests/second) to sweep. Comma-separated on the CLI.",
        ),
    ] = Field(default_factory=lambda: list(SweepDefaults.RATES))

    duration: Annotated[
        float,
        Field(
            gt=0,
            description="Duration of every attack in seconds.",
        ),
    ] = SweepDefaults.DURATION

    metrics_interval: Annotated[
        float,
        Field(
            ge=0,
            description="Metrics collection interval of the target (seconds). Every attack "
            "must last longer than this or the target's metrics will miss the run. "
            "Use 0 to disable the check.",
        ),
    ] = SweepDefaults.METRICS_INTERVAL

    cooldown_seconds: Annotated[
        float,
        Field(
            ge=0,
            description="Pause between consecutive attacks so the target can drain connections.",
        ),
    ] = SweepDefaults.COOLDOWN_SECONDS

    failure_policy: Annotated[
        FailurePolicy,
        Field(
            description="'fail-fast' aborts on the first failed attack, "
            "'best-effort' records the failure and continues.",
        ),
    ] = FailurePolicy(SweepDefaults.FAILURE_POLICY)

    targets_path: Annotated[
        Path | None,
        Field(description="Target template file. Uses the packaged template when unset."),
    ] = None

    vegeta_bin: Annotated[
        str,
        Field(min_length=1, description="vegeta executable name or path."),
    ] = VegetaDefaults.BINARY

    keep_artifacts: Annotated[
        Path | None,
        Field(description="Copy result artifacts here before the temporary directory is removed."),
    ] = None

    export_dir: Annotated[
        Path | None,
        Field(description="Write sweep_summary.json and sweep_summary.csv here."),
    ] = None

    dry_run: bool = False

    log_level: str = OutputDefaults.LOG_LEVEL

    @field_validator("graph_url", mode="before")
    @classmethod
    def validate_graph_url(cls, v: Any) -> str:
        try:
            return validate_base_url(v)
        except ConfigurationError as e:
            raise ValueError(str(e)) from e

    @field_validator("worker_counts", mode="before")
    @classmethod
    def parse_worker_counts(cls, v: Any) -> list[int]:
        return _parse_int_list("workers", v)

    @field_validator("rates", mode="before")
    @classmethod
    def parse_rates(cls, v: Any) -> list[int]:
        return _parse_int_list("rate", v)

    @field_validator("worker_counts", "rates")
    @classmethod
    def validate_sweep_values(cls, v: list[int]) -> list[int]:
        if not v:
            raise ValueError("At least one value is required")
        invalid = [value for value in v if value < 1]
        if invalid:
            raise ValueError(f"Values must be positive integers (>= 1), got {invalid}")
        if len(set(v)) != len(v):
            raise ValueError(f"Duplicate values are not allowed: {v}")
        return v

    @field_validator("duration", "metrics_interval", "cooldown_seconds", mode="before")
    @classmethod
    def parse_durations(cls, v: Any) -> float:
        return parse_duration(v)

    @model_validator(mode="after")
    def validate_duration_exceeds_metrics_interval(self) -> "SweepConfig":
        if self.metrics_interval > 0 and self.duration <= self.metrics_interval:
            raise ValueError(
                f"Attack duration ({self.duration}s) must be larger than the metrics "
                f"collection interval ({self.metrics_interval}s), otherwise the target's "
                f"metrics may not contain the run. Increase --duration or pass "
                f"--metrics-interval 0 to disable this check."
            )
        return self

    @classmethod
    def from_options(cls, **options: Any) -> "SweepConfig":
        """Build a config, converting validation errors into a ConfigurationError."""
        try:
            return cls(**options)
        except ValidationError as e:
            messages = []
            for error in e.errors():
                location = ".".join(str(part) for part in error["loc"]) or "config"
                messages.append(f"{location}: {error['msg']}")
            raise ConfigurationError("; ".join(messages)) from e
