# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from collections.abc import Callable
from pathlib import Path
from unittest.mock import Mock

import orjson
import pytest

from graphload.vegeta.client import VegetaClient

GRAPH_URL = "http://localhost:8081/api/upgrades_info/v1/graph"

MS = 1_000_000


def _encode_results(latencies_ns: list[int]) -> str:
    lines = []
    for seq, latency in enumerate(latencies_ns):
        lines.append(
            orjson.dumps(
                {
                    "attack": "",
                    "seq": seq,
                    "code": 200,
                    "timestamp": "2026-01-01T00:00:00Z",
                    "latency": latency,
                    "bytes_out": 0,
                    "bytes_in": 512,
                    "error": "",
                    "body": None,
                    "method": "GET",
                    "url": GRAPH_URL,
                    "headers": {},
                }
            ).decode()
        )
    return "\n".join(lines) + "\n"


def _write_artifact(path: Path, content: bytes = b"\x00vegeta-gob") -> Path:
    path.write_bytes(content)
    return path


@pytest.fixture
def graph_url() -> str:
    return GRAPH_URL


@pytest.fixture
def encode_results() -> Callable[[list[int]], str]:
    """Build `vegeta encode -to json` output for the given latencies (ns)."""
    return _encode_results


@pytest.fixture
def write_artifact() -> Callable[..., Path]:
    """Write a stand-in binary result artifact."""
    return _write_artifact


@pytest.fixture
def mock_client() -> Mock:
    """vegeta client whose attack writes a non-empty artifact."""
    client = Mock(spec=VegetaClient)

    def attack(targets_file, workers, rate, duration, output, **kwargs):
        _write_artifact(Path(output))

    client.attack.side_effect = attack
    client.report.return_value = (
        "Requests      [total, rate, throughput]  15000, 500.03, 499.98\n"
    )
    client.encode.return_value = _encode_results([10 * MS, 60 * MS])
    return client
