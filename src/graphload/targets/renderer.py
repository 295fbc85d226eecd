# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Rendering of vegeta http-format target templates."""

import logging
import re
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from urllib.parse import urlsplit

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from graphload.common.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

__all__ = [
    "PLACEHOLDER",
    "Target",
    "TargetSpec",
    "TargetTemplate",
    "parse_targets",
    "validate_base_url",
]

PLACEHOLDER = "GRAPH_URL"

_DEFAULT_TEMPLATE = "default.targets"
_REQUEST_LINE = re.compile(r"^(?P<method>[A-Z]+)\s+(?P<url>\S+)$")
_HEADER_LINE = re.compile(r"^(?P<name>[^:\s]+):\s*(?P<value>.*)$")

_url_adapter = TypeAdapter(AnyHttpUrl)


def validate_base_url(url: str | None) -> str:
    """Validate the endpoint base URL substituted into the template.

    Args:
        url: Raw URL, typically from the GRAPH_URL environment variable

    Returns:
        The URL with surrounding whitespace stripped

    Raises:
        ConfigurationError: If the URL is unset, empty, not an absolute http(s) URL,
            or contains the placeholder token itself
    """
    if url is None or not url.strip():
        raise ConfigurationError(
            f"{PLACEHOLDER} is not set. Export the graph endpoint URL, e.g. "
            f"{PLACEHOLDER}=http://localhost:8081/api/upgrades_info/v1/graph"
        )
    url = url.strip()
    if any(ch.isspace() for ch in url):
        raise ConfigurationError(f"Invalid graph URL '{url}': must not contain whitespace")
    if PLACEHOLDER in url:
        raise ConfigurationError(
            f"Invalid graph URL '{url}': must not contain the placeholder '{PLACEHOLDER}'"
        )
    try:
        _url_adapter.validate_python(url)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid graph URL '{url}': {e.errors()[0]['msg']}"
        ) from e
    return url


@dataclass(frozen=True, slots=True)
class Target:
    """A single HTTP request definition issued repeatedly during an attack.

    Attributes:
        method: HTTP method, e.g. "GET"
        url: Absolute request URL
        headers: Header name/value pairs, in file order (names may repeat)
        body: Path of the request body file (``@path`` line), if any
    """

    method: str
    url: str
    headers: tuple[tuple[str, str], ...] = ()
    body: str | None = None


def parse_targets(text: str) -> list[Target]:
    """Parse vegeta's http target format.

    Each target is a ``METHOD URL`` line followed by optional ``Name: value`` header
    lines and an optional ``@body`` line. Targets are separated by blank lines and
    lines starting with ``#`` are comments.

    Raises:
        ConfigurationError: On any line that does not fit the format, or on a
            request URL that is not absolute http(s)
    """
    targets: list[Target] = []
    current: dict | None = None

    def start(lineno: int, match: re.Match) -> dict:
        url = match.group("url")
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ConfigurationError(
                f"Line {lineno}: target URL '{url}' is not an absolute http(s) URL"
            )
        return {"method": match.group("method"), "url": url, "headers": [], "body": None}

    def flush() -> None:
        nonlocal current
        if current is not None:
            targets.append(
                Target(
                    method=current["method"],
                    url=current["url"],
                    headers=tuple(current["headers"]),
                    body=current["body"],
                )
            )
            current = None

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            flush()
            continue
        if line.startswith("#"):
            continue

        match = _REQUEST_LINE.match(line)
        if current is None:
            if match is None:
                raise ConfigurationError(
                    f"Line {lineno}: expected 'METHOD URL', got '{line}'"
                )
            current = start(lineno, match)
            continue

        if line.startswith("@"):
            if current["body"] is not None:
                raise ConfigurationError(f"Line {lineno}: duplicate body line")
            current["body"] = line[1:]
            continue

        # Request lines may follow each other without a blank separator
        if match is not None:
            flush()
            current = start(lineno, match)
            continue

        header = _HEADER_LINE.match(line)
        if header is None:
            raise ConfigurationError(
                f"Line {lineno}: expected 'Header: value' or '@body', got '{line}'"
            )
        current["headers"].append((header.group("name"), header.group("value")))

    flush()
    return targets


@dataclass(frozen=True, slots=True)
class TargetSpec:
    """Rendered target list, ready to be fed to ``vegeta attack -format http``.

    Attributes:
        text: Rendered template text, byte-for-byte what vegeta reads
        targets: Parsed request definitions, in file order
        base_url: URL that was substituted for the placeholder
    """

    text: str
    targets: tuple[Target, ...] = field(default_factory=tuple)
    base_url: str = ""

    def write(self, path: Path) -> Path:
        """Write the rendered targets to ``path`` and return it."""
        path = Path(path)
        path.write_text(self.text, encoding="utf-8")
        logger.debug(f"Wrote {len(self.targets)} target(s) to {path}")
        return path


@dataclass(frozen=True, slots=True)
class TargetTemplate:
    """Static target definitions containing a placeholder for the endpoint URL."""

    text: str
    placeholder: str = PLACEHOLDER
    source: str = "<string>"

    @classmethod
    def from_file(cls, path: Path) -> "TargetTemplate":
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot read target template {path}: {e}") from e
        return cls(text=text, source=str(path))

    @classmethod
    def default(cls) -> "TargetTemplate":
        """Load the target template shipped with the package."""
        text = (
            resources.files("graphload.targets")
            .joinpath(_DEFAULT_TEMPLATE)
            .read_text(encoding="utf-8")
        )
        return cls(text=text, source=f"graphload.targets/{_DEFAULT_TEMPLATE}")

    def render(self, base_url: str) -> TargetSpec:
        """Substitute ``base_url`` for every placeholder occurrence.

        All other characters are left untouched. Rendering the same template with the
        same URL always yields the same text.

        Raises:
            ConfigurationError: If the URL is invalid, the template has no placeholder,
                or the rendered text is not a valid target list
        """
        base_url = validate_base_url(base_url)
        occurrences = self.text.count(self.placeholder)
        if occurrences == 0:
            raise ConfigurationError(
                f"Target template {self.source} does not contain the placeholder "
                f"'{self.placeholder}'"
            )

        text = self.text.replace(self.placeholder, base_url)
        targets = parse_targets(text)
        if not targets:
            raise ConfigurationError(f"Target template {self.source} defines no targets")

        logger.debug(
            f"Rendered {occurrences} placeholder(s) into {len(targets)} target(s) "
            f"from {self.source}"
        )
        return TargetSpec(text=text, targets=tuple(targets), base_url=base_url)
