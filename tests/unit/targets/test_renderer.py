# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for target template rendering."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from graphload.common.exceptions import ConfigurationError
from graphload.targets.renderer import (
    PLACEHOLDER,
    Target,
    TargetTemplate,
    parse_targets,
    validate_base_url,
)

TEMPLATE = """\
GET GRAPH_URL?channel=stable-4.2
Accept: application/json

GET GRAPH_URL?channel=fast-4.2
Accept: application/json
X-Trace: GRAPH_URL
"""


class TestValidateBaseUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "http://localhost:8081/api/upgrades_info/v1/graph",
            "https://api.openshift.com/api/upgrades_info/v1/graph",
            "http://10.0.0.1",
        ],
    )
    def test_accepts_absolute_http_urls(self, url):
        assert validate_base_url(url) == url

    def test_strips_surrounding_whitespace(self):
        assert validate_base_url("  http://host/graph\n") == "http://host/graph"

    @pytest.mark.parametrize("url", [None, "", "   "])
    def test_rejects_unset_url(self, url):
        with pytest.raises(ConfigurationError, match="GRAPH_URL is not set"):
            validate_base_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "localhost:8081/graph",
            "ftp://host/graph",
            "/api/upgrades_info/v1/graph",
            "http://host/with space",
            "http://host/GRAPH_URL",
        ],
    )
    def test_rejects_malformed_url(self, url):
        with pytest.raises(ConfigurationError, match="Invalid graph URL"):
            validate_base_url(url)


class TestTargetTemplate:
    def test_render_replaces_every_placeholder(self, graph_url):
        spec = TargetTemplate(text=TEMPLATE).render(graph_url)

        assert PLACEHOLDER not in spec.text
        assert spec.text == TEMPLATE.replace(PLACEHOLDER, graph_url)
        assert spec.base_url == graph_url

    def test_render_parses_targets(self, graph_url):
        spec = TargetTemplate(text=TEMPLATE).render(graph_url)

        assert spec.targets == (
            Target(
                method="GET",
                url=f"{graph_url}?channel=stable-4.2",
                headers=(("Accept", "application/json"),),
            ),
            Target(
                method="GET",
                url=f"{graph_url}?channel=fast-4.2",
                headers=(("Accept", "application/json"), ("X-Trace", graph_url)),
            ),
        )

    def test_render_without_placeholder_raises(self, graph_url):
        template = TargetTemplate(text="GET http://static/graph\n", source="static.targets")
        with pytest.raises(ConfigurationError, match="static.targets.*placeholder"):
            template.render(graph_url)

    def test_render_with_invalid_url_raises(self):
        with pytest.raises(ConfigurationError):
            TargetTemplate(text=TEMPLATE).render("not a url")

    def test_render_comment_only_template_raises(self, graph_url):
        with pytest.raises(ConfigurationError, match="defines no targets"):
            TargetTemplate(text="# GRAPH_URL\n").render(graph_url)

    def test_default_template_renders(self, graph_url):
        spec = TargetTemplate.default().render(graph_url)

        assert len(spec.targets) >= 1
        assert all(t.url.startswith(graph_url) for t in spec.targets)
        assert all(("Accept", "application/json") in t.headers for t in spec.targets)

    def test_from_file(self, tmp_path, graph_url):
        path = tmp_path / "vegeta.targets"
        path.write_text(TEMPLATE)

        template = TargetTemplate.from_file(path)

        assert template.source == str(path)
        assert template.render(graph_url).text == TEMPLATE.replace(PLACEHOLDER, graph_url)

    def test_from_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Cannot read target template"):
            TargetTemplate.from_file(tmp_path / "missing.targets")

    def test_write(self, tmp_path, graph_url):
        spec = TargetTemplate(text=TEMPLATE).render(graph_url)
        path = spec.write(tmp_path / "targets.http")

        assert path.read_text() == spec.text

    @given(
        host=st.from_regex(r"[a-z][a-z0-9]{0,15}", fullmatch=True),
        port=st.integers(min_value=1, max_value=65535),
        path=st.from_regex(r"(/[a-z0-9_]{1,8}){0,4}", fullmatch=True),
    )
    def test_render_is_substitution_only_and_idempotent(self, host, port, path):
        url = f"http://{host}:{port}{path}"
        template = TargetTemplate(text=TEMPLATE)

        first = template.render(url)
        second = template.render(url)

        assert first.text == second.text
        # Re-rendering the output leaves it unchanged (no placeholders remain)
        assert first.text.replace(PLACEHOLDER, url) == first.text
        # Every non-placeholder character is preserved
        assert first.text.split(url) == TEMPLATE.split(PLACEHOLDER)


class TestParseTargets:
    def test_parses_body_and_back_to_back_targets(self):
        text = (
            "# comment\n"
            "POST http://host/graph\n"
            "Content-Type: application/json\n"
            "@/tmp/body.json\n"
            "GET http://host/graph?channel=a\n"
            "HEAD http://host/graph\n"
        )

        targets = parse_targets(text)

        assert [t.method for t in targets] == ["POST", "GET", "HEAD"]
        assert targets[0].body == "/tmp/body.json"
        assert targets[0].headers == (("Content-Type", "application/json"),)
        assert targets[1].headers == ()

    def test_header_without_request_line_raises(self):
        with pytest.raises(ConfigurationError, match="Line 1: expected 'METHOD URL'"):
            parse_targets("Accept: application/json\n")

    def test_relative_url_raises(self):
        with pytest.raises(ConfigurationError, match="not an absolute http"):
            parse_targets("GET /graph\n")

    def test_garbage_line_raises(self):
        with pytest.raises(ConfigurationError, match="Line 2"):
            parse_targets("GET http://host/graph\nthis is not a header\n")

    def test_duplicate_body_raises(self):
        with pytest.raises(ConfigurationError, match="duplicate body"):
            parse_targets("POST http://host/graph\n@a.json\n@b.json\n")
