#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Whole-document conversion tests."""
# -----------------------------------------------------------------------------

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

import j2m
from j2m.services.converter import convert


# =============================================================================
# Passthrough
# =============================================================================

@pytest.mark.parametrize("text", [
    "",
    "Just a sentence.",
    "Two lines\nof plain text",
    "Trailing newline\n",
    "\n\n\n",
    "Prices: 3 - 2 = 1, 2 * 3 = 6, a + b.",
    "email me at someone@example.com",
])
def test_plain_text_is_unchanged(text):
    assert convert(text) == text


def test_crlf_line_endings_are_preserved():
    assert convert("h1. Title\r\nplain\r\n") == "# Title\r\nplain\r\n"


def test_package_exports_convert():
    assert j2m.convert is convert
    assert j2m.convert("*x*") == "**x**"


# =============================================================================
# Realistic document
# =============================================================================

def test_realistic_ticket():
    src = "\n".join([
        "h1. Release notes",
        "bq. Read this first.",
        "* Fixed *crash* on start",
        "** Details in [JIRA-1|https://jira.example.com/browse/JIRA-1]",
        "# Step one",
        "## Sub-step with {{code}}",
        "{code:python}",
        "def f(x):",
        "    return x * 2  # *not bold*",
        "{code}",
        "See !https://example.com/shot.png! and [https://example.com].",
        "{color:red}Danger:{color} this is +new+ and -old- stuff",
    ])
    want = "\n".join([
        "# Release notes",
        "> Read this first.",
        "* Fixed **crash** on start",
        "  * Details in [JIRA-1](https://jira.example.com/browse/JIRA-1)",
        "1. Step one",
        "   1. Sub-step with `code`",
        "```python",
        "def f(x):",
        "    return x * 2  # *not bold*",
        "```",
        "See ![](https://example.com/shot.png) and <https://example.com>.",
        "Danger: this is <ins>new</ins> and ~~old~~ stuff",
    ])
    assert convert(src) == want


# =============================================================================
# Isolation between calls
# =============================================================================

def test_color_state_does_not_leak_between_calls():
    convert("{color:red}never closed")
    assert convert("plain {color}x") == "plain x"


def test_concurrent_calls_are_independent():
    docs = [f"h{i % 6 + 1}. Title {i}\n{{code}}body {i}{{code}}\n* item {i}" for i in range(50)]
    expected = [convert(d) for d in docs]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(convert, docs))
    assert results == expected


# -----------------------------------------------------------------------------
