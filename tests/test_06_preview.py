"""
Tests for the HTML preview renderer.

Pygments is always installed alongside j2m, so the highlighted path is tested
directly (div.highlight with span elements).
"""
from __future__ import annotations

from j2m.services.converter import convert
from j2m.services.preview import highlight_code, render_preview


# ── Fenced code ───────────────────────────────────────────────────────────────

def test_converted_code_block_is_highlighted():
    html = render_preview(convert("{code:python}\nx = 1\n{code}"))
    assert '<div class="highlight">' in html
    assert "<span" in html


def test_noformat_block_renders_as_pre():
    html = render_preview(convert("{noformat}\n<b>raw</b>\n{noformat}"))
    assert "<pre><code>" in html
    assert "&lt;b&gt;raw&lt;/b&gt;" in html


def test_unknown_language_falls_back_to_text():
    html = highlight_code("hello", "zzznotalang")
    assert '<div class="highlight">' in html
    assert "hello" in html


# ── Inline markup ─────────────────────────────────────────────────────────────

def test_inline_code_is_escaped():
    html = render_preview(convert("{{<tag>}}"))
    assert "<code>" in html
    assert "<tag>" not in html


def test_strikethrough_renders_as_del():
    html = render_preview(convert("it was -gone- today"))
    assert "<del>gone</del>" in html


def test_sup_and_sub_pass_through():
    html = render_preview(convert("E = mc^2^ and H~2~O"))
    assert "<sup>2</sup>" in html
    assert "<sub>2</sub>" in html


# ── Structure ─────────────────────────────────────────────────────────────────

def test_heading_and_list():
    html = render_preview(convert("h2. Title\n\n* one\n* two"))
    assert "<h2>Title</h2>" in html
    assert html.count("<li>") == 2


def test_blockquote():
    html = render_preview(convert("bq. quoted"))
    assert "<blockquote>" in html


def test_named_link():
    html = render_preview(convert("[Google|http://google.com]"))
    assert '<a href="http://google.com">Google</a>' in html
