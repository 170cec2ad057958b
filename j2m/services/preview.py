#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Preview renderer
================
Renders converted Markdown to HTML so a conversion can be eyeballed.

Markdown is rendered via mistune (tables, strikethrough, bare URLs); fenced
code is highlighted with Pygments.  Raw inline HTML (<ins>, <sup>, <sub>)
produced by the converter is passed through.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import html as _html

import mistune
from mistune.plugins.formatting import strikethrough
from mistune.plugins.table import table
from mistune.plugins.url import url
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

from j2m.core.config import get_settings


# -----------------------------------------------------------------------------

def highlight_code(code: str, lang: str) -> str:
    """Highlight *code* using Pygments.  Unknown languages render as plain text."""
    try:
        lexer = get_lexer_by_name(lang.strip(), stripall=True) if lang.strip() else TextLexer()
    except ClassNotFound:
        lexer = TextLexer()
    formatter = HtmlFormatter(nowrap=False, cssclass=get_settings().highlight_css_class)
    return highlight(code, lexer, formatter)


# -----------------------------------------------------------------------------

class _HighlightRenderer(mistune.HTMLRenderer):
    def codespan(self, text: str) -> str:
        return f'<code>{_html.escape(text)}</code>'

    def block_code(self, code: str, info: str | None = None) -> str:
        lang = info.split()[0] if info else ''
        if lang:
            return highlight_code(code, lang)
        return f'<pre><code>{_html.escape(code)}</code></pre>\n'


def _make_md_renderer():
    return mistune.create_markdown(
        renderer=_HighlightRenderer(escape=False),
        plugins=[table, strikethrough, url],
    )


_md_renderer = None


def _get_md_renderer():
    global _md_renderer
    if _md_renderer is None:
        _md_renderer = _make_md_renderer()
    return _md_renderer


# -----------------------------------------------------------------------------

def render_preview(markdown: str) -> str:
    """Render *markdown* to an HTML fragment."""
    return _get_md_renderer()(markdown)


# -----------------------------------------------------------------------------
