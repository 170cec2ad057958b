#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Jira wiki markup → Markdown converter
=====================================
Converts text written in Jira / Confluence wiki markup into Markdown.

The document is run through four passes, always in this order:

  1. extract_code_blocks   {code}/{noformat} regions are cut out and replaced
                           with placeholders so nothing below can touch them
  2. transform_lines       state carried across lines: {color} spans and
                           nested * / # list markers
  3. apply_inline_rules    per-line pattern substitutions (INLINE_RULES)
  4. reinsert_code_blocks  placeholders become Markdown fenced blocks

Supported syntax
----------------
*bold*  _italic_  _*bold italic*_  {{monospace}}   -strike-  +insert+
^super^  ~sub~  h1. … h6.  bq.  [url]  [name|url]  !image!  [!image!|url]
{code[:lang][|attr=val…]} … {code}   {noformat} … {noformat}
{color:value} … {color}   * / ** / #  / ## lists

Anything else is passed through unchanged.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, NamedTuple, Optional, Union

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Errors
# -----------------------------------------------------------------------------

class ConversionError(RuntimeError):
    """Internal defect in the conversion pipeline (never raised for bad markup)."""


class BlockReinsertionError(ConversionError):
    """Placeholders left in the text do not line up with the extracted code blocks."""

    def __init__(self, expected: int, found: int) -> None:
        self.expected = expected
        self.found    = found
        super().__init__(
            f"code block reinsertion mismatch: {expected} extracted, "
            f"{found} placeholder(s) found"
        )


# -----------------------------------------------------------------------------
# Pass 1: code block extraction
# -----------------------------------------------------------------------------

# {code:xml|title=Foo|borderStyle=dashed} … {code}   /   {noformat} … {noformat}
_BLOCK_RE = re.compile(
    r"(?<!\{)\{code(?::(?P<attrs>[^}]*))?\}(?P<code>.*?)\{code\}(?!\})"
    r"|(?<!\{)\{noformat\}(?P<pre>.*?)\{noformat\}(?!\})",
    re.DOTALL,
)

# Panel styling keys accepted by {code}; none of them is ever a language.
_STYLE_KEYS = frozenset({
    "title", "borderstyle", "bordercolor", "borderwidth", "bgcolor",
    "titlebgcolor", "linenumbers", "collapse", "firstline", "theme",
})

# NUL never appears in sane markup and is not a delimiter for any inline rule,
# so a placeholder always survives the later passes in one piece.
_PLACEHOLDER_PREFIX = "\x00J2MCODE"
_PLACEHOLDER_END    = "\x00"


@dataclass(frozen=True)
class CodeBlock:
    """One extracted {code} or {noformat} region."""

    index: int
    language: Optional[str]
    body: str

    def fence(self) -> str:
        lang = self.language or ""
        if not self.body:
            return f"```{lang}\n```"
        return f"```{lang}\n{self.body}\n```"


class Extraction(NamedTuple):
    text: str                 # document with every block replaced by a placeholder
    blocks: list[CodeBlock]   # in order of appearance
    marker: str               # placeholder prefix chosen for this document


def _code_language(attrs: str | None) -> str | None:
    """Return the first bare (non ``key=value``, non-styling) attribute, if any."""
    if not attrs:
        return None
    for part in attrs.split("|"):
        part = part.strip()
        if not part or "=" in part or part.lower() in _STYLE_KEYS:
            continue
        return part
    return None


def _trim_body(body: str) -> str:
    # Exactly one line break next to each marker belongs to the markup.
    if body.startswith("\r\n"):
        body = body[2:]
    elif body.startswith("\n"):
        body = body[1:]
    if body.endswith("\r\n"):
        body = body[:-2]
    elif body.endswith("\n"):
        body = body[:-1]
    return body


def _unique_marker(text: str) -> str:
    # Removing color tags in pass 2 can join text into a fake placeholder.
    visible = _COLOR_TAG_RE.sub("", text)
    marker  = _PLACEHOLDER_PREFIX
    while marker in text or marker in visible:
        marker += _PLACEHOLDER_END
    return marker


def placeholder(marker: str, index: int) -> str:
    return f"{marker}{index}{_PLACEHOLDER_END}"


def extract_code_blocks(text: str) -> Extraction:
    """Cut every {code}/{noformat} region out of *text*, left to right."""
    marker = _unique_marker(text)
    blocks: list[CodeBlock] = []

    def _extract(m: re.Match) -> str:
        if m.group("pre") is not None:
            lang = None
            body = m.group("pre")
        else:
            lang = _code_language(m.group("attrs"))
            body = m.group("code")
        block = CodeBlock(index=len(blocks), language=lang, body=_trim_body(body))
        blocks.append(block)
        return placeholder(marker, block.index)

    stripped = _BLOCK_RE.sub(_extract, text)
    if blocks:
        log.debug("Extracted %d code block(s)", len(blocks))
    return Extraction(stripped, blocks, marker)


# -----------------------------------------------------------------------------
# Pass 2: line state: colors and nested lists
# -----------------------------------------------------------------------------

_COLOR_TAG_RE = re.compile(r"\{color(?::(?P<value>[^}]*))?\}")

# Marker run at line start; must be followed by whitespace.
_LIST_RE = re.compile(r"^[ \t]*(?P<markers>[*#]+)[ \t]+(?P<rest>.*)$")
_LAST_RUN_RE = re.compile(r"(?:\*+|#+)$")

_UNORDERED_INDENT = "  "
_ORDERED_INDENT   = " " * len("1. ")


@dataclass
class LineState:
    """State carried from one line to the next; one instance per document."""

    in_color: bool = False


@dataclass(frozen=True)
class ListContext:
    ordered: bool
    depth: int

    @property
    def marker_kind(self) -> str:
        return "ordered" if self.ordered else "unordered"

    def prefix(self) -> str:
        if self.ordered:
            return _ORDERED_INDENT * (self.depth - 1) + "1. "
        return _UNORDERED_INDENT * (self.depth - 1) + "* "


def strip_color_tags(line: str, state: LineState) -> str:
    """Drop {color:…} / {color} tags from *line*, tracking whether a span is open."""
    def _strip(m: re.Match) -> str:
        state.in_color = m.group("value") is not None
        return ""
    return _COLOR_TAG_RE.sub(_strip, line)


def parse_list_marker(line: str) -> tuple[ListContext | None, str]:
    """Split a list line into its context and the item text.

    A change of marker kind inside the run (``*#``) starts a new run; only
    the last run counts.
    """
    m = _LIST_RE.match(line)
    if not m:
        return None, line
    run = _LAST_RUN_RE.search(m.group("markers")).group(0)
    return ListContext(ordered=run[0] == "#", depth=len(run)), m.group("rest")


def convert_list_item(line: str) -> str:
    ctx, rest = parse_list_marker(line)
    if ctx is None:
        return line
    return ctx.prefix() + rest


def transform_lines(text: str) -> str:
    """Rewrite color spans and list markers, one line at a time."""
    state = LineState()
    out: list[str] = []
    for line in text.split("\n"):
        line = strip_color_tags(line, state)
        out.append(convert_list_item(line))
    if state.in_color:
        log.debug("Unterminated {color} span at end of document")
    return "\n".join(out)


# -----------------------------------------------------------------------------
# Pass 3: inline rules
# -----------------------------------------------------------------------------

Replacement = Union[str, Callable[[re.Match], str]]


@dataclass(frozen=True)
class InlineRule:
    name: str
    pattern: re.Pattern
    replacement: Replacement = field(repr=False)

    def apply(self, line: str) -> str:
        return self.pattern.sub(self.replacement, line)


def _rule(name: str, pattern: str, replacement: Replacement) -> InlineRule:
    return InlineRule(name, re.compile(pattern), replacement)


# Order matters: earlier rules consume text later ones would partially match.
INLINE_RULES: tuple[InlineRule, ...] = (
    # _*text*_  and  *_text_*
    _rule(
        "bold_italic",
        r"(?<![\w*])(?:_\*(?!\s)(.+?)(?<!\s)\*_|\*_(?!\s)(.+?)(?<!\s)_\*)(?![\w*])",
        lambda m: f"***{m.group(1) or m.group(2)}***",
    ),
    _rule("bold",        r"(?<![^\W_]|\*)\*(?![\s*])(.+?)(?<![\s*])\*(?![^\W_]|\*)", r"**\1**"),
    _rule("italic",      r"(?<![\w_])_(?![\s_])(.+?)(?<![\s_])_(?![\w_])",   r"*\1*"),
    _rule("monospace",   r"\{\{(.+?)\}\}",                                    r"`\1`"),
    # Dashes must sit next to whitespace on the outside: " -gone- "
    _rule("strike",      r"(?<=\s)-(?![\s-])(.+?)(?<![\s-])-(?=\s)",          r"~~\1~~"),
    _rule("insert",      r"(?<![\w+])\+(?![\s+])(.+?)(?<![\s+])\+(?![\w+])",  r"<ins>\1</ins>"),
    _rule("superscript", r"(?<!\^)\^(?![\s^])(.+?)(?<![\s^])\^(?!\^)",        r"<sup>\1</sup>"),
    # Leaves the ~~ produced by "strike" alone.
    _rule("subscript",   r"(?<!~)~(?![\s~])(.+?)(?<![\s~])~(?!~)",            r"<sub>\1</sub>"),
    _rule(
        "linked_image",
        r"\[!([^!\s|\[\]]+)(?:\|[^!\]]*)?!\|([^\[\]\s]+)\]",
        r"[![](\1)](\2)",
    ),
    _rule("image",         r"(?<!\[)!([^!\s|\[\]]+)(?:\|[^!\]]*)?!", r"![](\1)"),
    _rule("named_link",    r"\[([^\[\]|]+)\|([^\[\]|\s]+)\]",       r"[\1](\2)"),
    _rule("unnamed_link",  r"(?<![!\]])\[([^\[\]|\s]+)\](?!\()",    r"<\1>"),
    _rule("header",        r"^h([1-6])\.[ \t]+", lambda m: "#" * int(m.group(1)) + " "),
    _rule("blockquote",    r"^bq\.[ \t]+",       "> "),
)


def apply_inline_rules(line: str, rules: tuple[InlineRule, ...] = INLINE_RULES) -> str:
    """Run every rule over a single line, in order."""
    for rule in rules:
        line = rule.apply(line)
    return line


# -----------------------------------------------------------------------------
# Pass 4: code block reinsertion
# -----------------------------------------------------------------------------

def reinsert_code_blocks(text: str, blocks: list[CodeBlock], marker: str) -> str:
    """Swap each placeholder back for its fenced block.

    Raises BlockReinsertionError unless exactly the recorded placeholders
    are present, once each, in their original order.
    """
    pattern = re.compile(re.escape(marker) + r"(\d+)" + re.escape(_PLACEHOLDER_END))
    found   = [int(m.group(1)) for m in pattern.finditer(text)]
    if found != [b.index for b in blocks]:
        raise BlockReinsertionError(expected=len(blocks), found=len(found))
    if not blocks:
        return text

    def _fence(m: re.Match) -> str:
        # A fence only opens or closes a block at the start of a line.
        fence = blocks[int(m.group(1))].fence()
        if m.start() > 0 and text[m.start() - 1] != "\n":
            fence = "\n" + fence
        if m.end() < len(text) and text[m.end()] != "\n":
            fence += "\n"
        return fence

    return pattern.sub(_fence, text)


# -----------------------------------------------------------------------------
# Public convert function
# -----------------------------------------------------------------------------

def convert(text: str) -> str:
    """Convert Jira wiki markup *text* to Markdown."""
    extraction = extract_code_blocks(text)
    body  = transform_lines(extraction.text)
    body  = "\n".join(apply_inline_rules(line) for line in body.split("\n"))
    return reinsert_code_blocks(body, extraction.blocks, extraction.marker)


# -----------------------------------------------------------------------------
