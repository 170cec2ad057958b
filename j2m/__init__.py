"""
j2m: convert Jira wiki markup to Markdown.

    >>> from j2m import convert
    >>> convert("h2. Bigger heading")
    '## Bigger heading'
"""

from j2m._version import __version__
from j2m.services.converter import BlockReinsertionError, ConversionError, convert

__all__ = ["__version__", "convert", "ConversionError", "BlockReinsertionError"]
