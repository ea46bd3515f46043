"""
Manifest parsing: filename classification, flag interpretation and line parsing.
"""

from .classifier import TextureKind, classify
from .flags import ProcessFlag, interpret
from .manifest import TextureRecord, ParseResult, parse_line, parse_manifest, parse

__all__ = [
    "TextureKind",
    "classify",
    "ProcessFlag",
    "interpret",
    "TextureRecord",
    "ParseResult",
    "parse_line",
    "parse_manifest",
    "parse",
]
