"""
UDIM Generator

Turns a texture manifest (one texture filename plus processing flags per line)
into a makefile fragment that drives mipmap generation for UDIM texture sets.
"""

__version__ = "0.1.0"

from .config import GeneratorConfig
from .errors import (
    UdimError,
    InputNotFoundError,
    InputEmptyError,
    MalformedLineError,
    UnrecognizedFlagWarning,
    SinkWriteError,
)
from .parsing import TextureKind, ProcessFlag, TextureRecord, classify, interpret, parse_line, parse
from .processing.makefile import MakefileGenerator
from .pipeline import UdimBuild

__all__ = [
    "GeneratorConfig",
    "UdimError",
    "InputNotFoundError",
    "InputEmptyError",
    "MalformedLineError",
    "UnrecognizedFlagWarning",
    "SinkWriteError",
    "TextureKind",
    "ProcessFlag",
    "TextureRecord",
    "classify",
    "interpret",
    "parse_line",
    "parse",
    "MakefileGenerator",
    "UdimBuild",
]
