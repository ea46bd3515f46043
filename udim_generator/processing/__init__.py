"""
Output generation for parsed manifests.
"""

from .makefile import MakefileGenerator, MipOptions, MipRule

__all__ = [
    "MakefileGenerator",
    "MipOptions",
    "MipRule",
]
