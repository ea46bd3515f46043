"""
Texture kind classification from filename conventions.
"""

from enum import Enum
from typing import List, Tuple


class TextureKind(Enum):
    """Semantic type of a texture map."""
    AMBIENT_OCCLUSION = "ao"
    BASE_COLOR = "basecolor"
    NORMAL = "normal"
    SPECULAR = "spec"
    UNKNOWN = "unknown"


# Checked in order, first match wins. "_spec" has no trailing underscore,
# existing manifests depend on it.
KIND_PATTERNS: List[Tuple[str, TextureKind]] = [
    ("_ao_", TextureKind.AMBIENT_OCCLUSION),
    ("_basecolor_", TextureKind.BASE_COLOR),
    ("_nrm_", TextureKind.NORMAL),
    ("_spec", TextureKind.SPECULAR),
]


def classify(filename: str) -> TextureKind:
    """
    Classify a texture from its filename.
    
    Args:
        filename: Texture filename as written in the manifest
        
    Returns:
        Matching TextureKind, UNKNOWN when no pattern matches
    """
    for pattern, kind in KIND_PATTERNS:
        if pattern in filename:
            return kind
    return TextureKind.UNKNOWN
