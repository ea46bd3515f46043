"""
Manifest flag tokens and their meaning.
"""

from enum import Enum
from typing import Dict, Iterable, List


class ProcessFlag(Enum):
    """Processing directive attached to a manifest line."""
    AMBIENT_OCCLUSION = "-ao"
    NORMAL = "-nrm"
    HIGH_PRECISION = "-highprec"
    SPECULAR = "-spec"
    UNRECOGNIZED = "unrecognized"


FLAG_TOKENS: Dict[str, ProcessFlag] = {
    "-ao": ProcessFlag.AMBIENT_OCCLUSION,
    "-nrm": ProcessFlag.NORMAL,
    "-highprec": ProcessFlag.HIGH_PRECISION,
    "-spec": ProcessFlag.SPECULAR,
}


def interpret(token: str) -> ProcessFlag:
    """Map a flag token to its ProcessFlag, UNRECOGNIZED if unknown."""
    return FLAG_TOKENS.get(token, ProcessFlag.UNRECOGNIZED)


def interpret_all(tokens: Iterable[str]) -> List[ProcessFlag]:
    """Interpret tokens in order; unknown tokens are kept as UNRECOGNIZED."""
    return [interpret(token) for token in tokens]
