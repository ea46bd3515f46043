"""
Manifest parsing: one texture record per non-blank manifest line.

A manifest line reads ``<filename> [flag ...]``, e.g.::

    hairpin_001_nrm_1001.tga -nrm -highprec
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple, Union

from .classifier import TextureKind, classify
from .flags import ProcessFlag, interpret_all
from ..errors import MalformedLineError, UdimError, UnrecognizedFlagWarning

logger = logging.getLogger(__name__)

ManifestLine = Union[str, bytes]


@dataclass(frozen=True)
class TextureRecord:
    """A parsed manifest line."""
    filename: str
    kind: TextureKind
    flags: Tuple[ProcessFlag, ...] = ()
    tokens: Tuple[str, ...] = ()
    
    def __post_init__(self):
        """Validate record after initialization."""
        if not self.filename:
            raise ValueError("filename cannot be empty")
    
    @property
    def unrecognized_tokens(self) -> List[str]:
        """Get flag tokens that did not match the flag table."""
        return [
            token for token, flag in zip(self.tokens, self.flags)
            if flag is ProcessFlag.UNRECOGNIZED
        ]


@dataclass
class ParseResult:
    """Records parsed from a manifest plus recoverable problems met on the way."""
    records: List[TextureRecord] = field(default_factory=list)
    warnings: List[UdimError] = field(default_factory=list)
    
    @property
    def has_warnings(self) -> bool:
        """Check if parsing produced warnings."""
        return len(self.warnings) > 0
    
    def add_warning(self, warning: UdimError) -> None:
        """Record a recoverable problem and log it."""
        logger.warning(str(warning))
        self.warnings.append(warning)


def parse_line(line: str) -> TextureRecord:
    """
    Parse one manifest line.
    
    Args:
        line: Raw manifest line
        
    Returns:
        TextureRecord for the line
        
    Raises:
        MalformedLineError: If the line has no tokens
    """
    parts = line.split()
    if not parts:
        raise MalformedLineError("line has no filename")
    
    filename, tokens = parts[0], tuple(parts[1:])
    return TextureRecord(
        filename=filename,
        kind=classify(filename),
        flags=tuple(interpret_all(tokens)),
        tokens=tokens,
    )


def parse_manifest(lines: Iterable[ManifestLine], encoding: str = "utf-8") -> ParseResult:
    """
    Parse every manifest line, keeping line order.
    
    Blank lines are skipped silently. Lines that cannot be decoded or parsed
    are skipped and reported in the result warnings; parsing carries on with
    the following lines.
    
    Args:
        lines: Manifest lines as text or raw bytes
        encoding: Encoding used for byte lines
        
    Returns:
        ParseResult with records in manifest order
    """
    result = ParseResult()
    
    for line_number, raw_line in enumerate(lines, start=1):
        if isinstance(raw_line, bytes):
            try:
                line = raw_line.decode(encoding)
            except UnicodeDecodeError as e:
                result.add_warning(MalformedLineError(f"could not be read ({e.reason})", line_number))
                continue
        else:
            line = raw_line
        
        if not line.strip():
            continue
        
        try:
            record = parse_line(line)
        except MalformedLineError as e:
            result.add_warning(MalformedLineError(str(e), line_number))
            continue
        
        # Logged by the generator when the flag is folded
        for token in record.unrecognized_tokens:
            result.warnings.append(UnrecognizedFlagWarning(token, record.filename, line_number))
        
        result.records.append(record)
    
    logger.debug(f"Parsed {len(result.records)} texture records")
    return result


def parse(lines: Iterable[ManifestLine]) -> List[TextureRecord]:
    """Parse manifest lines and return only the records."""
    return parse_manifest(lines).records
