"""
Build coordinator: checks the input manifest, parses it, renders the makefile
fragment and writes it to a file or standard output.
"""

import sys
import logging
from pathlib import Path
from typing import List, Optional, Union, TextIO

from .config import GeneratorConfig
from .errors import InputNotFoundError, InputEmptyError, SinkWriteError, UdimError
from .parsing.manifest import TextureRecord, parse_manifest
from .processing.makefile import MakefileGenerator

_stream_handler: Optional[logging.StreamHandler] = None


def check_input(input_file: Union[str, Path]) -> Path:
    """
    Make sure the manifest exists and is not empty.

    Raises:
        InputNotFoundError: If the path is missing or not a regular file
        InputEmptyError: If the file has zero bytes
    """
    path = Path(input_file)

    if not path.exists():
        raise InputNotFoundError(path)
    if not path.is_file():
        raise InputNotFoundError(path, "is not a file")
    if path.stat().st_size == 0:
        raise InputEmptyError(path)

    return path


def read_manifest_lines(input_file: Union[str, Path]) -> List[bytes]:
    """Read all manifest lines as raw bytes; decoding is left to the parser."""
    with open(input_file, 'rb') as f:
        return f.readlines()


class UdimBuild:
    """
    Result of one manifest-to-makefile run.

    Holds the input path, the parsed records, recoverable warnings and the
    generated makefile text, and writes that text to a sink on request.
    """

    def __init__(self, input_file: Union[str, Path], config: Optional[GeneratorConfig] = None,
                 generator: Optional[MakefileGenerator] = None, log_level: int = logging.WARNING):
        """
        Initialize build for a manifest.

        Args:
            input_file: Path to the texture manifest
            config: Generator configuration
            generator: Makefile generator, built from config when omitted
            log_level: Level for the udim_generator logger
        """
        self.input_file = Path(input_file)
        self.config = config or GeneratorConfig()
        self.generator = generator or MakefileGenerator(self.config)
        self.logger = self._setup_logging(log_level)

        self.records: List[TextureRecord] = []
        self.warnings: List[UdimError] = []
        self.content: str = ""

    @classmethod
    def generate(cls, input_file: Union[str, Path], config: Optional[GeneratorConfig] = None,
                 generator: Optional[MakefileGenerator] = None, log_level: int = logging.WARNING) -> "UdimBuild":
        """Create a build for the manifest and run it."""
        build = cls(input_file, config=config, generator=generator, log_level=log_level)
        build.run()
        return build

    def _setup_logging(self, log_level: int = logging.WARNING) -> logging.Logger:
        """Set up logging for the build, writing to the current stderr."""
        global _stream_handler

        logger = logging.getLogger("udim_generator")
        logger.setLevel(log_level)

        # sys.stderr may have been swapped since the last build
        if _stream_handler is not None:
            logger.removeHandler(_stream_handler)
            _stream_handler = None

        if not logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)
            _stream_handler = handler

        return logger

    @property
    def has_warnings(self) -> bool:
        """Check if the run produced recoverable warnings."""
        return len(self.warnings) > 0

    def run(self) -> str:
        """
        Parse the manifest and render the makefile fragment.

        Returns:
            Generated makefile text

        Raises:
            InputNotFoundError: If the manifest does not exist
            InputEmptyError: If the manifest is empty
        """
        path = check_input(self.input_file)
        self.logger.info(f"File: {path} exists!")

        result = parse_manifest(read_manifest_lines(path))
        self.records = result.records
        self.warnings = result.warnings

        self.content = self.generator.generate(self.records)
        self.logger.info(f"Generated rules for {len(self.records)} textures from {path}")
        return self.content

    def write_data(self, writer: TextIO, sink: str = "output") -> None:
        """
        Write the generated makefile text with a single write call.

        Raises:
            SinkWriteError: If the writer rejects the data
        """
        try:
            writer.write(self.content)
            writer.flush()
        except (OSError, UnicodeError) as e:
            raise SinkWriteError(str(e), sink) from e

    def print(self) -> None:
        """Write the generated makefile text to standard output."""
        self.write_data(sys.stdout, "stdout")

    def save(self, output_file: Union[str, Path]) -> Path:
        """
        Write the generated makefile text to a file.

        Returns:
            Path of the written file
        """
        output_path = Path(output_file)
        try:
            f = open(output_path, 'w', encoding='utf-8', newline='')
        except OSError as e:
            raise SinkWriteError(str(e), str(output_path)) from e

        with f:
            self.write_data(f, str(output_path))

        self.logger.info(f"Wrote makefile fragment to {output_path}")
        return output_path
