"""
Exception types shared by the parser, the build coordinator and the CLI.
"""

from pathlib import Path
from typing import Optional, Union


class UdimError(Exception):
    """Base exception for UDIM generator errors."""
    
    def __init__(self, message: str, recoverable: bool = False):
        super().__init__(message)
        self.recoverable = recoverable


class InputNotFoundError(UdimError):
    """Exception raised when the input manifest does not exist."""
    
    def __init__(self, path: Union[str, Path], reason: str = "does not exist"):
        super().__init__(f"File: {path} {reason}!", recoverable=False)
        self.path = Path(path)


class InputEmptyError(UdimError):
    """Exception raised when the input manifest contains zero bytes."""
    
    def __init__(self, path: Union[str, Path]):
        super().__init__(f"File: {path} is empty!", recoverable=False)
        self.path = Path(path)


class MalformedLineError(UdimError):
    """Exception raised for a manifest line that cannot be turned into a record."""
    
    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message, recoverable=True)
        self.line_number = line_number


class UnrecognizedFlagWarning(UdimError):
    """Raised into the warning list when a flag token is not in the flag table."""
    
    def __init__(self, token: str, filename: str, line_number: Optional[int] = None):
        message = f"Unrecognized flag '{token}' for {filename}"
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message, recoverable=True)
        self.token = token
        self.filename = filename
        self.line_number = line_number


class SinkWriteError(UdimError):
    """Exception raised when the output sink rejects the generated data."""
    
    def __init__(self, message: str, sink: str = "output"):
        super().__init__(f"Failed to write {sink}: {message}", recoverable=False)
        self.sink = sink
