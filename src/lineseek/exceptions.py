"""Custom exceptions for lineseek."""

from pathlib import Path
from typing import Union


class LineSeekError(Exception):
    """Base exception for all lineseek errors."""
    pass


class StoreUnavailableError(LineSeekError):
    """Raised when the backing file is missing or unreadable at open time."""
    
    def __init__(self, path: Union[str, Path], reason: str, message: str = None):
        """Initialize exception.
        
        Args:
            path: Path of the backing file
            reason: Why the file could not be opened
            message: Optional custom message
        """
        self.path = Path(path)
        self.reason = reason
        if message is None:
            message = f"Cannot open '{self.path}': {reason}"
        super().__init__(message)


class ChunkReadError(LineSeekError):
    """Raised when a chunk's byte range cannot be read in full."""
    
    def __init__(self, index: int, expected: int, actual: int, message: str = None):
        """Initialize exception.
        
        Args:
            index: Chunk index being read
            expected: Number of bytes the chunk must contain
            actual: Number of bytes actually read (0 if the read failed outright)
            message: Optional custom message
        """
        self.index = index
        self.expected = expected
        self.actual = actual
        if message is None:
            message = (
                f"Short read for chunk {index}: "
                f"expected {expected} bytes, got {actual}"
            )
        super().__init__(message)


class ChunkIndexOutOfRangeError(LineSeekError, IndexError):
    """Raised when a chunk or line index falls outside the valid domain."""
    
    def __init__(self, index: int, count: int, message: str = None):
        """Initialize exception.
        
        Args:
            index: The rejected index
            count: Size of the valid domain [0, count)
            message: Optional custom message
        """
        self.index = index
        self.count = count
        if message is None:
            message = f"Index {index} out of range [0, {count})"
        super().__init__(message)


class LoaderClosedError(LineSeekError):
    """Raised when a closed ChunkLoader is used."""
    
    def __init__(self, message: str = "ChunkLoader is closed"):
        """Initialize exception.
        
        Args:
            message: Optional custom message
        """
        super().__init__(message)
