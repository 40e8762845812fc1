"""lineseek - random access into very large text files by (row, column)."""

__version__ = "0.1.0"

from lineseek.core import Chunk, ChunkCache, ChunkLoader, LineIndex, tail_lines
from lineseek.exceptions import (
    ChunkIndexOutOfRangeError,
    ChunkReadError,
    LineSeekError,
    LoaderClosedError,
    StoreUnavailableError,
)
from lineseek.models import FoldDirection, Position

__all__ = [
    "__version__",
    "Chunk",
    "ChunkCache",
    "ChunkLoader",
    "LineIndex",
    "tail_lines",
    "Position",
    "FoldDirection",
    "LineSeekError",
    "StoreUnavailableError",
    "ChunkReadError",
    "ChunkIndexOutOfRangeError",
    "LoaderClosedError",
]
