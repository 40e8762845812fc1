"""Core package initialization."""

from lineseek.core.chunk import Chunk
from lineseek.core.loader import ChunkLoader
from lineseek.core.cache import ChunkCache
from lineseek.core.line_index import LineIndex
from lineseek.core.tail import tail_lines

__all__ = ["Chunk", "ChunkLoader", "ChunkCache", "LineIndex", "tail_lines"]
