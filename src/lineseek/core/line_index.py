"""Global line index built by folding chunk positions forward."""

from bisect import bisect_right
from typing import List, Optional

from lineseek.core.cache import ChunkCache
from lineseek.core.chunk import Chunk
from lineseek.core.loader import ChunkLoader
from lineseek.exceptions import ChunkIndexOutOfRangeError
from lineseek.models.position import Position
from lineseek.utils.progress import (
    create_progress_bar,
    log_info,
    log_success,
    log_warning,
    update_progress,
)


class LineIndex:
    """Start position of every chunk in the whole stream.

    Only one Position per chunk is kept, so the index stays small even for
    multi-gigabyte files. Line lookups load the owning chunk (and any
    chunks its line runs into) through a ChunkCache.

    Attributes:
        chunk_size: Chunk size the index was built with
        total_size: Stream length in bytes
        chunk_starts: Position at which each chunk begins
        end: Position right after the last byte of the stream
    """

    def __init__(self, chunk_size: int, total_size: int, chunk_starts: List[Position], end: Position):
        self.chunk_size = chunk_size
        self.total_size = total_size
        self.chunk_starts = chunk_starts
        self.end = end

    def __repr__(self) -> str:
        return f"LineIndex(chunks={len(self.chunk_starts)}, lines={self.line_count})"

    @classmethod
    def build(cls, loader: ChunkLoader, show_progress: Optional[bool] = None) -> "LineIndex":
        """Scan every chunk once, folding ``calc_end`` from the origin.

        Each chunk is released as soon as it has been folded, so at most one
        payload is resident during the scan.

        Args:
            loader: Loader for the backing file
            show_progress: Show a progress bar (default: loader settings)

        Returns:
            The populated LineIndex

        Raises:
            ChunkReadError: If any chunk cannot be read
        """
        if show_progress is None:
            show_progress = loader.settings.show_progress

        count = loader.chunk_count()
        if count == 0:
            log_warning(f"{loader.path} is empty")
        else:
            log_info(f"Indexing {loader.path} ({loader.total_size} bytes, {count} chunks)")

        progress = None
        task_id = None
        if show_progress:
            progress, task_id = create_progress_bar(f"Indexing {loader.path.name}", total=count)

        chunk_starts: List[Position] = []
        position = Position()

        if progress is not None:
            progress.start()
        try:
            for _, chunk in loader.iter_chunks():
                chunk_starts.append(position)
                position = chunk.calc_end(position)
                chunk.release()
                if progress is not None:
                    update_progress(progress, task_id)
        finally:
            if progress is not None:
                progress.stop()

        index = cls(loader.chunk_size, loader.total_size, chunk_starts, position)
        log_success(f"Indexed {index.line_count} lines in {loader.path}")
        return index

    @property
    def chunk_count(self) -> int:
        return len(self.chunk_starts)

    @property
    def line_count(self) -> int:
        """Number of lines, counting an unterminated final line."""
        return self.end.row + (1 if self.end.column > 0 else 0)

    def locate(self, row: int) -> int:
        """Index of the chunk holding the first byte of line ``row``.

        Raises:
            ChunkIndexOutOfRangeError: If row is outside ``[0, line_count)``
        """
        if row < 0 or row >= self.line_count:
            raise ChunkIndexOutOfRangeError(row, self.line_count)
        return bisect_right(self.chunk_starts, Position(row, 0)) - 1

    def get_line(self, row: int, cache: ChunkCache) -> Optional[bytes]:
        """Return the full bytes of line ``row``, terminator included.

        A line that runs past the end of its chunk is completed from the
        following chunks, however many of them it spans.

        Args:
            row: Zero-based line number in the whole stream
            cache: Cache used to fetch chunk payloads

        Returns:
            Line bytes, or None if row is outside ``[0, line_count)``
        """
        if row < 0 or row >= self.line_count:
            return None

        idx = self.locate(row)
        chunk = cache.get(idx)
        local = row - self.chunk_starts[idx].row
        parts = [chunk.get_line_content(local)]

        while (
            local == chunk.get_line_count() - 1
            and chunk.continues()
            and idx + 1 < self.chunk_count
        ):
            idx += 1
            chunk = cache.get(idx)
            local = 0
            parts.append(chunk.get_line_content(0))

        return b"".join(parts)

    def position_of(self, offset: int, cache: ChunkCache) -> Position:
        """Forward Position of byte ``offset``.

        Args:
            offset: Byte offset in ``[0, total_size]``
            cache: Cache used to fetch the owning chunk

        Raises:
            ChunkIndexOutOfRangeError: If offset is outside ``[0, total_size]``
        """
        if offset < 0 or offset > self.total_size:
            raise ChunkIndexOutOfRangeError(offset, self.total_size + 1)
        if offset == self.total_size:
            return self.end

        idx = offset // self.chunk_size
        chunk = cache.get(idx)
        prefix = Chunk(chunk.data[:offset - idx * self.chunk_size])
        return prefix.calc_end(self.chunk_starts[idx])
