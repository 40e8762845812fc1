"""Chunk loading from a seekable backing file."""

import os
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Tuple, Union

from lineseek.config.settings import Settings
from lineseek.core.chunk import Chunk
from lineseek.exceptions import (
    ChunkIndexOutOfRangeError,
    ChunkReadError,
    LoaderClosedError,
    StoreUnavailableError,
)
from lineseek.utils.debug import DebugLogger


class ChunkLoader:
    """Owns the file handle and splits the file into fixed-size chunks.

    Every read repositions the cursor first, so individual calls are well
    defined, but one instance must not be shared between threads without
    external locking. Separate instances on the same file are independent.
    """

    def __init__(
        self,
        path: Union[str, Path],
        chunk_size: Optional[int] = None,
        total_size: Optional[int] = None,
        settings: Optional[Settings] = None,
    ):
        """Open the backing file for random-access reads.

        Args:
            path: Path to the backing file
            chunk_size: Bytes per chunk (default: settings.chunk_size)
            total_size: Stream length in bytes (default: size of the file)
            settings: Optional settings instance

        Raises:
            ValueError: If chunk_size < 1 or total_size < 0
            StoreUnavailableError: If the file is missing or unreadable
        """
        self.settings = settings or Settings()
        self.path = Path(path)
        self.chunk_size = chunk_size if chunk_size is not None else self.settings.chunk_size
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")
        if total_size is not None and total_size < 0:
            raise ValueError(f"total_size must be >= 0, got {total_size}")

        if self.settings.debug and not DebugLogger.is_enabled():
            DebugLogger.configure(enabled=True, log_dir=self.settings.debug_log_dir)

        try:
            self._file: Optional[BinaryIO] = open(self.path, "rb")
        except FileNotFoundError as e:
            raise StoreUnavailableError(self.path, "file not found") from e
        except OSError as e:
            raise StoreUnavailableError(self.path, e.strerror or str(e)) from e

        if total_size is None:
            try:
                total_size = os.fstat(self._file.fileno()).st_size
            except OSError as e:
                self._file.close()
                raise StoreUnavailableError(self.path, e.strerror or str(e)) from e
        self.total_size = total_size

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - ensures the file is closed."""
        self.close()
        return False

    def __repr__(self) -> str:
        return f"ChunkLoader(path={str(self.path)!r}, chunk_size={self.chunk_size}, total_size={self.total_size})"

    @property
    def closed(self) -> bool:
        return self._file is None

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def chunk_count(self) -> int:
        """Number of chunks, the last one possibly shorter."""
        return -(-self.total_size // self.chunk_size)

    def chunk_range(self, idx: int) -> Tuple[int, int]:
        """Byte range of chunk ``idx``.

        Args:
            idx: Chunk index in ``[0, chunk_count())``

        Returns:
            Tuple of (offset, length)

        Raises:
            ChunkIndexOutOfRangeError: If idx is outside the valid domain
        """
        count = self.chunk_count()
        if idx < 0 or idx >= count:
            raise ChunkIndexOutOfRangeError(idx, count)
        offset = idx * self.chunk_size
        return offset, min(self.chunk_size, self.total_size - offset)

    def load_chunk(self, idx: int) -> Chunk:
        """Read chunk ``idx`` into a fresh Chunk.

        Raises:
            ChunkIndexOutOfRangeError: If idx is outside the valid domain
            ChunkReadError: On an I/O failure or a short read
            LoaderClosedError: If the loader has been closed
        """
        data = self._read(idx, "load_chunk")
        return Chunk(data)

    def restore_chunk(self, chunk: Chunk, idx: int) -> None:
        """Re-read chunk ``idx`` into an existing (possibly released) Chunk.

        The chunk is only modified once the full byte range has been read.

        Raises:
            ChunkIndexOutOfRangeError: If idx is outside the valid domain
            ChunkReadError: On an I/O failure or a short read
            LoaderClosedError: If the loader has been closed
        """
        data = self._read(idx, "restore_chunk")
        chunk.load(data)

    def iter_chunks(self, reverse: bool = False) -> Iterator[Tuple[int, Chunk]]:
        """Yield ``(idx, chunk)`` pairs from the start or from the end of the file."""
        indices = range(self.chunk_count())
        for idx in (reversed(indices) if reverse else indices):
            yield idx, self.load_chunk(idx)

    def _read(self, idx: int, operation: str) -> bytes:
        """Seek to chunk ``idx`` and read exactly its length."""
        if self._file is None:
            raise LoaderClosedError()
        offset, length = self.chunk_range(idx)

        try:
            self._file.seek(offset)
            data = self._file.read(length)
        except OSError as e:
            raise ChunkReadError(
                idx, length, 0,
                message=f"I/O error reading chunk {idx} at offset {offset}: {e}",
            ) from e

        DebugLogger.log_io(operation, {
            "path": self.path,
            "index": idx,
            "offset": offset,
            "length": length,
            "read": len(data),
        })

        if len(data) != length:
            raise ChunkReadError(idx, length, len(data))
        return data
