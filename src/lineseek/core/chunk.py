"""In-memory chunk of a byte stream with its line-start index.

A chunk is one fixed-size slice of a larger file. Its line index lets the
caller look up lines within the slice and fold the slice's line/column
counts into a position in the whole stream, either forward (from the
start of the stream) or backward (from its end).
"""

from typing import List, Optional

from lineseek.models.position import FoldDirection, Position

LINE_TERMINATOR = b"\n"


def build_line_starts(data: bytes) -> List[int]:
    """Compute the line-start offsets of a byte buffer.

    Offset 0 is always recorded, followed by the offset after every
    terminator. A trailing sentinel equal to ``len(data)`` is appended
    unless the last recorded start already equals it.

    Args:
        data: Raw chunk bytes

    Returns:
        Ascending list of line-start offsets
    """
    line_starts = [0]
    pos = data.find(LINE_TERMINATOR)
    while pos != -1:
        line_starts.append(pos + 1)
        pos = data.find(LINE_TERMINATOR, pos + 1)
    if line_starts[-1] != len(data):
        line_starts.append(len(data))
    return line_starts


class Chunk:
    """A byte buffer for one slice of the stream plus its line index.

    The index is a pure function of ``data``: building a chunk twice from
    the same bytes yields the same ``line_starts``.

    Attributes:
        data: Chunk payload (empty when unloaded)
        line_starts: Offsets into ``data`` where each line begins, with a
            trailing sentinel for an unterminated final fragment
    """

    def __init__(self, data: bytes = b""):
        self.data = bytes(data)
        self.line_starts = build_line_starts(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return f"Chunk(size={len(self.data)}, lines={self.get_line_count()})"

    @property
    def is_loaded(self) -> bool:
        """Whether the chunk currently holds a payload."""
        return bool(self.data)

    def load(self, data: bytes) -> None:
        """Replace the payload and rebuild the line index.

        Args:
            data: New chunk bytes
        """
        self.data = bytes(data)
        self.line_starts = build_line_starts(self.data)

    def release(self) -> None:
        """Drop the payload and its index to reclaim memory."""
        self.data = b""
        self.line_starts = [0]

    def get_line_count(self) -> int:
        """Number of lines in the chunk, counting an unterminated tail."""
        return len(self.line_starts) - 1

    def get_line_content(self, idx: int) -> Optional[bytes]:
        """Return the bytes of line ``idx``, terminator included.

        A miss is expected when probing chunk boundaries, so out-of-range
        indices return ``None`` rather than raising.

        Args:
            idx: Zero-based line index within the chunk

        Returns:
            Line bytes, or None if ``idx`` is outside ``[0, line_count)``
        """
        if not self.data or idx < 0 or idx >= self.get_line_count():
            return None
        return self.data[self.line_starts[idx]:self.line_starts[idx + 1]]

    def continues(self) -> bool:
        """Whether the final line is left open for the next chunk to finish."""
        if not self.data:
            return False
        return self.data[-1:] != LINE_TERMINATOR

    @property
    def newline_count(self) -> int:
        """Number of terminator bytes in the chunk."""
        return self.get_line_count() - (1 if self.continues() else 0)

    def calc_end(self, start: Position) -> Position:
        """Forward fold: the position right after this chunk.

        Args:
            start: Position at which this chunk begins in the stream

        Returns:
            Start position of the following chunk
        """
        return self._fold(start, FoldDirection.FORWARD)

    def calc_backward_start(self) -> Position:
        """Describe the open tail of the chunk, measured from its end.

        When the chunk continues into the next one, a backward scan from
        the tail is already partway into the final line.
        """
        if not self.continues():
            return Position()
        last = self.get_line_count() - 1
        return Position(0, self.line_starts[last + 1] - self.line_starts[last])

    def calc_backward_end(self, start: Position) -> Position:
        """Backward fold: the position at this chunk's head.

        Args:
            start: Scan state at this chunk's tail, counted from the end of
                the stream

        Returns:
            Scan state after consuming the chunk towards the stream start
        """
        return self._fold(start, FoldDirection.BACKWARD)

    def _fold(self, start: Position, direction: FoldDirection) -> Position:
        """Accumulate this chunk into ``start`` in the given direction.

        Both directions cross the same number of line boundaries. They only
        differ in which open fragment becomes the new column: the bytes
        after the last terminator going forward, the bytes before the first
        terminator going backward.
        """
        if not self.data:
            return start

        crossed = self.newline_count
        if crossed == 0:
            return Position(start.row, start.column + len(self.data))

        if direction is FoldDirection.FORWARD:
            column = len(self.data) - self.line_starts[crossed]
        else:
            # line_starts[1] is one past the first terminator
            column = self.line_starts[1] - 1
        return Position(start.row + crossed, column)
