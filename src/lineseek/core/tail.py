"""Reading the last lines of a file without scanning it from the start."""

from collections import deque
from typing import List

from lineseek.core.chunk import Chunk
from lineseek.core.loader import ChunkLoader
from lineseek.models.position import Position


def tail_lines(loader: ChunkLoader, count: int) -> List[bytes]:
    """Return the last ``count`` lines of the stream.

    Chunks are read from the end, folding ``calc_backward_end`` until
    enough terminators have been crossed that the ``count``-th line from
    the end is known to start inside the collected bytes.

    Args:
        loader: Loader for the backing file
        count: Number of lines wanted

    Returns:
        Up to ``count`` lines, oldest first, terminators kept

    Raises:
        ChunkReadError: If a chunk cannot be read
    """
    if count <= 0 or loader.chunk_count() == 0:
        return []

    collected: deque = deque()
    needed = count
    position = Position()
    for _, chunk in loader.iter_chunks(reverse=True):
        if not collected and chunk.calc_backward_start().column == 0:
            # The stream ends on a terminator, which closes the last line
            # rather than opening a new one.
            needed += 1
        collected.appendleft(chunk.data)
        position = chunk.calc_backward_end(position)
        if position.row >= needed:
            break

    suffix = Chunk(b"".join(collected))
    first = max(0, suffix.get_line_count() - count)
    return [suffix.get_line_content(i) for i in range(first, suffix.get_line_count())]
