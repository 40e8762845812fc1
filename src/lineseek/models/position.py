"""Position model: a zero-based (row, column) text coordinate."""

from dataclasses import dataclass
from enum import Enum


class FoldDirection(str, Enum):
    """Direction in which chunk positions are accumulated."""
    FORWARD = "forward"  # start of stream towards the end
    BACKWARD = "backward"  # end of stream towards the start


@dataclass(frozen=True, order=True)
class Position:
    """A coordinate in the logical text.
    
    Attributes:
        row: Zero-based line number
        column: Zero-based byte offset within the line
    """
    
    row: int = 0
    column: int = 0
    
    def __post_init__(self) -> None:
        if self.row < 0 or self.column < 0:
            raise ValueError(f"Position must be non-negative, got ({self.row}, {self.column})")
