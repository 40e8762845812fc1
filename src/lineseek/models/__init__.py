from .position import FoldDirection, Position
