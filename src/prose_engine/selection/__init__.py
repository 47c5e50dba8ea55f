"""Selection model reducers."""

from .model import Direction, IndexSelection, begin, extend, step

__all__ = ["Direction", "IndexSelection", "begin", "extend", "step"]
