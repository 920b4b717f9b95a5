"""Selection engine and skill catalog model."""

from vs_core.api import Item, SelectionEngine, TreeIndex

__all__ = ["Item", "SelectionEngine", "TreeIndex"]
