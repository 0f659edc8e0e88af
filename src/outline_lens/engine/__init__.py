"""
The outline engine: debounced refresh plus search/filter state.
"""

from .outline_engine import EMPTY_SNAPSHOT, OutlineSnapshot, RefreshState, SymbolOutlineEngine

__all__ = [
    "EMPTY_SNAPSHOT",
    "OutlineSnapshot",
    "RefreshState",
    "SymbolOutlineEngine",
]
