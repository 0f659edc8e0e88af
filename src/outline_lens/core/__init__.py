"""
Core data models and structures for OutlineLens.

This module provides the foundational data structures used throughout
the symbol classification and grouping pipeline.
"""

from .models import (
    FrameworkType,
    FrontendSymbolKind,
    SymbolPriority,
    OutlineKind,
    Position,
    Range,
    OutlineNode,
    Document,
    SymbolContext,
    VueSymbolInfo,
    ReactSymbolInfo,
    SymbolNode,
    GroupDefinition,
    GroupConfig,
    QuickFilter,
)
from .interfaces import IOutlineProvider

__all__ = [
    "FrameworkType",
    "FrontendSymbolKind",
    "SymbolPriority",
    "OutlineKind",
    "Position",
    "Range",
    "OutlineNode",
    "Document",
    "SymbolContext",
    "VueSymbolInfo",
    "ReactSymbolInfo",
    "SymbolNode",
    "GroupDefinition",
    "GroupConfig",
    "QuickFilter",
    "IOutlineProvider",
]
