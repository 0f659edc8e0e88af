"""
Display metadata (labels, tooltips, navigation targets) for grouped symbols.
"""

from .display import (
    GroupView,
    SymbolView,
    NavigationTarget,
    build_group_views,
    build_symbol_view,
    build_tooltip,
)

__all__ = [
    "GroupView",
    "SymbolView",
    "NavigationTarget",
    "build_group_views",
    "build_symbol_view",
    "build_tooltip",
]
