"""
Grouping, quick filters and search over enriched symbols.
"""

from .group_configs import DEFAULT_GROUP_CONFIGS
from .group_engine import GroupEngine
from .filters import (
    QUICK_FILTERS,
    FilterState,
    apply_quick_filter,
    get_quick_filter,
    prune_symbols,
    search_symbols,
)

__all__ = [
    "DEFAULT_GROUP_CONFIGS",
    "GroupEngine",
    "QUICK_FILTERS",
    "FilterState",
    "apply_quick_filter",
    "get_quick_filter",
    "prune_symbols",
    "search_symbols",
]
