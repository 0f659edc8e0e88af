"""
FilterSearchEngine - quick filters, free-text search and attribute filters.

Quick filters and search prune the symbol forest recursively: a node is
kept if it matches or if at least one of its descendants does. Kept nodes
are shallow copies carrying the pruned children; the input forest is never
mutated, so it can be re-filtered from scratch on every keystroke.

Attribute filters (minimum priority, used in template) are flat: they test
top-level symbols only.

FilterState composes everything in a fixed order, each stage narrowing the
result of the previous one:

    search -> quick filter -> priority threshold -> template usage
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from outline_lens.core.exceptions import UnknownFilterError
from outline_lens.core.models import (
    FrontendSymbolKind,
    QuickFilter,
    SymbolNode,
    SymbolPredicate,
    SymbolPriority,
)

logger = logging.getLogger(__name__)

K = FrontendSymbolKind


def prune_symbols(symbols: Sequence[SymbolNode], predicate: SymbolPredicate) -> List[SymbolNode]:
    """
    Recursively prune a symbol forest.

    Args:
        symbols: Forest to prune (left untouched)
        predicate: Membership test

    Returns:
        New forest of shallow copies; each copy's children are the pruned
        copies of the original children, re-parented to the copy
    """
    result: List[SymbolNode] = []
    for symbol in symbols:
        pruned_children = prune_symbols(symbol.children, predicate)
        if predicate(symbol) or pruned_children:
            copy = dataclasses.replace(symbol, children=pruned_children)
            # The pruned children are fresh copies owned by this copy
            for child in pruned_children:
                child.parent = copy
            result.append(copy)
    return result


# =============================================================================
# Quick filter catalog
# =============================================================================

def _is_component(symbol: SymbolNode) -> bool:
    return symbol.frontend_kind in (K.VUE_COMPONENT, K.REACT_COMPONENT)


def _is_hook(symbol: SymbolNode) -> bool:
    return symbol.frontend_kind in (
        K.VUE_COMPOSABLE,
        K.REACT_HOOK,
        K.REACT_CUSTOM_HOOK,
        K.VUE_LIFECYCLE,
    )


def _is_event(symbol: SymbolNode) -> bool:
    return symbol.frontend_kind == K.EVENT_HANDLER or symbol.category == 'event'


def _is_async(symbol: SymbolNode) -> bool:
    return symbol.is_async or symbol.frontend_kind in (K.API_CALL, K.ASYNC_FUNCTION)


def _is_important(symbol: SymbolNode) -> bool:
    return symbol.priority >= SymbolPriority.HIGH


def _is_exported(symbol: SymbolNode) -> bool:
    return symbol.is_exported


def _is_private(symbol: SymbolNode) -> bool:
    return symbol.is_private


def _is_used_in_template(symbol: SymbolNode) -> bool:
    return symbol.context.used_in_template


QUICK_FILTERS: Tuple[QuickFilter, ...] = (
    QuickFilter('components', '组件', 'symbol-class', '只显示组件定义', _is_component, '1'),
    QuickFilter('hooks', 'Hooks', 'symbol-event', '只显示 Hooks 和组合式函数', _is_hook, '2'),
    QuickFilter('events', '事件', 'symbol-method', '只显示事件处理函数', _is_event, '3'),
    QuickFilter('async', '异步', 'symbol-event', '只显示异步函数和 API 调用', _is_async, '4'),
    QuickFilter('important', '重要', 'star', '只显示高优先级符号', _is_important, '5'),
    QuickFilter('exported', '导出', 'export', '只显示导出的符号', _is_exported, '6'),
    QuickFilter('private', '私有', 'lock', '只显示私有符号', _is_private, '7'),
    QuickFilter('used-in-template', '模板使用', 'code', '只显示在模板中使用的符号',
                _is_used_in_template, '8'),
)


def get_quick_filter(filter_id: str) -> QuickFilter:
    """
    Look up a quick filter by id.

    Raises:
        UnknownFilterError: If the id is not in the catalog
    """
    for quick_filter in QUICK_FILTERS:
        if quick_filter.id == filter_id:
            return quick_filter
    raise UnknownFilterError(filter_id)


def get_quick_filter_by_hotkey(hotkey: str) -> Optional[QuickFilter]:
    for quick_filter in QUICK_FILTERS:
        if quick_filter.hotkey == hotkey:
            return quick_filter
    return None


def apply_quick_filter(symbols: Sequence[SymbolNode], filter_id: str) -> List[SymbolNode]:
    """Prune a forest with the catalog predicate named ``filter_id``."""
    return prune_symbols(symbols, get_quick_filter(filter_id).predicate)


# =============================================================================
# Search and attribute filters
# =============================================================================

def symbol_matches_query(symbol: SymbolNode, normalized_query: str) -> bool:
    """
    Case-insensitive substring match over a symbol's searchable fields.

    Args:
        symbol: Symbol to test
        normalized_query: Lower-cased, stripped query

    Returns:
        True if the query occurs in the name, kind, category, a tag or the
        signature
    """
    return (
        normalized_query in symbol.name.lower()
        or normalized_query in symbol.frontend_kind.value.lower()
        or normalized_query in symbol.category.lower()
        or any(normalized_query in tag.lower() for tag in symbol.tags)
        or normalized_query in (symbol.signature or '').lower()
    )


def search_symbols(symbols: Sequence[SymbolNode], query: str) -> List[SymbolNode]:
    """
    Prune a forest to the symbols matching a free-text query.

    A blank query returns the input unchanged (as a new list).
    """
    normalized_query = (query or '').strip().lower()
    if not normalized_query:
        return list(symbols)
    return prune_symbols(symbols, lambda symbol: symbol_matches_query(symbol, normalized_query))


def filter_by_priority(symbols: Sequence[SymbolNode], min_priority: SymbolPriority) -> List[SymbolNode]:
    """Keep top-level symbols whose priority is at least ``min_priority``."""
    return [symbol for symbol in symbols if symbol.priority >= min_priority]


def filter_by_template_usage(symbols: Sequence[SymbolNode]) -> List[SymbolNode]:
    """Keep top-level symbols used in the template / JSX."""
    return [symbol for symbol in symbols if symbol.context.used_in_template]


@dataclass
class FilterState:
    """
    The currently active filters of one view.

    Attributes:
        search_query: Free-text query ('' when inactive)
        active_quick_filter: Id of the single active quick filter, if any
        show_only_important: Priority threshold filter (>= HIGH)
        show_only_used_in_template: Template usage filter
    """
    search_query: str = ''
    active_quick_filter: Optional[str] = None
    show_only_important: bool = False
    show_only_used_in_template: bool = False

    @property
    def has_search_query(self) -> bool:
        return bool(self.search_query.strip())

    @property
    def is_active(self) -> bool:
        return (
            self.has_search_query
            or self.active_quick_filter is not None
            or self.show_only_important
            or self.show_only_used_in_template
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'search_query': self.search_query,
            'active_quick_filter': self.active_quick_filter,
            'show_only_important': self.show_only_important,
            'show_only_used_in_template': self.show_only_used_in_template,
        }

    def toggle_quick_filter(self, filter_id: str) -> Optional[str]:
        """
        Toggle a quick filter; toggling the active id clears it.

        Returns:
            The newly active filter id, or None

        Raises:
            UnknownFilterError: If the id is not in the catalog
        """
        get_quick_filter(filter_id)
        self.active_quick_filter = None if self.active_quick_filter == filter_id else filter_id
        return self.active_quick_filter

    def apply(self, symbols: Sequence[SymbolNode]) -> List[SymbolNode]:
        """
        Run every active filter in order over a forest.

        Args:
            symbols: Unfiltered top-level symbols

        Returns:
            Filtered forest (new list; input untouched)
        """
        filtered = list(symbols)

        if self.has_search_query:
            filtered = search_symbols(filtered, self.search_query)

        if self.active_quick_filter is not None:
            filtered = apply_quick_filter(filtered, self.active_quick_filter)

        if self.show_only_important:
            filtered = filter_by_priority(filtered, SymbolPriority.HIGH)

        if self.show_only_used_in_template:
            filtered = filter_by_template_usage(filtered)

        logger.debug(f"Filters reduced {len(symbols)} symbols to {len(filtered)}")
        return filtered
