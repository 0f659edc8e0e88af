"""
SymbolOutlineEngine - debounced refresh and the public outline operations.

The engine owns one active document and one snapshot of derived state (the
enriched forest plus its unfiltered grouping). A refresh is the only
asynchronous step: it awaits the outline provider once, then classifies and
groups synchronously and swaps the snapshot in a single assignment, so
readers only ever see a complete old snapshot or a complete new one.

Refresh triggering is a small state machine:

    IDLE / SCHEDULED --refresh()--> SCHEDULED   (pending timer restarted)
    SCHEDULED        --quiet period--> RUNNING
    RUNNING          --refresh()--> RUNNING     (trigger dropped)
    RUNNING          --done or failed--> IDLE

Filters and search do not refresh: they are applied on read, over the
current snapshot, so every keystroke re-filters the unfiltered forest.

Usage:
    >>> engine = SymbolOutlineEngine(TreeSitterOutlineProvider())
    >>> engine.set_document(Document("Counter.vue", text))
    >>> await engine.refresh_now()
    >>> engine.search("count")
    >>> engine.get_grouped_symbols()
"""

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from outline_lens.analysis.symbol_classifier import SymbolClassifier
from outline_lens.core.exceptions import ConfigurationError
from outline_lens.core.interfaces import IOutlineProvider
from outline_lens.core.models import (
    Document,
    FrameworkType,
    GroupConfig,
    QuickFilter,
    SymbolNode,
)
from outline_lens.grouping.filters import QUICK_FILTERS, FilterState
from outline_lens.grouping.group_engine import GroupEngine
from outline_lens.presentation.display import GroupView, build_group_views, priority_name

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class RefreshState(Enum):
    """Lifecycle of the debounced refresh."""
    IDLE = "idle"
    SCHEDULED = "scheduled"
    RUNNING = "running"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OutlineSnapshot:
    """
    Derived state of one completed refresh.

    Attributes:
        document: Document the snapshot was built from (None when empty)
        framework: Detected framework (GENERAL when empty)
        symbols: Unfiltered enriched top-level symbols, in source order
        grouped: Unfiltered grouping of ``symbols``
    """
    document: Optional[Document] = None
    framework: FrameworkType = FrameworkType.GENERAL
    symbols: Tuple[SymbolNode, ...] = ()
    grouped: Mapping[str, Tuple[SymbolNode, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def is_empty(self) -> bool:
        return not self.symbols


EMPTY_SNAPSHOT = OutlineSnapshot()


class SymbolOutlineEngine:
    """
    Framework-aware outline of the active document.

    Args:
        provider: Source of raw outlines
        debounce_seconds: Quiet period before a triggered refresh runs.
            Defaults to DEBOUNCE_SECONDS.
        group_engine: Grouping rules (defaults to the built-in tables)

    Raises:
        ConfigurationError: If debounce_seconds is negative
    """

    DEBOUNCE_SECONDS = 0.2

    def __init__(
        self,
        provider: IOutlineProvider,
        debounce_seconds: Optional[float] = None,
        group_engine: Optional[GroupEngine] = None,
    ):
        if debounce_seconds is None:
            debounce_seconds = self.DEBOUNCE_SECONDS
        if debounce_seconds < 0:
            raise ConfigurationError(f"debounce_seconds must be >= 0, got {debounce_seconds}")

        self.provider = provider
        self.debounce_seconds = debounce_seconds
        self.group_engine = group_engine or GroupEngine()

        self._document: Optional[Document] = None
        self._snapshot: OutlineSnapshot = EMPTY_SNAPSHOT
        self._filters = FilterState()
        self._listeners: List[Listener] = []
        self._pending: Optional[asyncio.Task] = None
        self._busy = False

    # =========================================================================
    # Document and refresh
    # =========================================================================

    @property
    def document(self) -> Optional[Document]:
        """The active document (None when no document is open)."""
        return self._document

    @property
    def snapshot(self) -> OutlineSnapshot:
        return self._snapshot

    @property
    def filter_state(self) -> FilterState:
        return self._filters

    @property
    def refresh_state(self) -> RefreshState:
        if self._busy:
            return RefreshState.RUNNING
        if self._pending is not None and not self._pending.done():
            return RefreshState.SCHEDULED
        return RefreshState.IDLE

    def set_document(self, document: Optional[Document]) -> None:
        """Make ``document`` the active document; takes effect on the next refresh."""
        self._document = document

    def refresh(self) -> Optional[asyncio.Task]:
        """
        Request a debounced refresh.

        Must be called from a running event loop. A pending refresh is
        cancelled and rescheduled; a request made while a refresh is running
        is dropped (the caller re-triggers once it completes).

        Returns:
            The scheduled task, or None if the request was dropped
        """
        if self._busy:
            logger.debug("Refresh already running; trigger dropped")
            return None

        if self._pending is not None and not self._pending.done():
            self._pending.cancel()

        self._pending = asyncio.get_running_loop().create_task(self._debounced_refresh())
        return self._pending

    async def refresh_now(self) -> OutlineSnapshot:
        """
        Rebuild the snapshot for the active document.

        Empty input and any pipeline failure degrade to the empty snapshot;
        this coroutine never raises for them. Listeners are notified after
        the swap.

        Returns:
            The snapshot in effect afterwards
        """
        if self._busy:
            logger.debug("Refresh already running; request dropped")
            return self._snapshot

        self._busy = True
        document = self._document
        try:
            snapshot = await self._build_snapshot(document)
        except Exception as e:
            path = document.path if document is not None else None
            logger.error(f"Failed to refresh outline of {path}: {e}", exc_info=True)
            snapshot = EMPTY_SNAPSHOT
        finally:
            self._busy = False

        self._snapshot = snapshot
        self._notify()
        return snapshot

    async def _debounced_refresh(self) -> None:
        await asyncio.sleep(self.debounce_seconds)
        # No longer cancellable from here on
        self._pending = None
        await self.refresh_now()

    async def _build_snapshot(self, document: Optional[Document]) -> OutlineSnapshot:
        if document is None:
            logger.debug("No active document; clearing outline")
            return EMPTY_SNAPSHOT

        outline = await self.provider.get_outline(document)
        if not outline:
            logger.debug(f"No outline for {document.path}; clearing outline")
            return EMPTY_SNAPSHOT

        classifier = SymbolClassifier(document)
        symbols = classifier.classify(outline)
        grouped = self.group_engine.group_symbols(symbols, classifier.framework)

        logger.info(
            f"Refreshed {document.path}: {len(symbols)} symbols, "
            f"{len(grouped)} groups ({classifier.framework.value})"
        )
        return OutlineSnapshot(
            document=document,
            framework=classifier.framework,
            symbols=tuple(symbols),
            grouped=MappingProxyType({gid: tuple(members) for gid, members in grouped.items()}),
        )

    # =========================================================================
    # Search and filters
    # =========================================================================

    def search(self, query: str) -> str:
        """Set the free-text query ('' or whitespace clears it)."""
        self._filters.search_query = query or ''
        self._notify()
        return self._filters.search_query

    def clear_search(self) -> None:
        self._filters.search_query = ''
        self._notify()

    def apply_quick_filter(self, filter_id: str) -> Optional[str]:
        """
        Toggle a quick filter; applying the active id clears it.

        Returns:
            The active quick filter id afterwards, or None

        Raises:
            UnknownFilterError: If the id is not in the catalog
        """
        active = self._filters.toggle_quick_filter(filter_id)
        logger.debug(f"Quick filter {filter_id!r} toggled; active: {active}")
        self._notify()
        return active

    def toggle_important_filter(self) -> bool:
        self._filters.show_only_important = not self._filters.show_only_important
        self._notify()
        return self._filters.show_only_important

    def toggle_template_usage_filter(self) -> bool:
        self._filters.show_only_used_in_template = not self._filters.show_only_used_in_template
        self._notify()
        return self._filters.show_only_used_in_template

    # =========================================================================
    # Queries
    # =========================================================================

    def get_current_framework(self) -> FrameworkType:
        return self._snapshot.framework

    def get_quick_filters(self) -> List[QuickFilter]:
        return list(QUICK_FILTERS)

    def get_group_config(self) -> GroupConfig:
        return self.group_engine.get_group_config(self._snapshot.framework)

    def get_symbol_stats(self) -> Dict[str, Any]:
        """
        Count the unfiltered top-level symbols.

        Returns:
            Dictionary with:
                - total: Number of top-level symbols
                - by_category: category -> count
                - by_priority: priority display name (e.g. '高') -> count
                - framework: Framework value (e.g. 'vue')
        """
        symbols = self._snapshot.symbols
        return {
            'total': len(symbols),
            'by_category': dict(Counter(symbol.category for symbol in symbols)),
            'by_priority': dict(Counter(priority_name(symbol.priority) for symbol in symbols)),
            'framework': self._snapshot.framework.value,
        }

    def get_symbols(self) -> List[SymbolNode]:
        """Unfiltered enriched top-level symbols."""
        return list(self._snapshot.symbols)

    def get_filtered_symbols(self) -> List[SymbolNode]:
        return self._filters.apply(self._snapshot.symbols)

    def get_grouped_symbols(self) -> Dict[str, List[SymbolNode]]:
        """Group the filtered symbols; without active filters the cached grouping is reused."""
        if not self._filters.is_active:
            return {gid: list(members) for gid, members in self._snapshot.grouped.items()}
        return self.group_engine.group_symbols(self.get_filtered_symbols(), self._snapshot.framework)

    def get_group_views(self) -> List[GroupView]:
        """Presentation records of the grouped output; groups open while searching."""
        return build_group_views(
            self.get_grouped_symbols(),
            self.get_group_config(),
            expand_all=self._filters.has_search_query,
        )

    # =========================================================================
    # Change notification
    # =========================================================================

    def add_listener(self, callback: Listener) -> Callable[[], None]:
        """
        Register a change callback.

        The callback runs with no arguments after every refresh and every
        search or filter change.

        Returns:
            A function that unregisters the callback
        """
        self._listeners.append(callback)

        def remove() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return remove

    def _notify(self) -> None:
        for callback in list(self._listeners):
            try:
                callback()
            except Exception:
                logger.exception(f"Outline listener {callback!r} failed")
