"""Unit tests for quick filters, search and FilterState."""
import dataclasses
import pytest
from outline_lens.analysis.symbol_classifier import SymbolClassifier
from outline_lens.core.exceptions import UnknownFilterError
from outline_lens.core.models import (
    FrameworkType,
    FrontendSymbolKind as K,
    OutlineKind,
    Range,
    SymbolNode,
    SymbolPriority,
)
from outline_lens.grouping.filters import (
    QUICK_FILTERS,
    FilterState,
    apply_quick_filter,
    filter_by_priority,
    filter_by_template_usage,
    get_quick_filter,
    get_quick_filter_by_hotkey,
    prune_symbols,
    search_symbols,
)


def _names(symbols):
    return {s.name for s in symbols}


@pytest.fixture
def vue_symbols(vue_document, vue_outline):
    return SymbolClassifier(vue_document).classify(vue_outline)


@pytest.fixture
def react_symbols(react_document, react_outline):
    return SymbolClassifier(react_document).classify(react_outline)


class TestCatalog:

    def test_eight_filters_with_hotkeys(self):
        assert [f.id for f in QUICK_FILTERS] == [
            "components", "hooks", "events", "async",
            "important", "exported", "private", "used-in-template",
        ]
        assert [f.hotkey for f in QUICK_FILTERS] == [str(i) for i in range(1, 9)]

    def test_lookup(self):
        assert get_quick_filter("hooks").name == "Hooks"
        assert get_quick_filter_by_hotkey("5").id == "important"
        assert get_quick_filter_by_hotkey("9") is None

    def test_unknown_id_raises(self):
        with pytest.raises(UnknownFilterError) as exc_info:
            get_quick_filter("nonexistent")
        assert exc_info.value.filter_id == "nonexistent"


class TestSearch:
    """Scenario: free-text search over a Vue component."""

    def test_query_matches_name_and_signature(self, vue_symbols):
        # doubled matches through its signature ("count.value * 2")
        assert _names(search_symbols(vue_symbols, "count")) == {"count", "doubled", "useCounter"}

    def test_case_insensitive(self, vue_symbols):
        assert _names(search_symbols(vue_symbols, "  FETCH ")) == {"fetchUser"}

    def test_matches_kind_and_tags(self, vue_symbols):
        assert _names(search_symbols(vue_symbols, "vue-lifecycle")) == {"onMounted() callback"}
        assert "fetchUser" in _names(search_symbols(vue_symbols, "async"))

    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_blank_query_returns_copy(self, vue_symbols, query):
        result = search_symbols(vue_symbols, query)

        assert result == vue_symbols
        assert result is not vue_symbols

    def test_tag_query(self):
        fetch_user = SymbolNode(
            id="fetchUser_0", name="fetchUser", kind=OutlineKind.FUNCTION,
            frontend_kind=K.ARROW_FUNCTION, framework=FrameworkType.GENERAL,
            priority=SymbolPriority.MINIMAL, range=Range.from_lines(0, 0),
            uri="/src/a.js", tags=["api"],
        )
        helper = dataclasses.replace(fetch_user, id="helper_1", name="helper", tags=["utility"])

        assert search_symbols([fetch_user, helper], "api") == [fetch_user]

    def test_no_match(self, vue_symbols):
        assert search_symbols(vue_symbols, "zzz") == []


class TestPruning:

    def test_parent_kept_for_matching_child(self, react_symbols):
        [counter] = search_symbols(react_symbols, "handle")

        assert counter.name == "Counter"
        assert [c.name for c in counter.children] == ["handleChange"]

    def test_copies_are_reparented(self, react_symbols):
        [counter] = search_symbols(react_symbols, "handle")
        [child] = counter.children

        assert child.parent is counter
        assert counter is not react_symbols[0]

    def test_input_is_not_mutated(self, react_symbols):
        original = react_symbols[0]
        original_child = original.children[0]

        prune_symbols(react_symbols, lambda s: False)
        search_symbols(react_symbols, "handle")

        assert original.children == [original_child]
        assert original_child.parent is original

    def test_non_matching_children_are_pruned(self, react_symbols):
        [counter] = search_symbols(react_symbols, "Counter")
        assert counter.children == []

    def test_idempotent(self, vue_symbols):
        once = search_symbols(vue_symbols, "count")
        twice = search_symbols(once, "count")

        assert [s.id for s in once] == [s.id for s in twice]

    def test_quick_filter_twice_is_same_tree(self, react_symbols):
        once = apply_quick_filter(react_symbols, "events")
        twice = apply_quick_filter(once, "events")

        assert [c.name for c in once[0].children] == ["handleChange"]
        assert twice == once
        assert twice[0].children[0].parent is twice[0]


class TestQuickFilters:

    @pytest.mark.parametrize("filter_id,expected", [
        ("hooks", {"useCounter", "onMounted() callback"}),
        ("events", {"onClick"}),
        ("async", {"fetchUser"}),
        ("important", {"useCounter", "onMounted() callback"}),
        ("used-in-template", {"count", "onClick"}),
        ("components", set()),
        ("private", set()),
    ])
    def test_vue_catalog(self, vue_symbols, filter_id, expected):
        assert _names(apply_quick_filter(vue_symbols, filter_id)) == expected

    def test_exported_react_component(self, react_symbols):
        assert _names(apply_quick_filter(react_symbols, "exported")) == {"Counter"}

    def test_unknown_filter(self, vue_symbols):
        with pytest.raises(UnknownFilterError):
            apply_quick_filter(vue_symbols, "bogus")


class TestAttributeFilters:

    def test_priority_threshold(self, vue_symbols):
        kept = filter_by_priority(vue_symbols, SymbolPriority.MEDIUM)
        assert _names(kept) == {"doubled", "onClick", "useCounter", "fetchUser", "onMounted() callback"}

    def test_template_usage_is_flat(self, react_symbols):
        # handleChange is used in JSX but only top-level symbols are tested
        assert react_symbols[0].children[0].context.used_in_template is True
        assert filter_by_template_usage(react_symbols) == []


class TestFilterState:

    def test_inactive_by_default(self, vue_symbols):
        state = FilterState()

        assert state.is_active is False
        assert state.apply(vue_symbols) == vue_symbols

    def test_toggle_quick_filter(self):
        state = FilterState()

        assert state.toggle_quick_filter("events") == "events"
        assert state.toggle_quick_filter("hooks") == "hooks"
        assert state.toggle_quick_filter("hooks") is None
        assert state.is_active is False

    def test_toggle_unknown_leaves_state(self):
        state = FilterState(active_quick_filter="events")

        with pytest.raises(UnknownFilterError):
            state.toggle_quick_filter("bogus")
        assert state.active_quick_filter == "events"

    def test_whitespace_query_is_inactive(self):
        assert FilterState(search_query="   ").is_active is False

    def test_filters_compose(self, vue_symbols):
        state = FilterState(search_query="count", show_only_important=True)

        assert _names(state.apply(vue_symbols)) == {"useCounter"}

    def test_search_then_template_usage(self, vue_symbols):
        state = FilterState(search_query="count", show_only_used_in_template=True)

        assert _names(state.apply(vue_symbols)) == {"count"}

    def test_to_dict(self):
        state = FilterState(search_query="x", active_quick_filter="async")

        assert state.to_dict() == {
            "search_query": "x",
            "active_quick_filter": "async",
            "show_only_important": False,
            "show_only_used_in_template": False,
        }
