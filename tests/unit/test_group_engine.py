"""Unit tests for GroupEngine and the static group tables."""
import random
import pytest
from outline_lens.analysis.symbol_classifier import SymbolClassifier
from outline_lens.core.models import (
    FrameworkType,
    FrontendSymbolKind as K,
    GroupConfig,
    OutlineKind,
    Range,
    SymbolNode,
    SymbolPriority,
)
from outline_lens.grouping.group_configs import (
    DEFAULT_GROUP_CONFIGS,
    GENERAL_GROUP_CONFIG,
    REACT_GROUP_CONFIG,
    VUE_GROUP_CONFIG,
)
from outline_lens.grouping.group_engine import GroupEngine


def _symbol(name, frontend_kind, line=0, kind=OutlineKind.FUNCTION,
            priority=SymbolPriority.MINIMAL, category="utility", tags=(),
            framework=FrameworkType.VUE):
    return SymbolNode(
        id=f"{name}_{line}",
        name=name,
        kind=kind,
        frontend_kind=frontend_kind,
        framework=framework,
        priority=priority,
        range=Range.from_lines(line, line),
        uri="/src/file",
        category=category,
        tags=list(tags),
    )


def _ids(grouped):
    return {gid: [s.id for s in members] for gid, members in grouped.items()}


class TestGroupTables:

    def test_vue_table(self):
        assert len(VUE_GROUP_CONFIG.groups) == 9
        assert VUE_GROUP_CONFIG.catch_all_id == "vue-utils"
        assert VUE_GROUP_CONFIG.get_group("vue-reactive").name == "响应式数据"
        assert VUE_GROUP_CONFIG.get_group("vue-events").name == "事件处理"

    def test_react_table(self):
        assert len(REACT_GROUP_CONFIG.groups) == 8
        assert REACT_GROUP_CONFIG.catch_all_id == "react-utils"

    def test_general_table_has_no_catch_all(self):
        assert [g.id for g in GENERAL_GROUP_CONFIG.ordered_groups] == [
            "functions", "classes", "methods", "variables",
        ]
        assert GENERAL_GROUP_CONFIG.catch_all_id is None

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_GROUP_CONFIGS[FrameworkType.ANGULAR] = GENERAL_GROUP_CONFIG


class TestGroupEngineConfig:

    def test_unknown_framework_falls_back_to_general(self):
        engine = GroupEngine()
        assert engine.get_group_config(FrameworkType.SVELTE) is GENERAL_GROUP_CONFIG

    def test_general_entry_is_required(self):
        with pytest.raises(ValueError, match="GENERAL"):
            GroupEngine({FrameworkType.VUE: VUE_GROUP_CONFIG})

    def test_custom_registry(self):
        custom = GroupConfig(framework=FrameworkType.GENERAL, groups=GENERAL_GROUP_CONFIG.groups[:1])
        engine = GroupEngine({FrameworkType.GENERAL: custom})

        grouped = engine.group_symbols(
            [_symbol("run", K.ARROW_FUNCTION, framework=FrameworkType.GENERAL)],
            FrameworkType.GENERAL,
        )
        assert list(grouped) == ["functions"]


class TestVueGrouping:
    """Scenario: enriched Vue symbols land in disjoint groups."""

    @pytest.fixture
    def grouped(self, vue_document, vue_outline):
        symbols = SymbolClassifier(vue_document).classify(vue_outline)
        return GroupEngine().group_symbols(symbols, FrameworkType.VUE)

    def test_groups_in_descending_priority(self, grouped):
        assert list(grouped) == [
            "vue-composables",
            "vue-reactive",
            "vue-lifecycle",
            "vue-events",
            "vue-methods",
            "vue-api",
        ]

    def test_reactive_and_event_groups(self, grouped):
        reactive = [s.name for s in grouped["vue-reactive"]]
        events = [s.name for s in grouped["vue-events"]]

        assert "count" in reactive
        assert events == ["onClick"]
        assert not set(reactive) & set(events)

    def test_default_sort_priority_then_line(self, grouped):
        # doubled (MEDIUM) outranks count (LOW) despite the later line
        assert [s.name for s in grouped["vue-reactive"]] == ["doubled", "count"]

    def test_catch_all_receives_unclaimed_symbols(self):
        stray = _symbol("stray", K.GENERATOR_FUNCTION, category="style")

        grouped = GroupEngine().group_symbols([stray], FrameworkType.VUE)
        assert _ids(grouped) == {"vue-utils": ["stray_0"]}

    def test_composables_sorted_by_name(self):
        symbols = [
            _symbol("useZoom", K.VUE_COMPOSABLE, line=1),
            _symbol("useAuth", K.VUE_COMPOSABLE, line=9),
        ]

        grouped = GroupEngine().group_symbols(symbols, FrameworkType.VUE)
        assert [s.name for s in grouped["vue-composables"]] == ["useAuth", "useZoom"]

    def test_first_matching_group_wins(self):
        # use* names claim the composables group before the methods group
        symbol = _symbol("useTimer", K.ARROW_FUNCTION)

        grouped = GroupEngine().group_symbols([symbol], FrameworkType.VUE)
        assert list(grouped) == ["vue-composables"]


class TestReactGrouping:

    def test_react_groups(self, react_document, react_outline):
        symbols = SymbolClassifier(react_document).classify(react_outline)
        grouped = GroupEngine().group_symbols(symbols, FrameworkType.REACT)

        assert _ids(grouped) == {
            "react-components": ["Counter_2"],
            "react-hooks": ["useToggle_19"],
            "react-utils": ["formatCount_24"],
        }

    def test_children_are_not_grouped_on_their_own(self, react_document, react_outline):
        symbols = SymbolClassifier(react_document).classify(react_outline)
        grouped = GroupEngine().group_symbols(symbols, FrameworkType.REACT)

        all_ids = [s.id for members in grouped.values() for s in members]
        assert "handleChange_9" not in all_ids


class TestGeneralGrouping:

    def test_unmatched_symbols_are_left_out(self):
        symbols = [
            _symbol("run", K.ARROW_FUNCTION, framework=FrameworkType.GENERAL),
            _symbol("onSave", K.EVENT_HANDLER, kind=OutlineKind.PROPERTY,
                    framework=FrameworkType.GENERAL),
        ]

        grouped = GroupEngine().group_symbols(symbols, FrameworkType.GENERAL)
        assert _ids(grouped) == {"functions": ["run_0"]}

    def test_empty_input(self):
        assert GroupEngine().group_symbols([], FrameworkType.GENERAL) == {}


class TestPartitionProperties:

    @pytest.fixture
    def mixed_symbols(self):
        kinds = list(K)
        rng = random.Random(1234)
        symbols = []
        for i in range(120):
            symbols.append(_symbol(
                name=rng.choice(["use", "on", "handle", "get", "x", "Foo"]) + str(i),
                frontend_kind=rng.choice(kinds),
                line=i,
                kind=rng.choice(list(OutlineKind)),
                priority=rng.choice(list(SymbolPriority)),
                category=rng.choice(["utility", "event", "api", "hook", "style", "component"]),
                tags=rng.choice([(), ("utility",), ("api",)]),
            ))
        return symbols

    @pytest.mark.parametrize("framework", [FrameworkType.VUE, FrameworkType.REACT, FrameworkType.GENERAL])
    def test_each_symbol_in_at_most_one_group(self, mixed_symbols, framework):
        grouped = GroupEngine().group_symbols(mixed_symbols, framework)
        placed = [s.id for members in grouped.values() for s in members]

        assert len(placed) == len(set(placed))
        if DEFAULT_GROUP_CONFIGS[framework].catch_all_id is not None:
            assert sorted(placed) == sorted(s.id for s in mixed_symbols)

    @pytest.mark.parametrize("framework", [FrameworkType.VUE, FrameworkType.REACT, FrameworkType.GENERAL])
    def test_grouping_ignores_input_order(self, mixed_symbols, framework):
        shuffled = list(mixed_symbols)
        random.Random(99).shuffle(shuffled)

        engine = GroupEngine()
        assert _ids(engine.group_symbols(mixed_symbols, framework)) == \
            _ids(engine.group_symbols(shuffled, framework))

    def test_no_empty_buckets(self, mixed_symbols):
        grouped = GroupEngine().group_symbols(mixed_symbols, FrameworkType.VUE)
        assert all(grouped.values())
