"""
Test MCP tools by calling decorated functions directly.
This simulates what an MCP client does, without the protocol overhead.

Note: FastMCP's @mcp.tool decorator wraps functions into FunctionTool objects.
We access the underlying function via the .fn attribute.
"""
import asyncio
import pytest
from pathlib import Path
from fastmcp.exceptions import ToolError
from outline_lens.mcp.server import (
    analyze_file as analyze_file_tool,
    get_groups as get_groups_tool,
    search_symbols as search_symbols_tool,
    clear_search as clear_search_tool,
    apply_quick_filter as apply_quick_filter_tool,
    toggle_important_filter as toggle_important_filter_tool,
    toggle_template_usage_filter as toggle_template_usage_filter_tool,
    get_symbol_stats as get_symbol_stats_tool,
    list_quick_filters as list_quick_filters_tool,
    list_supported_languages as list_supported_languages_tool,
)
from outline_lens.mcp.state import get_state, reset_state

# Access underlying functions from FastMCP FunctionTool wrappers
analyze_file_fn = analyze_file_tool.fn  # async function
get_groups = get_groups_tool.fn
search_symbols = search_symbols_tool.fn
clear_search = clear_search_tool.fn
apply_quick_filter = apply_quick_filter_tool.fn
toggle_important_filter = toggle_important_filter_tool.fn
toggle_template_usage_filter = toggle_template_usage_filter_tool.fn
get_symbol_stats = get_symbol_stats_tool.fn
list_quick_filters = list_quick_filters_tool.fn
list_supported_languages = list_supported_languages_tool.fn


def analyze_file(**kwargs):
    """Helper to run async analyze_file function synchronously."""
    return asyncio.run(analyze_file_fn(**kwargs))


def _symbol_names(result):
    return {s["name"] for group in result["groups"] for s in group["symbols"]}


class TestListSupportedLanguages:
    """Test the list_supported_languages tool - no state required."""

    def test_returns_extensions_and_languages(self):
        result = list_supported_languages()

        assert "extensions" in result
        assert "languages" in result
        assert isinstance(result["extensions"], list)
        assert isinstance(result["languages"], dict)

    def test_vue_is_supported(self):
        result = list_supported_languages()
        assert ".vue" in result["extensions"]
        assert result["languages"]["vue"] == [".vue"]

    def test_script_languages_supported(self):
        result = list_supported_languages()
        for ext in [".js", ".jsx", ".ts", ".tsx"]:
            assert ext in result["extensions"]


class TestAnalyzeFileTool:
    """Test the analyze_file tool - outlines, classifies and groups a file."""

    def test_analyze_vue_file(self, vue_file):
        result = analyze_file(path=str(vue_file))

        assert result["success"] is True
        assert result["framework"] == "vue"
        assert result["stats"]["total"] == 7
        assert [g["id"] for g in result["groups"]] == [
            "vue-composables",
            "vue-reactive",
            "vue-lifecycle",
            "vue-events",
            "vue-methods",
            "vue-api",
        ]

    def test_analyze_react_file(self, react_file):
        result = analyze_file(path=str(react_file))

        assert result["framework"] == "react"
        components = result["groups"][0]
        assert components["id"] == "react-components"
        assert components["symbols"][0]["children"][0]["name"] == "handleChange"

    def test_analyze_sets_state(self, vue_file):
        analyze_file(path=str(vue_file))

        state = get_state()
        assert state.is_loaded is True
        assert state.engine is not None
        assert state.document_path == Path(vue_file).resolve()

    def test_analyze_path_not_exists(self):
        with pytest.raises(ToolError, match="Path does not exist"):
            analyze_file(path="/nonexistent/path/Counter.vue")

    def test_analyze_path_is_directory(self, tmp_path):
        with pytest.raises(ToolError, match="not a file"):
            analyze_file(path=str(tmp_path))

    def test_analyze_unsupported_extension(self, tmp_path):
        file = tmp_path / "notes.txt"
        file.write_text("content")
        with pytest.raises(ToolError, match="Unsupported file type"):
            analyze_file(path=str(file))

    def test_analyze_empty_file(self, tmp_path):
        file = tmp_path / "empty.js"
        file.write_text("")

        result = analyze_file(path=str(file))

        assert result["success"] is True
        assert result["framework"] == "general"
        assert result["groups"] == []


class TestGetSymbolStatsTool:
    """Test the get_symbol_stats tool."""

    def test_stats_when_not_loaded(self):
        result = get_symbol_stats()

        assert result["loaded"] is False
        assert result["file"] is None

    def test_stats_after_analyze(self, vue_file):
        analyze_file(path=str(vue_file))
        result = get_symbol_stats()

        assert result["loaded"] is True
        assert result["file"] == str(Path(vue_file).resolve())
        assert result["stats"]["by_priority"]["高"] == 2
        assert result["stats"]["framework"] == "vue"


class TestSearchTools:
    """Test search_symbols and clear_search."""

    def test_search_narrows_groups(self, vue_file):
        analyze_file(path=str(vue_file))
        result = search_symbols(query="count")

        assert _symbol_names(result) == {"count", "doubled", "useCounter"}
        assert result["filters"]["search_query"] == "count"
        assert all(group["expanded"] for group in result["groups"])

    def test_clear_search(self, vue_file):
        analyze_file(path=str(vue_file))
        search_symbols(query="count")

        result = clear_search()

        assert result["symbol_count"] == 7
        assert result["filters"]["search_query"] == ""

    def test_search_no_file_analysed(self):
        reset_state()
        with pytest.raises(ToolError, match="No file analysed"):
            search_symbols(query="test")


class TestFilterTools:
    """Test quick filters and toggles."""

    def test_apply_quick_filter_toggles(self, vue_file):
        analyze_file(path=str(vue_file))

        result = apply_quick_filter(filter_id="events")
        assert _symbol_names(result) == {"onClick"}
        assert result["filters"]["active_quick_filter"] == "events"

        result = apply_quick_filter(filter_id="events")
        assert result["filters"]["active_quick_filter"] is None
        assert result["symbol_count"] == 7

    def test_unknown_quick_filter(self, vue_file):
        analyze_file(path=str(vue_file))
        with pytest.raises(ToolError, match="Unknown quick filter"):
            apply_quick_filter(filter_id="bogus")

    def test_toggle_important(self, vue_file):
        analyze_file(path=str(vue_file))
        result = toggle_important_filter()

        assert result["filters"]["show_only_important"] is True
        assert _symbol_names(result) == {"useCounter", "onMounted() callback"}

    def test_toggle_template_usage(self, vue_file):
        analyze_file(path=str(vue_file))
        result = toggle_template_usage_filter()

        assert _symbol_names(result) == {"count", "onClick"}

    def test_filters_persist_across_files(self, vue_file, react_file):
        analyze_file(path=str(vue_file))
        apply_quick_filter(filter_id="exported")

        result = analyze_file(path=str(react_file))

        assert result["filters"]["active_quick_filter"] == "exported"
        assert _symbol_names(result) == {"Counter"}

    def test_get_groups_requires_analysis(self):
        with pytest.raises(ToolError, match="analyze_file"):
            get_groups()

    def test_list_quick_filters(self, vue_file):
        result = list_quick_filters()
        assert len(result["filters"]) == 8
        assert result["active"] is None

        analyze_file(path=str(vue_file))
        apply_quick_filter(filter_id="hooks")

        assert list_quick_filters()["active"] == "hooks"
