"""
MCP Server for OutlineLens - framework-aware symbol outlines.

This module provides an MCP server that exposes the OutlineLens engine
through the Model Context Protocol using stdio transport. One file is
analysed at a time; search and filters apply to the analysed file and
persist when another file is analysed.

Usage:
    outline-lens  # Run as stdio MCP server

Tools:
    - analyze_file: Outline, classify and group a Vue/React/JS/TS file
    - get_groups: Grouped symbols with the active filters applied
    - search_symbols / clear_search: Free-text search
    - apply_quick_filter: Toggle one of the quick filters
    - toggle_important_filter / toggle_template_usage_filter
    - get_symbol_stats: Counts by category and priority
    - list_quick_filters: The quick filter catalog
    - list_supported_languages: List supported file extensions
"""

from typing import List, Dict, Any, Annotated
from pathlib import Path

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from outline_lens.core.exceptions import UnknownFilterError
from outline_lens.core.models import Document
from outline_lens.grouping.filters import QUICK_FILTERS
from outline_lens.mcp.state import get_state
from outline_lens.parsers.language_configs import EXTENSION_MAP

# Derived supported extensions list (lightweight)
SUPPORTED_EXTENSIONS = sorted(list(EXTENSION_MAP.keys()))

# Initialize FastMCP server
mcp = FastMCP(
    name="OutlineLens",
    instructions="Framework-aware symbol outlines for Vue, React and JavaScript/TypeScript files"
)


def _get_engine():
    """Get the session engine, creating it (and its provider) on first use."""
    state = get_state()
    if state.engine is None:
        from outline_lens.engine.outline_engine import SymbolOutlineEngine
        from outline_lens.parsers.treesitter_outline import TreeSitterOutlineProvider

        state.engine = SymbolOutlineEngine(TreeSitterOutlineProvider())
    return state.engine


def _require_loaded():
    """Return the engine, or fail if no file has been analysed yet."""
    state = get_state()
    if not state.is_loaded:
        raise ToolError("No file analysed. Use 'analyze_file' first.")
    return state.engine


def _groups_payload(engine) -> Dict[str, Any]:
    """Grouped output of the engine with the filters that produced it."""
    state = get_state()
    views = engine.get_group_views()
    return {
        "file": str(state.document_path),
        "framework": engine.get_current_framework().value,
        "filters": engine.filter_state.to_dict(),
        "symbol_count": sum(view.count for view in views),
        "groups": [view.to_dict() for view in views],
    }


@mcp.tool(
    name="analyze_file",
    description="""Analyse a front-end source file and group its symbols.

Detects the framework (Vue, React or general JavaScript/TypeScript), classifies every
outline symbol (components, composables, hooks, reactive state, event handlers, API calls...)
and returns symbol statistics plus the grouped outline. The file stays active for the
search and filter tools."""
)
async def analyze_file(
    path: Annotated[str, Field(description="Absolute path to the .vue/.js/.jsx/.ts/.tsx file to analyse")],
) -> Dict[str, Any]:
    """Load a file into the session engine and refresh it immediately."""
    state = get_state()

    # Validate path
    file_path = Path(path).resolve()
    if not file_path.exists():
        raise ToolError(f"Path does not exist: {file_path}")
    if not file_path.is_file():
        raise ToolError(f"Path is not a file: {file_path}")
    if file_path.suffix.lower() not in EXTENSION_MAP:
        raise ToolError(
            f"Unsupported file type '{file_path.suffix}'. "
            f"Supported extensions: {', '.join(SUPPORTED_EXTENSIONS)}"
        )

    try:
        text = file_path.read_text(encoding='utf-8', errors='replace')
    except OSError as e:
        raise ToolError(f"Failed to read {file_path}: {str(e)}")

    engine = _get_engine()
    engine.set_document(Document(path=str(file_path), text=text))
    await engine.refresh_now()

    state.document_path = file_path

    return {
        "success": True,
        "message": f"Analysed {file_path.name}",
        "stats": engine.get_symbol_stats(),
        **_groups_payload(engine),
    }


@mcp.tool(
    name="get_groups",
    description="Get the grouped symbols of the analysed file, with the active search and filters applied."
)
def get_groups() -> Dict[str, Any]:
    """Get the grouped outline."""
    return _groups_payload(_require_loaded())


@mcp.tool(
    name="search_symbols",
    description="Search the analysed file's symbols (case-insensitive, matches name, kind, category, tags and signature). Parents of matching symbols are kept."
)
def search_symbols(
    query: Annotated[str, Field(description="Text to search for; an empty query clears the search")],
) -> Dict[str, Any]:
    """Set the search query and return the narrowed groups."""
    engine = _require_loaded()
    engine.search(query)
    return _groups_payload(engine)


@mcp.tool(
    name="clear_search",
    description="Clear the search query of the analysed file."
)
def clear_search() -> Dict[str, Any]:
    """Clear the search query."""
    engine = _require_loaded()
    engine.clear_search()
    return _groups_payload(engine)


@mcp.tool(
    name="apply_quick_filter",
    description="Toggle a quick filter (see list_quick_filters). Applying the active filter again clears it; only one quick filter is active at a time."
)
def apply_quick_filter(
    filter_id: Annotated[
        str,
        Field(description="Quick filter id, e.g. 'components', 'hooks', 'events', 'async', 'important'")
    ],
) -> Dict[str, Any]:
    """Toggle a quick filter."""
    engine = _require_loaded()
    try:
        engine.apply_quick_filter(filter_id)
    except UnknownFilterError as e:
        raise ToolError(str(e))
    return _groups_payload(engine)


@mcp.tool(
    name="toggle_important_filter",
    description="Toggle showing only high-priority symbols (components, hooks, lifecycle hooks, effects)."
)
def toggle_important_filter() -> Dict[str, Any]:
    """Toggle the priority threshold filter."""
    engine = _require_loaded()
    engine.toggle_important_filter()
    return _groups_payload(engine)


@mcp.tool(
    name="toggle_template_usage_filter",
    description="Toggle showing only symbols used in the Vue template or a JSX return block."
)
def toggle_template_usage_filter() -> Dict[str, Any]:
    """Toggle the template usage filter."""
    engine = _require_loaded()
    engine.toggle_template_usage_filter()
    return _groups_payload(engine)


@mcp.tool(
    name="get_symbol_stats",
    description="Get symbol statistics of the analysed file: total, counts by category and by priority, framework."
)
def get_symbol_stats() -> Dict[str, Any]:
    """Get symbol statistics."""
    state = get_state()

    if not state.is_loaded:
        return {
            "loaded": False,
            "file": None,
            "stats": None
        }

    return {
        "loaded": True,
        "file": str(state.document_path),
        "stats": state.engine.get_symbol_stats()
    }


@mcp.tool(
    name="list_quick_filters",
    description="List the quick filters available to apply_quick_filter."
)
def list_quick_filters() -> Dict[str, Any]:
    """List the quick filter catalog."""
    state = get_state()
    active = state.engine.filter_state.active_quick_filter if state.engine is not None else None
    return {
        "filters": [quick_filter.to_dict() for quick_filter in QUICK_FILTERS],
        "active": active,
    }


@mcp.tool(
    name="list_supported_languages",
    description="List all languages and file extensions supported by OutlineLens."
)
def list_supported_languages() -> Dict[str, Any]:
    """List supported file extensions and languages."""
    # Group extensions by language
    languages: Dict[str, List[str]] = {}
    for ext, lang in EXTENSION_MAP.items():
        if lang not in languages:
            languages[lang] = []
        languages[lang].append(ext)

    # Sort extensions within each language
    for lang in languages:
        languages[lang] = sorted(languages[lang])

    return {
        "extensions": SUPPORTED_EXTENSIONS,
        "languages": languages
    }


def main():  # pragma: no cover
    """Run the MCP server."""
    mcp.run()


if __name__ == "__main__":
    main()
