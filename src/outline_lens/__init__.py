"""
OutlineLens - framework-aware symbol outlines for front-end source files.

Augments the plain outline of a Vue, React or JavaScript/TypeScript file
with semantic kinds (components, composables, hooks, reactive state, event
handlers, API calls...), priorities and usage context, then organizes the
symbols into named, filterable groups. Exposed as an MCP server.

Usage:
    # As an MCP server
    outline-lens

    # Programmatic usage
    from outline_lens import SymbolOutlineEngine, TreeSitterOutlineProvider, Document
    engine = SymbolOutlineEngine(TreeSitterOutlineProvider())
    engine.set_document(Document("Counter.vue", text))
    await engine.refresh_now()
    print(engine.get_grouped_symbols())
"""

__version__ = "0.1.0"
__author__ = "OutlineLens Contributors"


# Lazy imports to avoid loading tree-sitter at import time
def __getattr__(name: str):
    """Lazy import heavy modules only when accessed."""
    if name == "SymbolOutlineEngine":
        from outline_lens.engine.outline_engine import SymbolOutlineEngine

        return SymbolOutlineEngine
    elif name == "TreeSitterOutlineProvider":
        from outline_lens.parsers.treesitter_outline import TreeSitterOutlineProvider

        return TreeSitterOutlineProvider
    elif name == "SymbolClassifier":
        from outline_lens.analysis.symbol_classifier import SymbolClassifier

        return SymbolClassifier
    elif name == "GroupEngine":
        from outline_lens.grouping.group_engine import GroupEngine

        return GroupEngine
    elif name == "detect_framework":
        from outline_lens.analysis.framework_detector import detect_framework

        return detect_framework
    elif name == "Document":
        from outline_lens.core.models import Document

        return Document
    elif name == "OutlineNode":
        from outline_lens.core.models import OutlineNode

        return OutlineNode
    elif name == "SymbolNode":
        from outline_lens.core.models import SymbolNode

        return SymbolNode
    elif name == "FrameworkType":
        from outline_lens.core.models import FrameworkType

        return FrameworkType
    elif name == "IOutlineProvider":
        from outline_lens.core.interfaces import IOutlineProvider

        return IOutlineProvider
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "__version__",
    "__author__",
    "SymbolOutlineEngine",
    "TreeSitterOutlineProvider",
    "SymbolClassifier",
    "GroupEngine",
    "detect_framework",
    "Document",
    "OutlineNode",
    "SymbolNode",
    "FrameworkType",
    "IOutlineProvider",
]
