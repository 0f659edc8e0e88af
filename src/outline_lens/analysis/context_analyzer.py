"""
Usage-context analysis for enriched symbols.

Computes, per symbol name, whether it is used in the template (Vue) or in a
JSX return block (React), whether it is bound verbatim as an event
listener, and how often it is referenced in the document.

Template and JSX detection is plain substring search, with no identifier
boundaries and no string/comment exclusion. Short names can therefore
match inside longer words; this is a known limitation of the heuristic.
"""

import logging
import re
from typing import List, Optional

from outline_lens.core.models import FrameworkType, SymbolContext

logger = logging.getLogger(__name__)

_TEMPLATE_RE = re.compile(r'<template>([\s\S]*?)</template>')
_JSX_RETURN_RE = re.compile(r'return\s*\(([\s\S]*?)\)')

# Verbatim listener bindings; "{name}" is substituted before matching
EVENT_PATTERNS = (
    '@click="{name}"',
    '@change="{name}"',
    'onClick={{{name}}}',
    'onChange={{{name}}}',
    ".addEventListener('click', {name})",
)


class ContextAnalyzer:
    """
    Per-document usage analyzer.

    The template section and JSX return blocks are located once at
    construction; each query is then a substring or regex scan.

    Args:
        text: Full document text
        framework: Framework of the document
    """

    def __init__(self, text: str, framework: FrameworkType):
        self.text = text or ""
        self.framework = framework
        self._template: Optional[str] = None
        self._jsx_blocks: List[str] = []

        if framework == FrameworkType.VUE:
            match = _TEMPLATE_RE.search(self.text)
            if match:
                self._template = match.group(1)
        elif framework == FrameworkType.REACT:
            # Whole matches, including the "return (" prefix
            self._jsx_blocks = [m.group(0) for m in _JSX_RETURN_RE.finditer(self.text)]

    def is_used_in_template(self, name: str) -> bool:
        """Check whether ``name`` occurs in the template or a JSX return block."""
        if self.framework == FrameworkType.VUE:
            return self._template is not None and name in self._template
        if self.framework == FrameworkType.REACT:
            return any(name in block for block in self._jsx_blocks)
        return False

    def is_used_in_events(self, name: str) -> bool:
        """Check whether ``name`` is bound verbatim by one of the listener patterns."""
        return any(pattern.format(name=name) in self.text for pattern in EVENT_PATTERNS)

    def count_references(self, name: str) -> int:
        """
        Count whole-word occurrences of ``name``, minus the declaration.

        Args:
            name: Symbol name

        Returns:
            Reference count, never negative
        """
        if not name:
            return 0
        matches = re.findall(rf'\b{re.escape(name)}\b', self.text)
        return max(len(matches) - 1, 0)

    def analyze(self, name: str) -> SymbolContext:
        """
        Compute the full usage context of a symbol.

        Args:
            name: Symbol name

        Returns:
            SymbolContext with usage_frequency left at 0
        """
        return SymbolContext(
            used_in_template=self.is_used_in_template(name),
            used_in_events=self.is_used_in_events(name),
            reference_count=self.count_references(name),
        )
