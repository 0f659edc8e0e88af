"""
SymbolClassifier - framework-aware enrichment of raw outlines.

Walks an outline forest depth-first and turns every outline node into a
SymbolNode carrying a semantic kind, a priority, usage context, coarse
category, tags, complexity and an optional Vue/React payload.

Classification is an ordered rule cascade, first match wins:

    Vue:     ref( / Ref<            -> VUE_REF
             reactive( / UnwrapRef< -> VUE_REACTIVE
             computed( / ComputedRef< -> VUE_COMPUTED
             watch( / watchEffect(  -> VUE_WATCH
             lifecycle hook name    -> VUE_LIFECYCLE
             use* function          -> VUE_COMPOSABLE
    React:   use* function          -> REACT_HOOK (built-in) / REACT_CUSTOM_HOOK
             Capitalised function   -> REACT_COMPONENT
             useState/useEffect/useCallback in signature
                                    -> REACT_STATE / REACT_EFFECT / REACT_CALLBACK
    Generic: on*/handle*/*Click*/*Change* -> EVENT_HANDLER
             api/fetch/request/get/post    -> API_CALL
             => in signature        -> ARROW_FUNCTION (ASYNC_FUNCTION if async)
             async in signature     -> ASYNC_FUNCTION
             function or method     -> ARROW_FUNCTION

Nodes no rule claims are dropped together with their whole subtree.

Usage:
    >>> classifier = SymbolClassifier(document)
    >>> symbols = classifier.classify(outline)
    >>> print(classifier.framework, len(symbols))
"""

import logging
import re
from typing import Iterable, List, Optional

from outline_lens.analysis.context_analyzer import ContextAnalyzer
from outline_lens.analysis.framework_detector import detect_framework
from outline_lens.core.models import (
    Document,
    FrameworkType,
    FrontendSymbolKind,
    OutlineKind,
    OutlineNode,
    ReactSymbolInfo,
    SymbolNode,
    SymbolPriority,
    VueSymbolInfo,
)

logger = logging.getLogger(__name__)

K = FrontendSymbolKind

VUE_LIFECYCLE_HOOKS = (
    'onMounted',
    'onBeforeMount',
    'onUpdated',
    'onBeforeUpdate',
    'onUnmounted',
    'onBeforeUnmount',
)

REACT_BUILTIN_HOOKS = frozenset({
    'useState',
    'useEffect',
    'useCallback',
    'useMemo',
    'useRef',
    'useContext',
})

FUNCTION_KINDS = frozenset({OutlineKind.FUNCTION, OutlineKind.METHOD})

# Priority table; kinds not listed are MINIMAL
PRIORITY_BY_KIND = {
    K.VUE_COMPONENT: SymbolPriority.CRITICAL,
    K.REACT_COMPONENT: SymbolPriority.CRITICAL,

    K.VUE_COMPOSABLE: SymbolPriority.HIGH,
    K.VUE_LIFECYCLE: SymbolPriority.HIGH,
    K.REACT_HOOK: SymbolPriority.HIGH,
    K.REACT_CUSTOM_HOOK: SymbolPriority.HIGH,
    K.REACT_EFFECT: SymbolPriority.HIGH,

    K.EVENT_HANDLER: SymbolPriority.MEDIUM,
    K.API_CALL: SymbolPriority.MEDIUM,
    K.VUE_COMPUTED: SymbolPriority.MEDIUM,
    K.REACT_STATE: SymbolPriority.MEDIUM,

    K.VUE_REF: SymbolPriority.LOW,
    K.VUE_REACTIVE: SymbolPriority.LOW,
    K.UTILITY: SymbolPriority.LOW,
}

# Category table; kinds not listed are 'utility'
CATEGORY_BY_KIND = {
    K.VUE_COMPONENT: 'component',
    K.REACT_COMPONENT: 'component',

    K.VUE_COMPOSABLE: 'hook',
    K.REACT_HOOK: 'hook',
    K.REACT_CUSTOM_HOOK: 'hook',
    K.VUE_LIFECYCLE: 'hook',
    K.REACT_EFFECT: 'hook',

    K.EVENT_HANDLER: 'event',
    K.API_CALL: 'api',

    K.CSS_RULE: 'style',
    K.CSS_SELECTOR: 'style',
    K.STYLE: 'style',
}

COMPONENT_KINDS = frozenset({K.VUE_COMPONENT, K.REACT_COMPONENT})

_PARAMETERS_RE = re.compile(r'\(([^)]*)\)')
_RETURN_TYPE_RE = re.compile(r':\s*([^=>{]+)')
_COMPONENT_NAME_RE = re.compile(r'[A-Z]')


def calculate_priority(frontend_kind: FrontendSymbolKind) -> SymbolPriority:
    """Look up the fixed priority of a semantic kind."""
    return PRIORITY_BY_KIND.get(frontend_kind, SymbolPriority.MINIMAL)


def categorize(frontend_kind: FrontendSymbolKind) -> str:
    """Map a semantic kind to its coarse category."""
    return CATEGORY_BY_KIND.get(frontend_kind, 'utility')


def calculate_complexity(line_span: int) -> int:
    """
    Bucket a line span into a 1-4 complexity score.

    Args:
        line_span: Number of lines covered by the symbol (inclusive)

    Returns:
        1 for <=5 lines, 2 for <=15, 3 for <=30, else 4
    """
    if line_span <= 5:
        return 1
    if line_span <= 15:
        return 2
    if line_span <= 30:
        return 3
    return 4


def extract_parameters(signature: str) -> List[str]:
    """Parse the first parenthesised parameter list of a signature."""
    match = _PARAMETERS_RE.search(signature)
    if match and match.group(1):
        return [p.strip() for p in match.group(1).split(',') if p.strip()]
    return []


def extract_return_type(signature: str) -> Optional[str]:
    """Parse the first ``: Type`` annotation of a signature, if any."""
    match = _RETURN_TYPE_RE.search(signature)
    return match.group(1).strip() if match else None


class SymbolClassifier:
    """
    Enriches the outline of one document.

    The framework is detected once at construction (unless given) and every
    produced node carries it. A fresh classifier is built per refresh.

    Attributes:
        MAX_SIGNATURE_CHARS: Signatures longer than this are truncated
        document: Document being classified
        framework: Detected (or supplied) framework
    """

    MAX_SIGNATURE_CHARS = 100

    def __init__(self, document: Document, framework: Optional[FrameworkType] = None):
        self.document = document
        self.lines = document.lines
        self.framework = framework or detect_framework(document.file_name, document.text)
        self.context_analyzer = ContextAnalyzer(document.text, self.framework)
        self._is_composition_api = (
            '<script setup>' in document.text or 'defineComponent' in document.text
        )

    # =========================================================================
    # Public API
    # =========================================================================

    def classify(self, outline: Iterable[OutlineNode]) -> List[SymbolNode]:
        """
        Build the enriched forest for an outline.

        Args:
            outline: Top-level outline nodes, in source order

        Returns:
            Enriched top-level symbols, in source order; unclassifiable
            nodes and their subtrees are omitted
        """
        symbols: List[SymbolNode] = []
        for node in outline:
            enriched = self._enhance(node, parent=None)
            if enriched is not None:
                symbols.append(enriched)
        logger.debug(
            f"Classified {len(symbols)} top-level symbols in {self.document.path} "
            f"({self.framework.value})"
        )
        return symbols

    def detect_kind(self, node: OutlineNode, signature: str) -> Optional[FrontendSymbolKind]:
        """
        Run the rule cascade for one outline node.

        Args:
            node: Raw outline node
            signature: Extracted signature line

        Returns:
            The semantic kind, or None if no rule matched
        """
        name = node.name
        detail = node.detail or ''
        is_function = node.kind == OutlineKind.FUNCTION

        if self.framework == FrameworkType.VUE:
            if 'ref(' in signature or 'Ref<' in detail:
                return K.VUE_REF
            if 'reactive(' in signature or 'UnwrapRef<' in detail:
                return K.VUE_REACTIVE
            if 'computed(' in signature or 'ComputedRef<' in detail:
                return K.VUE_COMPUTED
            if 'watch(' in signature or 'watchEffect(' in signature:
                return K.VUE_WATCH
            if any(hook in signature for hook in VUE_LIFECYCLE_HOOKS):
                return K.VUE_LIFECYCLE
            if name.startswith('use') and is_function:
                return K.VUE_COMPOSABLE

        elif self.framework == FrameworkType.REACT:
            if name.startswith('use') and is_function:
                if name in REACT_BUILTIN_HOOKS:
                    return K.REACT_HOOK
                return K.REACT_CUSTOM_HOOK
            if is_function and _COMPONENT_NAME_RE.match(name):
                return K.REACT_COMPONENT
            if 'useState' in signature:
                return K.REACT_STATE
            if 'useEffect' in signature:
                return K.REACT_EFFECT
            if 'useCallback' in signature:
                return K.REACT_CALLBACK

        if (
            name.startswith('on')
            or name.startswith('handle')
            or 'Click' in name
            or 'Change' in name
        ):
            return K.EVENT_HANDLER

        if any(word in name for word in ('api', 'fetch', 'request', 'get', 'post')):
            return K.API_CALL

        if '=>' in signature:
            return K.ASYNC_FUNCTION if 'async' in signature else K.ARROW_FUNCTION

        if 'async' in signature:
            return K.ASYNC_FUNCTION

        if node.kind in FUNCTION_KINDS:
            # Default bucket for plain functions
            return K.ARROW_FUNCTION

        return None

    # =========================================================================
    # Private Helper Methods
    # =========================================================================

    def _enhance(self, node: OutlineNode, parent: Optional[SymbolNode]) -> Optional[SymbolNode]:
        signature = self._extract_signature(node)
        frontend_kind = self.detect_kind(node, signature)
        if frontend_kind is None:
            return None

        start_line = node.range.start.line
        exported = self._is_exported(start_line)

        symbol = SymbolNode(
            id=f"{node.name}_{start_line}",
            name=node.name,
            kind=node.kind,
            frontend_kind=frontend_kind,
            framework=self.framework,
            priority=calculate_priority(frontend_kind),
            range=node.range,
            uri=self.document.path,
            level=parent.level + 1 if parent is not None else 0,
            parent=parent,
            signature=signature,
            parameters=extract_parameters(signature),
            return_type=extract_return_type(signature),
            is_async='async' in signature,
            is_private=node.name.startswith('_') or node.name.startswith('#'),
            is_exported=exported,
            context=self.context_analyzer.analyze(node.name),
            category=categorize(frontend_kind),
            tags=self._generate_tags(node.name, frontend_kind, signature, exported),
            complexity=calculate_complexity(node.range.line_span),
        )

        if self.framework == FrameworkType.VUE:
            symbol.vue_info = self._analyze_vue_symbol(node.name, signature)
        elif self.framework == FrameworkType.REACT:
            symbol.react_info = self._analyze_react_symbol(node, signature)

        for child in node.children:
            enriched_child = self._enhance(child, parent=symbol)
            if enriched_child is not None:
                symbol.children.append(enriched_child)

        return symbol

    def _extract_signature(self, node: OutlineNode) -> str:
        """
        Extract the declaration line of a node, trimmed and truncated.

        Falls back to the bare name when the start line lies outside the
        document.
        """
        try:
            text = self.lines[node.range.start.line].strip()
        except IndexError:
            logger.warning(
                f"Line {node.range.start.line} of {node.name!r} is outside "
                f"{self.document.path} ({len(self.lines)} lines); using name as signature"
            )
            return node.name

        if len(text) > self.MAX_SIGNATURE_CHARS:
            return text[: self.MAX_SIGNATURE_CHARS] + "..."
        return text

    def _is_exported(self, line: int) -> bool:
        if 0 <= line < len(self.lines):
            return 'export' in self.lines[line]
        return False

    def _generate_tags(
        self,
        name: str,
        frontend_kind: FrontendSymbolKind,
        signature: str,
        exported: bool,
    ) -> List[str]:
        tags: List[str] = []

        if frontend_kind in COMPONENT_KINDS:
            tags.append('component')
        if 'async' in signature:
            tags.append('async')
        if name.startswith('_'):
            tags.append('private')
        if exported:
            tags.append('exported')
        if 'api' in name or 'fetch' in name:
            tags.append('api')
        if 'util' in name or 'helper' in name:
            tags.append('utility')

        return tags

    def _analyze_vue_symbol(self, name: str, signature: str) -> VueSymbolInfo:
        info = VueSymbolInfo(
            is_composition_api=self._is_composition_api,
            used_in_template=self.context_analyzer.is_used_in_template(name),
        )

        if 'ref(' in signature:
            info.reactive_type = 'ref'
        elif 'reactive(' in signature:
            info.reactive_type = 'reactive'
        elif 'computed(' in signature:
            info.reactive_type = 'computed'

        if 'Page' in name or 'View' in name:
            info.component_type = 'page'
        elif 'Layout' in name:
            info.component_type = 'layout'
        elif 'Widget' in name or 'Item' in name:
            info.component_type = 'widget'

        return info

    def _analyze_react_symbol(self, node: OutlineNode, signature: str) -> ReactSymbolInfo:
        info = ReactSymbolInfo()

        if node.kind == OutlineKind.FUNCTION and _COMPONENT_NAME_RE.match(node.name):
            info.component_type = 'functional'

        if node.name.startswith('use'):
            for hook in ('useState', 'useEffect', 'useCallback', 'useMemo'):
                if hook in signature:
                    info.hook_type = hook
                    break
            else:
                info.hook_type = 'custom'

        return info
