"""
TreeSitterOutlineProvider - tree-sitter backed outline provider.

This module implements the IOutlineProvider interface using tree-sitter
grammars for JavaScript, TypeScript and TSX. It turns a document into the
raw outline forest the classifier consumes: named ranges with an outline
kind, an optional detail (type annotation) and nested children.

Supported Languages:
    - JavaScript (.js, .jsx, .mjs, .cjs)
    - TypeScript (.ts, .mts, .cts)
    - TSX (.tsx)
    - Vue single-file components (.vue, every <script> block)

What becomes an outline node:
    - class declarations (CLASS; methods, constructor and fields as children)
    - function and generator declarations (FUNCTION)
    - const/let/var declarators (VARIABLE, or FUNCTION when initialised with
      an arrow function or function expression; destructuring patterns emit
      one VARIABLE per bound identifier)
    - interfaces, type aliases and enums (TypeScript)
    - top-level calls taking a callback, e.g. ``onMounted(() => {...})``,
      as FUNCTION named ``"onMounted() callback"``

``export`` wrappers are transparent. Inside function bodies only function
like declarations and classes are emitted.

Usage:
    >>> provider = TreeSitterOutlineProvider()
    >>> outline = provider.outline_text("Counter.vue", source)
    >>> print([node.name for node in outline])
"""

import asyncio
import logging
import re
import threading
from typing import Any, Dict, List, Optional

from tree_sitter_languages import get_parser

from outline_lens.core.exceptions import OutlineError
from outline_lens.core.interfaces import IOutlineProvider
from outline_lens.core.models import Document, OutlineKind, OutlineNode, Position, Range
from outline_lens.parsers.language_configs import (
    get_config_for_language,
    get_language_for_file,
    get_supported_extensions,
    get_vue_script_language,
)

logger = logging.getLogger(__name__)

_SCRIPT_BLOCK_RE = re.compile(r'<script\b([^>]*)>([\s\S]*?)</script>', re.IGNORECASE)
_LANG_ATTRIBUTE_RE = re.compile(r'\blang\s*=\s*["\']?([\w-]+)', re.IGNORECASE)

_CALLEE_TYPES = ('identifier', 'member_expression')


class TreeSitterOutlineProvider(IOutlineProvider):
    """
    Outline provider built on tree-sitter grammars.

    Parsing is synchronous and CPU bound; ``get_outline`` runs it in the
    loop's default executor so that the refresh awaits a real suspension
    point. ``outline_text`` is the synchronous entry point.

    Attributes:
        MAX_FILE_SIZE_MB: Documents larger than this are outlined with a
            warning (10 MB)

    Thread Safety:
        Parsers are cached per thread, so one provider may be shared by
        several engines whose refreshes land on different executor threads.
    """

    MAX_FILE_SIZE_MB = 10

    def __init__(self):
        """Initialize the provider with an empty per-thread parser cache."""
        self._local = threading.local()
        logger.debug("TreeSitterOutlineProvider initialized")

    def can_provide(self, filepath: str) -> bool:
        """
        Determine if this provider can outline the given file.

        Fast check based on file extension lookup.

        Example:
            >>> provider = TreeSitterOutlineProvider()
            >>> provider.can_provide("App.vue")
            True
            >>> provider.can_provide("notes.txt")
            False
        """
        return get_language_for_file(filepath) is not None

    async def get_outline(self, document: Document) -> List[OutlineNode]:
        """
        Build the outline of a document off the event loop.

        Args:
            document: Document to outline

        Returns:
            Top-level outline nodes in source order

        Raises:
            OutlineError: If tree-sitter fails on the document
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.outline_text, document.path, document.text)

    def outline_text(self, filepath: str, text: str) -> List[OutlineNode]:
        """
        Build the outline of a source text.

        Args:
            filepath: Path used for language detection and error reporting
            text: Full document text

        Returns:
            Top-level outline nodes in source order; empty for unsupported
            file types

        Raises:
            OutlineError: If tree-sitter fails on the document
        """
        language = get_language_for_file(filepath)
        if language is None:
            logger.warning(f"Unsupported file type, no outline: {filepath}")
            return []

        size_mb = len(text.encode('utf-8')) / (1024 * 1024)
        if size_mb > self.MAX_FILE_SIZE_MB:
            logger.warning(
                f"Large file ({size_mb:.2f}MB): {filepath}. "
                f"Outlining may be slow."
            )

        if language == 'vue':
            return self._outline_vue(filepath, text)

        nodes = self._outline_source(filepath, language, text)
        logger.debug(f"Outlined {filepath} ({language}): {len(nodes)} top-level nodes")
        return nodes

    def get_supported_extensions(self) -> List[str]:
        """
        Return list of file extensions this provider supports.

        Returns:
            Sorted list of file extensions (with leading dots)
        """
        return sorted(get_supported_extensions())

    # =========================================================================
    # Private Helper Methods
    # =========================================================================

    def _get_parser(self, language: str):
        """
        Get or create a tree-sitter parser for the calling thread.

        Args:
            language: Grammar name (e.g., 'javascript', 'tsx')

        Returns:
            Tree-sitter parser instance
        """
        parsers = getattr(self._local, 'parsers', None)
        if parsers is None:
            parsers = self._local.parsers = {}
        if language not in parsers:
            logger.debug(f"Creating new parser for language: {language}")
            parsers[language] = get_parser(language)
        return parsers[language]

    def _outline_vue(self, filepath: str, text: str) -> List[OutlineNode]:
        """Outline every <script> block of a Vue single-file component."""
        nodes: List[OutlineNode] = []
        for match in _SCRIPT_BLOCK_RE.finditer(text):
            lang_match = _LANG_ATTRIBUTE_RE.search(match.group(1))
            language = get_vue_script_language(lang_match.group(1) if lang_match else None)

            start = match.start(2)
            line_offset = text.count('\n', 0, start)
            column_offset = start - (text.rfind('\n', 0, start) + 1)

            nodes.extend(self._outline_source(
                filepath, language, match.group(2), line_offset, column_offset
            ))

        logger.debug(f"Outlined {filepath} (vue): {len(nodes)} top-level nodes")
        return nodes

    def _outline_source(
        self,
        filepath: str,
        language: str,
        source: str,
        line_offset: int = 0,
        column_offset: int = 0,
    ) -> List[OutlineNode]:
        config = get_config_for_language(language)
        content = source.encode('utf-8')
        try:
            tree = self._get_parser(config['grammar']).parse(content)
            builder = _OutlineBuilder(content, config, line_offset, column_offset)
            return builder.build(tree.root_node)
        except Exception as e:
            logger.error(f"Outline error: {e}: {filepath}", exc_info=True)
            raise OutlineError(filepath, language, str(e)) from e


class _OutlineBuilder:
    """
    Walks one syntax tree and builds outline nodes.

    Positions are converted from tree-sitter points (row, byte column) to
    zero-based character positions, then shifted by the offset of the
    source within its document (non-zero for Vue script blocks).
    """

    def __init__(self, content: bytes, config: Dict[str, Any], line_offset: int, column_offset: int):
        self.content = content
        self.config = config
        self.line_offset = line_offset
        self.column_offset = column_offset
        self._lines = content.split(b'\n')

    def build(self, root) -> List[OutlineNode]:
        return self._collect(root, in_function=False)

    def _collect(self, node, in_function: bool, fallback_name: Optional[str] = None) -> List[OutlineNode]:
        nodes: List[OutlineNode] = []
        for child in node.named_children:
            nodes.extend(self._visit(child, in_function, fallback_name))
        return nodes

    def _visit(self, node, in_function: bool, fallback_name: Optional[str] = None) -> List[OutlineNode]:
        config = self.config
        node_type = node.type

        if node_type in config['export_types']:
            # export default function () {} has no name of its own
            default_name = 'default' if any(c.type == 'default' for c in node.children) else None
            return self._collect(node, in_function, default_name)

        if node_type in config['class_types']:
            return self._class_node(node, fallback_name)

        if node_type in config['function_types']:
            return self._function_node(node, node, OutlineKind.FUNCTION, fallback_name)

        if fallback_name and node_type in config['function_value_types']:
            # export default () => {} / export default function () {}
            return self._function_node(node, node, OutlineKind.FUNCTION, fallback_name)

        if node_type in config['variable_declaration_types']:
            return self._declarator_nodes(node, in_function)

        if in_function:
            return []

        if node_type in config['interface_types']:
            return self._named_leaf(node, OutlineKind.INTERFACE)
        if node_type in config['type_alias_types']:
            return self._named_leaf(node, OutlineKind.TYPE_ALIAS)
        if node_type in config['enum_types']:
            return self._named_leaf(node, OutlineKind.ENUM)

        if node_type in config['expression_statement_types']:
            return self._callback_node(node)

        return []

    # -------------------------------------------------------------------------
    # Node builders
    # -------------------------------------------------------------------------

    def _class_node(self, node, fallback_name: Optional[str]) -> List[OutlineNode]:
        name = self._field_text(node, 'name') or fallback_name
        if not name:
            return []

        children: List[OutlineNode] = []
        body = node.child_by_field_name('body')
        if body is not None:
            for member in body.named_children:
                if member.type in self.config['method_types']:
                    member_name = self._field_text(member, 'name')
                    if member_name:
                        kind = OutlineKind.CONSTRUCTOR if member_name == 'constructor' else OutlineKind.METHOD
                        children.extend(self._function_node(member, member, kind, member_name))
                elif member.type in self.config['field_types']:
                    field_name = self._field_text(member, 'name') or self._field_text(member, 'property')
                    if field_name:
                        children.append(OutlineNode(
                            name=field_name,
                            kind=OutlineKind.PROPERTY,
                            range=self._range(member),
                            detail=self._type_annotation(member),
                        ))

        return [OutlineNode(name=name, kind=OutlineKind.CLASS, range=self._range(node), children=children)]

    def _function_node(self, node, function, kind: OutlineKind, fallback_name: Optional[str]) -> List[OutlineNode]:
        """
        Build a function-like node.

        Args:
            node: Node whose span and name are reported
            function: Node holding the body (differs from ``node`` for
                ``const f = () => {}``)
            kind: Outline kind to report
            fallback_name: Name used when ``node`` has no name field
        """
        name = self._field_text(node, 'name') or fallback_name
        if not name:
            return []
        return [OutlineNode(
            name=name,
            kind=kind,
            range=self._range(node),
            children=self._body_children(function),
        )]

    def _declarator_nodes(self, node, in_function: bool) -> List[OutlineNode]:
        nodes: List[OutlineNode] = []
        for declarator in node.named_children:
            if declarator.type not in self.config['declarator_types']:
                continue

            name_node = declarator.child_by_field_name('name')
            if name_node is None:
                continue
            value = declarator.child_by_field_name('value')
            detail = self._type_annotation(declarator)

            if name_node.type == 'identifier':
                if value is not None and value.type in self.config['function_value_types']:
                    nodes.append(OutlineNode(
                        name=self._text(name_node),
                        kind=OutlineKind.FUNCTION,
                        range=self._range(declarator),
                        detail=detail,
                        children=self._body_children(value),
                    ))
                elif not in_function:
                    nodes.append(OutlineNode(
                        name=self._text(name_node),
                        kind=OutlineKind.VARIABLE,
                        range=self._range(declarator),
                        detail=detail,
                    ))
            elif not in_function:
                # const { a, b: c } = ... / const [x, setX] = ...
                for identifier in self._pattern_identifiers(name_node):
                    nodes.append(OutlineNode(
                        name=self._text(identifier),
                        kind=OutlineKind.VARIABLE,
                        range=self._range(identifier),
                    ))
        return nodes

    def _callback_node(self, statement) -> List[OutlineNode]:
        if not statement.named_children:
            return []
        call = statement.named_children[0]
        if call.type not in self.config['call_types']:
            return []

        callee = call.child_by_field_name('function')
        arguments = call.child_by_field_name('arguments')
        if callee is None or arguments is None or callee.type not in _CALLEE_TYPES:
            return []

        for argument in arguments.named_children:
            if argument.type in self.config['function_value_types']:
                return [OutlineNode(
                    name=f"{self._text(callee)}() callback",
                    kind=OutlineKind.FUNCTION,
                    range=self._range(statement),
                    children=self._body_children(argument),
                )]
        return []

    def _named_leaf(self, node, kind: OutlineKind) -> List[OutlineNode]:
        name = self._field_text(node, 'name')
        if not name:
            return []
        return [OutlineNode(name=name, kind=kind, range=self._range(node))]

    def _body_children(self, function) -> List[OutlineNode]:
        body = function.child_by_field_name('body')
        if body is None or body.type != 'statement_block':
            return []
        return self._collect(body, in_function=True)

    def _pattern_identifiers(self, pattern) -> List[Any]:
        """Identifiers bound by a destructuring pattern, in source order."""
        if pattern.type in ('identifier', 'shorthand_property_identifier_pattern'):
            return [pattern]
        if pattern.type in ('assignment_pattern', 'object_assignment_pattern'):
            left = pattern.child_by_field_name('left')
            return self._pattern_identifiers(left) if left is not None else []
        if pattern.type == 'pair_pattern':
            value = pattern.child_by_field_name('value')
            return self._pattern_identifiers(value) if value is not None else []

        identifiers = []
        for child in pattern.named_children:
            identifiers.extend(self._pattern_identifiers(child))
        return identifiers

    # -------------------------------------------------------------------------
    # Text and position helpers
    # -------------------------------------------------------------------------

    def _text(self, node) -> str:
        return self.content[node.start_byte:node.end_byte].decode('utf-8', errors='replace').strip()

    def _field_text(self, node, field_name: str) -> Optional[str]:
        child = node.child_by_field_name(field_name)
        if child is None:
            return None
        return self._text(child) or None

    def _type_annotation(self, node) -> str:
        annotation = node.child_by_field_name('type')
        if annotation is None:
            return ""
        return self._text(annotation).lstrip(':').strip()

    def _position(self, point) -> Position:
        row, byte_column = point
        line_bytes = self._lines[row] if row < len(self._lines) else b''
        character = len(line_bytes[:byte_column].decode('utf-8', errors='ignore'))
        if row == 0:
            character += self.column_offset
        return Position(row + self.line_offset, character)

    def _range(self, node) -> Range:
        return Range(self._position(node.start_point), self._position(node.end_point))
