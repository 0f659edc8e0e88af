"""
Core data models for OutlineLens.

This module defines the data structures shared by every stage of the
pipeline: the raw outline delivered by an outline provider, the enriched
symbol forest produced by the classifier, and the rule records used by
grouping and filtering.

All models are designed for:
- Immutability where the data is an input (frozen dataclasses)
- Serialization (JSON-compatible via to_dict/from_dict)
- Type safety (comprehensive type hints)

Positions are zero-based (line and character), matching the convention of
editor outline providers. Human-facing output converts to one-based lines.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Callable, Dict, List, Optional, Tuple


class FrameworkType(Enum):
    """
    Front-end framework flavour of a document.

    Detection only ever yields VUE, REACT or GENERAL. ANGULAR and SVELTE are
    reserved so that payloads and group configs can be keyed on them later.
    """
    VUE = "vue"
    REACT = "react"
    ANGULAR = "angular"
    SVELTE = "svelte"
    GENERAL = "general"

    def __str__(self) -> str:
        return self.value


class FrontendSymbolKind(Enum):
    """Closed enumeration of framework-aware symbol kinds."""
    # Vue
    VUE_COMPONENT = "vue-component"
    VUE_COMPOSABLE = "vue-composable"
    VUE_REF = "vue-ref"
    VUE_REACTIVE = "vue-reactive"
    VUE_COMPUTED = "vue-computed"
    VUE_WATCH = "vue-watch"
    VUE_LIFECYCLE = "vue-lifecycle"
    VUE_DIRECTIVE = "vue-directive"
    VUE_SLOT = "vue-slot"
    VUE_EMIT = "vue-emit"
    VUE_PROPS = "vue-props"

    # React
    REACT_COMPONENT = "react-component"
    REACT_HOOK = "react-hook"
    REACT_CUSTOM_HOOK = "react-custom-hook"
    REACT_STATE = "react-state"
    REACT_EFFECT = "react-effect"
    REACT_CALLBACK = "react-callback"
    REACT_MEMO = "react-memo"
    REACT_PROPS = "react-props"
    REACT_CONTEXT = "react-context"

    # Framework-neutral front-end concepts
    EVENT_HANDLER = "event-handler"
    API_CALL = "api-call"
    STATE_MANAGER = "state-manager"
    ROUTER = "router"
    MIDDLEWARE = "middleware"
    VALIDATOR = "validator"
    UTILITY = "utility"
    STYLE = "style"
    ASSET = "asset"

    # Function shapes
    ARROW_FUNCTION = "arrow-function"
    ASYNC_FUNCTION = "async-function"
    GENERATOR_FUNCTION = "generator-function"

    # DOM / CSS
    HTML_ELEMENT = "html-element"
    CSS_RULE = "css-rule"
    CSS_SELECTOR = "css-selector"

    def __str__(self) -> str:
        return self.value


class SymbolPriority(IntEnum):
    """
    Importance of a symbol, totally ordered.

    Attributes:
        CRITICAL: Component definitions
        HIGH: Hooks, composables, lifecycle hooks, effects
        MEDIUM: Event handlers, API calls, computed values, state
        LOW: Refs, reactive objects, utilities
        MINIMAL: Everything else
    """
    CRITICAL = 5
    HIGH = 4
    MEDIUM = 3
    LOW = 2
    MINIMAL = 1


class OutlineKind(Enum):
    """
    Raw outline kinds as reported by an outline provider.

    This is the generic vocabulary of editor outlines, independent of any
    framework. The classifier only branches on FUNCTION, METHOD and CLASS;
    the other members are carried through for grouping and display.
    """
    FILE = "file"
    MODULE = "module"
    NAMESPACE = "namespace"
    CLASS = "class"
    METHOD = "method"
    PROPERTY = "property"
    FIELD = "field"
    CONSTRUCTOR = "constructor"
    ENUM = "enum"
    INTERFACE = "interface"
    TYPE_ALIAS = "type-alias"
    FUNCTION = "function"
    VARIABLE = "variable"
    CONSTANT = "constant"
    OBJECT = "object"
    EVENT = "event"

    def __str__(self) -> str:
        """String representation for serialization."""
        return self.value

    @classmethod
    def from_string(cls, value: str) -> 'OutlineKind':
        """
        Create OutlineKind from string value.

        Args:
            value: String representation of the outline kind

        Returns:
            OutlineKind enum member

        Raises:
            ValueError: If value doesn't match any OutlineKind
        """
        for member in cls:
            if member.value == value.lower():
                return member
        raise ValueError(f"Invalid OutlineKind: {value}")


@dataclass(frozen=True)
class Position:
    """Zero-based line/character position inside a document."""
    line: int
    character: int = 0

    def __post_init__(self):
        if self.line < 0:
            raise ValueError(f"line must be >= 0, got {self.line}")
        if self.character < 0:
            raise ValueError(f"character must be >= 0, got {self.character}")


@dataclass(frozen=True)
class Range:
    """Half-open source span between two positions."""
    start: Position
    end: Position

    def __post_init__(self):
        if (self.end.line, self.end.character) < (self.start.line, self.start.character):
            raise ValueError(
                f"Range end ({self.end.line}:{self.end.character}) must not precede "
                f"start ({self.start.line}:{self.start.character})"
            )

    @classmethod
    def from_lines(
        cls,
        start_line: int,
        end_line: int,
        start_character: int = 0,
        end_character: int = 0,
    ) -> 'Range':
        """Shorthand for building a range from bare line/character numbers."""
        return cls(Position(start_line, start_character), Position(end_line, end_character))

    @property
    def line_span(self) -> int:
        """
        Returns number of lines covered by this range.

        Returns:
            Number of lines (inclusive)
        """
        return self.end.line - self.start.line + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start': {'line': self.start.line, 'character': self.start.character},
            'end': {'line': self.end.line, 'character': self.end.character},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Range':
        return cls(
            Position(data['start']['line'], data['start'].get('character', 0)),
            Position(data['end']['line'], data['end'].get('character', 0)),
        )


@dataclass(frozen=True)
class OutlineNode:
    """
    A raw outline entry as delivered by an outline provider.

    Attributes:
        name: Display name of the symbol (e.g., "useCounter", "onMounted() callback")
        kind: Raw outline kind
        range: Full source span of the declaration
        detail: Optional provider detail (type annotation, signature hint)
        children: Nested outline entries, in source order
    """
    name: str
    kind: OutlineKind
    range: Range
    detail: str = ""
    children: Tuple['OutlineNode', ...] = ()

    def __post_init__(self):
        """
        Validate outline data after initialization.

        Raises:
            ValueError: If any validation constraint is violated
        """
        if not self.name:
            raise ValueError("OutlineNode name cannot be empty")
        if not isinstance(self.kind, OutlineKind):
            raise ValueError(f"kind must be OutlineKind enum, got {type(self.kind)}")
        # Accept lists for convenience but store an immutable tuple
        if not isinstance(self.children, tuple):
            object.__setattr__(self, 'children', tuple(self.children))

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert OutlineNode to dictionary for serialization.

        Returns:
            Dictionary representation with all fields
        """
        return {
            'name': self.name,
            'kind': self.kind.value,
            'range': self.range.to_dict(),
            'detail': self.detail,
            'children': [c.to_dict() for c in self.children],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OutlineNode':
        """
        Create OutlineNode from dictionary.

        Args:
            data: Dictionary containing outline data

        Returns:
            OutlineNode instance

        Raises:
            ValueError: If required fields are missing or invalid
        """
        kind = data['kind']
        if isinstance(kind, str):
            kind = OutlineKind.from_string(kind)
        return cls(
            name=data['name'],
            kind=kind,
            range=Range.from_dict(data['range']),
            detail=data.get('detail') or "",
            children=tuple(cls.from_dict(c) for c in data.get('children') or ()),
        )


@dataclass(frozen=True)
class Document:
    """
    A source document: its identity (path) and full text.

    Attributes:
        path: Filesystem path or URI identifying the document
        text: Full document text
    """
    path: str
    text: str = ""

    def __post_init__(self):
        if not self.path:
            raise ValueError("Document path cannot be empty")

    @property
    def lines(self) -> List[str]:
        """Document text split on newlines (line terminators removed)."""
        return self.text.split('\n')

    @property
    def file_name(self) -> str:
        """Final path component, lower-cased for extension checks."""
        return self.path.replace('\\', '/').rsplit('/', 1)[-1].lower()


@dataclass
class SymbolContext:
    """
    Usage context of a symbol inside its document.

    Attributes:
        used_in_template: Name appears in the Vue template / a JSX return block
        used_in_events: Name is bound verbatim as an event listener
        reference_count: Whole-word occurrences minus the declaration
        usage_frequency: Reserved; not computed by the classifier
    """
    used_in_template: bool = False
    used_in_events: bool = False
    reference_count: int = 0
    usage_frequency: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'used_in_template': self.used_in_template,
            'used_in_events': self.used_in_events,
            'reference_count': self.reference_count,
            'usage_frequency': self.usage_frequency,
        }


@dataclass
class VueSymbolInfo:
    """Vue-specific payload attached to symbols of Vue documents."""
    is_composition_api: bool = False
    used_in_template: bool = False
    reactive_type: Optional[str] = None  # 'ref' | 'reactive' | 'computed'
    component_type: Optional[str] = None  # 'page' | 'layout' | 'widget'
    template_bindings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'is_composition_api': self.is_composition_api,
            'used_in_template': self.used_in_template,
            'reactive_type': self.reactive_type,
            'component_type': self.component_type,
            'template_bindings': list(self.template_bindings),
        }


@dataclass
class ReactSymbolInfo:
    """React-specific payload attached to symbols of React documents."""
    component_type: Optional[str] = None  # 'functional'
    hook_type: Optional[str] = None  # 'useState' | ... | 'custom'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'component_type': self.component_type,
            'hook_type': self.hook_type,
        }


@dataclass
class SymbolNode:
    """
    An outline node enriched with framework-aware semantics.

    Nodes form a forest: ``children`` is owned top-down and ``parent`` is a
    plain back reference to the owning node (None at the root). The back
    reference is excluded from repr, from equality and from serialization.

    Attributes:
        id: Stable identifier, ``"<name>_<start line>"``
        name: Symbol name
        kind: Raw outline kind
        frontend_kind: Semantic classification
        framework: Framework of the owning document
        priority: Importance bucket
        range: Source span
        uri: Owning document path
        level: Depth from the root (root = 0)
        signature: First source line, truncated to 100 characters
        parameters: Parameters parsed from the signature
        return_type: ``: Type`` suffix parsed from the signature, if any
        is_async / is_private / is_exported: Derived flags
        context: Usage context
        category: Coarse bucket (component/hook/event/api/style/utility)
        tags: Short labels
        complexity: 1-4, derived from the line span
        vue_info / react_info: Framework payload, at most one present
    """
    id: str
    name: str
    kind: OutlineKind
    frontend_kind: FrontendSymbolKind
    framework: FrameworkType
    priority: SymbolPriority
    range: Range
    uri: str
    level: int = 0
    parent: Optional['SymbolNode'] = field(default=None, repr=False, compare=False)
    children: List['SymbolNode'] = field(default_factory=list, repr=False)
    signature: str = ""
    parameters: List[str] = field(default_factory=list)
    return_type: Optional[str] = None
    is_async: bool = False
    is_private: bool = False
    is_exported: bool = False
    context: SymbolContext = field(default_factory=SymbolContext)
    category: str = "utility"
    tags: List[str] = field(default_factory=list)
    complexity: int = 1
    vue_info: Optional[VueSymbolInfo] = None
    react_info: Optional[ReactSymbolInfo] = None

    @property
    def start_line(self) -> int:
        return self.range.start.line

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert SymbolNode to a JSON-compatible dictionary.

        The parent is emitted as ``parent_id``; children are serialized
        recursively.
        """
        return {
            'id': self.id,
            'name': self.name,
            'kind': self.kind.value,
            'frontend_kind': self.frontend_kind.value,
            'framework': self.framework.value,
            'priority': self.priority.name,
            'range': self.range.to_dict(),
            'uri': self.uri,
            'level': self.level,
            'parent_id': self.parent.id if self.parent is not None else None,
            'signature': self.signature,
            'parameters': list(self.parameters),
            'return_type': self.return_type,
            'is_async': self.is_async,
            'is_private': self.is_private,
            'is_exported': self.is_exported,
            'context': self.context.to_dict(),
            'category': self.category,
            'tags': list(self.tags),
            'complexity': self.complexity,
            'vue_info': self.vue_info.to_dict() if self.vue_info else None,
            'react_info': self.react_info.to_dict() if self.react_info else None,
            'children': [c.to_dict() for c in self.children],
        }


SymbolPredicate = Callable[[SymbolNode], bool]
SymbolComparator = Callable[[SymbolNode, SymbolNode], int]


@dataclass(frozen=True)
class GroupDefinition:
    """
    A named bucket of symbols.

    Attributes:
        id: Stable group identifier (e.g., "vue-reactive")
        name: Display name
        emoji: Glyph prefixed to the display label
        icon: Icon token for the presentation surface
        color: Colour token for the presentation surface
        priority: Evaluation order; higher groups claim symbols first
        default_expanded: Initial expand/collapse state
        predicate: Membership test
        comparator: Optional ordering inside the bucket (cmp-style)
    """
    id: str
    name: str
    emoji: str
    icon: str
    color: str
    priority: int
    default_expanded: bool
    predicate: SymbolPredicate = field(compare=False)
    comparator: Optional[SymbolComparator] = field(default=None, compare=False)


@dataclass(frozen=True)
class GroupConfig:
    """
    Group table for one framework.

    Attributes:
        framework: Framework the table applies to
        groups: Group definitions in registration order
        catch_all_id: Group receiving symbols no predicate claimed, if any
    """
    framework: FrameworkType
    groups: Tuple[GroupDefinition, ...]
    catch_all_id: Optional[str] = None

    def __post_init__(self):
        ids = [g.id for g in self.groups]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate group ids in {self.framework.value} config")
        if self.catch_all_id is not None and self.catch_all_id not in ids:
            raise ValueError(f"catch_all_id {self.catch_all_id!r} is not a configured group")

    @property
    def ordered_groups(self) -> List[GroupDefinition]:
        """Groups sorted by descending priority (stable for equal priorities)."""
        return sorted(self.groups, key=lambda g: -g.priority)

    def get_group(self, group_id: str) -> Optional[GroupDefinition]:
        for group in self.groups:
            if group.id == group_id:
                return group
        return None


@dataclass(frozen=True)
class QuickFilter:
    """
    A named, toggleable predicate.

    Attributes:
        id: Filter identifier (e.g., "components")
        name: Display name
        icon: Icon token
        tooltip: One-line description
        predicate: Membership test
        hotkey: Single keystroke "1"-"9", if bound
    """
    id: str
    name: str
    icon: str
    tooltip: str
    predicate: SymbolPredicate = field(compare=False)
    hotkey: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'icon': self.icon,
            'tooltip': self.tooltip,
            'hotkey': self.hotkey,
        }
