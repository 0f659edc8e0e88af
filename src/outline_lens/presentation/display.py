"""
Display metadata for grouped symbols.

Computes what a presentation surface needs to draw the grouped outline:
group labels with counts, icon and colour tokens, expand state, and per
symbol a glyph-prefixed label, a ``Line N · kind`` description, a
multi-line tooltip and a navigation target. Nothing here renders; the
output is plain data (with to_dict for JSON transports).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from outline_lens.core.models import (
    FrameworkType,
    FrontendSymbolKind,
    GroupConfig,
    GroupDefinition,
    Range,
    SymbolNode,
    SymbolPriority,
)

K = FrontendSymbolKind

PRIORITY_INDICATORS = {
    SymbolPriority.CRITICAL: '🔴',
    SymbolPriority.HIGH: '🟠',
    SymbolPriority.MEDIUM: '🟡',
    SymbolPriority.LOW: '🟢',
    SymbolPriority.MINIMAL: '⚪',
}

PRIORITY_NAMES = {
    SymbolPriority.CRITICAL: '极高',
    SymbolPriority.HIGH: '高',
    SymbolPriority.MEDIUM: '中',
    SymbolPriority.LOW: '低',
    SymbolPriority.MINIMAL: '极低',
}

COMPLEXITY_NAMES = {1: '简单', 2: '中等', 3: '复杂', 4: '很复杂'}

KIND_ICONS = {
    K.VUE_COMPONENT: 'symbol-class',
    K.VUE_COMPOSABLE: 'symbol-event',
    K.VUE_REF: 'symbol-variable',
    K.VUE_REACTIVE: 'symbol-variable',
    K.VUE_COMPUTED: 'symbol-property',
    K.VUE_WATCH: 'eye',
    K.VUE_LIFECYCLE: 'symbol-event',
    K.VUE_DIRECTIVE: 'symbol-operator',
    K.VUE_SLOT: 'symbol-field',
    K.VUE_EMIT: 'symbol-event',
    K.VUE_PROPS: 'symbol-property',

    K.REACT_COMPONENT: 'symbol-class',
    K.REACT_HOOK: 'symbol-event',
    K.REACT_CUSTOM_HOOK: 'symbol-method',
    K.REACT_STATE: 'symbol-variable',
    K.REACT_EFFECT: 'symbol-event',
    K.REACT_CALLBACK: 'symbol-method',
    K.REACT_MEMO: 'symbol-property',
    K.REACT_PROPS: 'symbol-property',
    K.REACT_CONTEXT: 'symbol-namespace',

    K.EVENT_HANDLER: 'symbol-method',
    K.API_CALL: 'globe',
    K.STATE_MANAGER: 'database',
    K.ROUTER: 'symbol-namespace',
    K.MIDDLEWARE: 'symbol-interface',
    K.VALIDATOR: 'shield',
    K.UTILITY: 'tools',
    K.STYLE: 'symbol-color',
    K.ASSET: 'file-media',

    K.ARROW_FUNCTION: 'symbol-function',
    K.ASYNC_FUNCTION: 'symbol-event',
    K.GENERATOR_FUNCTION: 'symbol-method',

    K.HTML_ELEMENT: 'symbol-tag',
    K.CSS_RULE: 'symbol-color',
    K.CSS_SELECTOR: 'symbol-ruler',
}

KIND_DISPLAY_NAMES = {
    K.VUE_COMPONENT: 'Vue 组件',
    K.VUE_COMPOSABLE: '组合式函数',
    K.VUE_REF: 'Ref 响应式',
    K.VUE_REACTIVE: 'Reactive 响应式',
    K.VUE_COMPUTED: '计算属性',
    K.VUE_WATCH: '监听器',
    K.VUE_LIFECYCLE: '生命周期',
    K.VUE_DIRECTIVE: '指令',
    K.VUE_SLOT: '插槽',
    K.VUE_EMIT: '事件触发',
    K.VUE_PROPS: '属性',

    K.REACT_COMPONENT: 'React 组件',
    K.REACT_HOOK: 'React Hook',
    K.REACT_CUSTOM_HOOK: '自定义 Hook',
    K.REACT_STATE: '状态',
    K.REACT_EFFECT: '副作用',
    K.REACT_CALLBACK: '回调',
    K.REACT_MEMO: '记忆化',
    K.REACT_PROPS: '属性',
    K.REACT_CONTEXT: '上下文',

    K.EVENT_HANDLER: '事件处理',
    K.API_CALL: 'API 调用',
    K.STATE_MANAGER: '状态管理',
    K.ROUTER: '路由',
    K.MIDDLEWARE: '中间件',
    K.VALIDATOR: '验证器',
    K.UTILITY: '工具函数',
    K.STYLE: '样式',
    K.ASSET: '资源',

    K.ARROW_FUNCTION: '箭头函数',
    K.ASYNC_FUNCTION: '异步函数',
    K.GENERATOR_FUNCTION: '生成器函数',

    K.HTML_ELEMENT: 'HTML 元素',
    K.CSS_RULE: 'CSS 规则',
    K.CSS_SELECTOR: 'CSS 选择器',
}

# Only consulted for GENERAL documents
GENERAL_KIND_COLORS = {
    K.EVENT_HANDLER: 'charts.purple',
    K.API_CALL: 'charts.green',
    K.ASYNC_FUNCTION: 'charts.orange',
    K.ARROW_FUNCTION: 'charts.blue',
}


def priority_indicator(priority: SymbolPriority) -> str:
    return PRIORITY_INDICATORS.get(priority, '')


def priority_name(priority: SymbolPriority) -> str:
    return PRIORITY_NAMES.get(priority, '未知')


def complexity_name(complexity: int) -> str:
    return COMPLEXITY_NAMES.get(complexity, '未知')


def kind_icon(kind: FrontendSymbolKind) -> str:
    return KIND_ICONS.get(kind, 'symbol-function')


def kind_display_name(kind: FrontendSymbolKind) -> str:
    return KIND_DISPLAY_NAMES.get(kind, '符号')


def kind_color(kind: FrontendSymbolKind, framework: FrameworkType) -> str:
    """Colour token: framework-wide for Vue and React, per kind otherwise."""
    if framework == FrameworkType.VUE:
        return 'charts.green'
    if framework == FrameworkType.REACT:
        return 'charts.blue'
    return GENERAL_KIND_COLORS.get(kind, 'foreground')


def symbol_label(symbol: SymbolNode) -> str:
    """Glyph-prefixed label: priority, async, exported, private, template."""
    glyphs = [
        priority_indicator(symbol.priority),
        '⚡' if symbol.is_async else '',
        '📤' if symbol.is_exported else '',
        '🔒' if symbol.is_private else '',
        '🎯' if symbol.context.used_in_template else '',
    ]
    prefix = ' '.join(g for g in glyphs if g)
    return f"{prefix} {symbol.name}" if prefix else symbol.name


def symbol_description(symbol: SymbolNode) -> str:
    return f"Line {symbol.start_line + 1} · {kind_display_name(symbol.frontend_kind)}"


def build_tooltip(symbol: SymbolNode) -> str:
    """
    Build the multi-line tooltip of a symbol.

    Lines appear only when they carry information (e.g. no framework line
    for GENERAL documents, no reference line for unreferenced symbols).
    """
    lines = [
        f"📋 {symbol.name}",
        f"🔧 {kind_display_name(symbol.frontend_kind)}",
        f"📍 第 {symbol.start_line + 1} 行",
        f"⭐ 优先级: {priority_name(symbol.priority)}",
    ]

    if symbol.framework != FrameworkType.GENERAL:
        lines.append(f"⚛️ 框架: {symbol.framework.value.upper()}")

    attributes = []
    if symbol.is_async:
        attributes.append('异步')
    if symbol.is_private:
        attributes.append('私有')
    if symbol.is_exported:
        attributes.append('导出')
    if attributes:
        lines.append(f"🏷️ 属性: {', '.join(attributes)}")

    if symbol.context.used_in_template:
        lines.append('🎯 在模板中使用')
    if symbol.context.used_in_events:
        lines.append('🎪 在事件中使用')
    if symbol.context.reference_count > 0:
        lines.append(f"🔗 被引用 {symbol.context.reference_count} 次")

    if symbol.tags:
        lines.append(f"🏷️ 标签: {', '.join(symbol.tags)}")

    if symbol.signature:
        lines.append('')
        lines.append(f"📝 {symbol.signature}")

    if symbol.parameters:
        lines.append(f"📥 参数: {', '.join(symbol.parameters)}")

    if symbol.return_type:
        lines.append(f"📤 返回: {symbol.return_type}")

    lines.append(f"📊 复杂度: {complexity_name(symbol.complexity)}")

    if symbol.children:
        lines.append(f"📂 包含 {len(symbol.children)} 个子符号")

    return '\n'.join(lines)


@dataclass(frozen=True)
class NavigationTarget:
    """Document plus the selection to reveal when a symbol is activated."""
    uri: str
    selection: Range

    def to_dict(self) -> Dict[str, Any]:
        return {'uri': self.uri, 'selection': self.selection.to_dict()}


def navigation_target(symbol: SymbolNode) -> NavigationTarget:
    """Select the declaration line, from the start column to the end column."""
    start = symbol.range.start
    end_character = max(start.character, symbol.range.end.character)
    return NavigationTarget(
        uri=symbol.uri,
        selection=Range.from_lines(start.line, start.line, start.character, end_character),
    )


@dataclass
class SymbolView:
    """Presentation record for one symbol (and, recursively, its children)."""
    symbol: SymbolNode
    label: str
    description: str
    tooltip: str
    icon: str
    color: str
    target: NavigationTarget
    children: List['SymbolView'] = field(default_factory=list)

    @property
    def collapsible(self) -> bool:
        return bool(self.children)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.symbol.id,
            'name': self.symbol.name,
            'label': self.label,
            'description': self.description,
            'tooltip': self.tooltip,
            'icon': self.icon,
            'color': self.color,
            'frontend_kind': self.symbol.frontend_kind.value,
            'priority': self.symbol.priority.name,
            'target': self.target.to_dict(),
            'collapsible': self.collapsible,
            'children': [c.to_dict() for c in self.children],
        }


@dataclass
class GroupView:
    """Presentation record for one non-empty group."""
    group: GroupDefinition
    label: str
    expanded: bool
    symbols: List[SymbolView] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.symbols)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.group.id,
            'name': self.group.name,
            'label': self.label,
            'icon': self.group.icon,
            'color': self.group.color,
            'expanded': self.expanded,
            'count': self.count,
            'symbols': [s.to_dict() for s in self.symbols],
        }


def build_symbol_view(symbol: SymbolNode) -> SymbolView:
    return SymbolView(
        symbol=symbol,
        label=symbol_label(symbol),
        description=symbol_description(symbol),
        tooltip=build_tooltip(symbol),
        icon=kind_icon(symbol.frontend_kind),
        color=kind_color(symbol.frontend_kind, symbol.framework),
        target=navigation_target(symbol),
        children=[build_symbol_view(child) for child in symbol.children],
    )


def group_label(group: GroupDefinition, count: int) -> str:
    return f"{group.emoji} {group.name} ({count})"


def build_group_views(
    grouped: Mapping[str, Sequence[SymbolNode]],
    config: GroupConfig,
    expand_all: bool = False,
) -> List[GroupView]:
    """
    Turn grouped symbols into presentation records.

    Args:
        grouped: Output of GroupEngine.group_symbols
        config: The group table the symbols were grouped with
        expand_all: Force every group open (used while a search is active)

    Returns:
        One GroupView per non-empty bucket, in descending group priority
    """
    views: List[GroupView] = []
    for group in config.ordered_groups:
        members = grouped.get(group.id)
        if not members:
            continue
        views.append(GroupView(
            group=group,
            label=group_label(group, len(members)),
            expanded=group.default_expanded or expand_all,
            symbols=[build_symbol_view(symbol) for symbol in members],
        ))
    return views
